import click

from academy.extensions import db
from academy.scheduling.reconciler import sync_all_students_to_groups


def register_commands(app):
    @app.cli.command("sync-groups")
    def sync_groups_command():
        """Re-point students at the group matching their coach and schedule."""
        result = sync_all_students_to_groups()
        if not result.success:
            raise click.ClickException(f"Group sync failed: {result.error}")
        click.echo(f"✅ Synced {result.count} students")
        if result.failed_ids:
            click.echo(f"⚠️ Could not sync students: {', '.join(map(str, result.failed_ids))}")

    @app.cli.command("init-db")
    def init_db_command():
        """Create all tables (development databases without migrations)."""
        db.create_all()
        click.echo("✅ Database tables created")
