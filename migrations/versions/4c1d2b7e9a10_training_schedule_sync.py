"""Training schedule sync tables

Revision ID: 4c1d2b7e9a10
Revises:
Create Date: 2026-10-18 10:12:31.402117

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c1d2b7e9a10'
down_revision = None
branch_labels = None
depends_on = None

DAY_NAMES_CHECK = (
    "day_of_week IN ('Saturday','Sunday','Monday','Tuesday','Wednesday','Thursday','Friday')"
)


def upgrade():
    op.create_table(
        'coaches',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=150), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("role IN ('coach','head_coach','reception','cleaner')"),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_coaches_role', 'coaches', ['role'])

    op.create_table(
        'training_groups',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('coach_id', sa.Integer(), nullable=False),
        sa.Column('schedule_key', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['coach_id'], ['coaches.id']),
        sa.PrimaryKeyConstraint('id'),
        # closes the resolve-or-create race, losers re-read the winner
        sa.UniqueConstraint('coach_id', 'schedule_key', name='uq_training_groups_coach_schedule'),
    )
    op.create_index('idx_training_groups_coach_id', 'training_groups', ['coach_id'])

    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=150), nullable=False),
        sa.Column('contact_number', sa.String(length=30), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('coach_id', sa.Integer(), nullable=True),
        sa.Column('training_days', sa.JSON(), nullable=False),
        sa.Column('training_schedule', sa.JSON(), nullable=False),
        sa.Column('training_group_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['coach_id'], ['coaches.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['training_group_id'], ['training_groups.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_students_coach_id', 'students', ['coach_id'])
    op.create_index('ix_students_training_group_id', 'students', ['training_group_id'])

    op.create_table(
        'student_training_schedule',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('day_of_week', sa.String(length=3), nullable=False),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_student_training_schedule_student_id', 'student_training_schedule', ['student_id'])
    op.create_index('idx_student_training_schedule_day', 'student_training_schedule', ['day_of_week'])

    op.create_table(
        'training_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('coach_id', sa.Integer(), nullable=False),
        sa.Column('day_of_week', sa.String(length=10), nullable=False),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
        sa.Column('title', sa.String(length=150), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint(DAY_NAMES_CHECK),
        sa.ForeignKeyConstraint(['coach_id'], ['coaches.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_training_sessions_coach_id', 'training_sessions', ['coach_id'])
    op.create_index(
        'idx_training_sessions_slot', 'training_sessions',
        ['coach_id', 'day_of_week', 'start_time', 'end_time'],
    )


def downgrade():
    op.drop_index('idx_training_sessions_slot', table_name='training_sessions')
    op.drop_index('ix_training_sessions_coach_id', table_name='training_sessions')
    op.drop_table('training_sessions')
    op.drop_index('idx_student_training_schedule_day', table_name='student_training_schedule')
    op.drop_index('ix_student_training_schedule_student_id', table_name='student_training_schedule')
    op.drop_table('student_training_schedule')
    op.drop_index('ix_students_training_group_id', table_name='students')
    op.drop_index('ix_students_coach_id', table_name='students')
    op.drop_table('students')
    op.drop_index('idx_training_groups_coach_id', table_name='training_groups')
    op.drop_table('training_groups')
    op.drop_index('ix_coaches_role', table_name='coaches')
    op.drop_table('coaches')
