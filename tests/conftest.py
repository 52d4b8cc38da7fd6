"""Shared fixtures: an app on in-memory SQLite, auth headers and model factories."""

import pytest
from flask_jwt_extended import create_access_token

from academy import create_app
from academy.extensions import db
from academy.models import Coach, Student, TrainingGroup
from academy.scheduling.codec import encode_schedule_key


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    token = create_access_token(identity="front-desk")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_coach(app):
    def _make(full_name="Coach Mona", role="coach"):
        coach = Coach(full_name=full_name, role=role)
        db.session.add(coach)
        db.session.commit()
        return coach
    return _make


@pytest.fixture
def make_student(app):
    def _make(full_name="Salma", coach=None, schedule=None, group=None):
        schedule = schedule or []
        student = Student(
            full_name=full_name,
            coach_id=coach.id if coach else None,
            training_days=[entry["day"] for entry in schedule if isinstance(entry, dict)],
            training_schedule=schedule,
            training_group_id=group.id if group else None,
        )
        db.session.add(student)
        db.session.commit()
        return student
    return _make


@pytest.fixture
def make_group(app):
    def _make(coach, schedule, name="Group"):
        group = TrainingGroup(coach_id=coach.id, schedule_key=encode_schedule_key(schedule), name=name)
        db.session.add(group)
        db.session.commit()
        return group
    return _make


@pytest.fixture
def sat_mon():
    return [
        {"day": "sat", "start": "16:00", "end": "18:00"},
        {"day": "mon", "start": "16:00", "end": "18:00"},
    ]
