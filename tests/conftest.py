import os
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ.setdefault('JWT_SECRET_KEY', 'test-secret')
os.environ.setdefault('BCRYPT_WORK_FACTOR', '4')

from homeschool.auth.credentials import CredentialStore  # noqa: E402
from homeschool.auth.dependencies import get_credential_store  # noqa: E402
from homeschool.database import Base, get_db, seed_subjects  # noqa: E402
from homeschool.main import app  # noqa: E402
from homeschool.models import assignment, student, student_assignment, subject, teacher, user  # noqa: E402,F401
from homeschool.repositories import assignments, students, teachers, users  # noqa: E402

TEST_SECRET = 'test-secret'


@pytest.fixture
def engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    seed_subjects(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def credentials() -> CredentialStore:
    return CredentialStore(secret_key=TEST_SECRET, work_factor=4)


def register_user(db, credentials, username: str, is_admin: bool = False) -> dict:
    return users.register(
        db,
        credentials,
        username=username,
        password=f'password-{username}',
        email=f'{username}@email.com',
        first_name=f'{username.upper()}F',
        last_name=f'{username.upper()}L',
        is_admin=is_admin,
    )


@pytest.fixture
def seeded(db, credentials):
    """u1-u3 unassigned, u4 a teacher, u5 u4's student in grade 3, a1 an admin."""
    for username in ('u1', 'u2', 'u3', 'u4', 'u5'):
        register_user(db, credentials, username)
    register_user(db, credentials, 'a1', is_admin=True)

    teacher = teachers.add(db, 'u4')
    student = students.add(db, 'u5', teacher['teacher_id'], '3')
    first_assignment = assignments.create(
        db,
        title='Assignment1',
        subject_code='HIST1',
        instructions='Instructions for Assignment 1',
        teacher_id=teacher['teacher_id'],
    )
    return SimpleNamespace(
        teacher_id=teacher['teacher_id'],
        student_id=student['student_id'],
        assignment_id=first_assignment['id'],
    )


@pytest.fixture
def client(session_factory, db, credentials):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_credential_store] = lambda: credentials
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def tokens(seeded, credentials) -> dict:
    claims = {
        'u1': {'username': 'u1', 'user_type_id': 1, 'is_admin': False},
        'u2': {'username': 'u2', 'user_type_id': 1, 'is_admin': False},
        'u4': {'username': 'u4', 'user_type_id': 2, 'is_admin': False},
        'u5': {'username': 'u5', 'user_type_id': 3, 'is_admin': False},
        'a1': {'username': 'a1', 'user_type_id': 1, 'is_admin': True},
    }
    return {username: credentials.issue_token(claim) for username, claim in claims.items()}