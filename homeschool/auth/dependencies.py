from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from homeschool.auth import guards
from homeschool.auth.credentials import CredentialStore
from homeschool.core import config
from homeschool.core.errors import UnauthorizedError
from homeschool.core.roles import Identity
from homeschool.database import get_db
from homeschool.repositories import students, teachers

security = HTTPBearer(auto_error=False)


@lru_cache
def get_credential_store() -> CredentialStore:
    return CredentialStore(
        secret_key=config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
        expires_minutes=config.JWT_EXPIRES_MINUTES,
        work_factor=config.BCRYPT_WORK_FACTOR,
    )


def get_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    store: CredentialStore = Depends(get_credential_store),
) -> Identity | None:
    """Identity of the bearer token, or None for anonymous requests."""
    if credentials is None:
        return None
    claims = store.verify_token(credentials.credentials)
    if claims is None:
        return None
    return Identity.from_claims(claims)


def require_logged_in(identity: Identity | None = Depends(get_identity)) -> Identity:
    return guards.ensure_logged_in(identity)


def require_admin(identity: Identity | None = Depends(get_identity)) -> Identity:
    return guards.ensure_admin(identity)


def require_teacher(identity: Identity | None = Depends(get_identity)) -> Identity:
    return guards.ensure_teacher(identity)


def require_admin_or_teacher(identity: Identity | None = Depends(get_identity)) -> Identity:
    return guards.ensure_admin_or_teacher(identity)


def require_correct_user(username: str, identity: Identity | None = Depends(get_identity)) -> Identity:
    return guards.ensure_correct_user(identity, username)


def get_own_teacher_id(db: Session, identity: Identity) -> int | None:
    if not identity.is_teacher:
        return None
    teacher = teachers.find_teacher(db, identity.username)
    return teacher.id if teacher is not None else None


def require_correct_user_or_teacher(
    username: str,
    identity: Identity | None = Depends(get_identity),
    db: Session = Depends(get_db),
) -> Identity:
    """The user themselves, an admin, or the teacher the student belongs to."""
    identity = guards.ensure_logged_in(identity)
    if identity.is_admin or identity.username.lower() == username.lower():
        return identity
    if not identity.is_teacher:
        raise UnauthorizedError()
    student = students.get(db, username)
    guards.ensure_teacher_owns_student(get_own_teacher_id(db, identity), student)
    return identity


def require_student_owner(
    username: str,
    identity: Identity | None = Depends(get_identity),
    db: Session = Depends(get_db),
) -> Identity:
    """An admin, or the teacher the student belongs to."""
    identity = guards.ensure_admin_or_teacher(identity)
    if identity.is_admin:
        return identity
    student = students.get(db, username)
    guards.ensure_teacher_owns_student(get_own_teacher_id(db, identity), student)
    return identity
