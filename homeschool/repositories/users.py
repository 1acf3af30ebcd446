"""User accounts: registration, login and profile maintenance."""

import logging
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from homeschool.auth.credentials import CredentialStore
from homeschool.core.errors import ConflictError, NotFoundError, UnauthorizedError
from homeschool.core.roles import UserType
from homeschool.database import transaction
from homeschool.helpers.sql import execute_partial_update
from homeschool.models.user import User

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"email", "first_name", "last_name", "avatar_url", "password"}
COLUMN_MAP = {"password": "hashed_password"}


def to_profile(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "user_type_id": user.user_type_id,
        "is_admin": user.is_admin,
        "avatar_url": user.avatar_url,
        "join_at": user.join_at,
        "last_login_at": user.last_login_at,
    }


def find_user(db: Session, username: str) -> User | None:
    return db.query(User).filter(func.lower(User.username) == username.lower()).first()


def get_user_or_404(db: Session, username: str) -> User:
    user = find_user(db, username)
    if user is None:
        raise NotFoundError(f"No user: {username}")
    return user


def register(
    db: Session,
    credentials: CredentialStore,
    *,
    username: str,
    password: str,
    email: str,
    first_name: str,
    last_name: str,
    is_admin: bool = False,
) -> dict:
    if find_user(db, username) is not None:
        raise ConflictError(f"Duplicate username: {username}")

    user = User(
        username=username,
        email=email,
        hashed_password=credentials.hash_password(password),
        first_name=first_name,
        last_name=last_name,
        user_type_id=int(UserType.UNASSIGNED),
        is_admin=is_admin,
        join_at=datetime.now(),
    )
    try:
        with transaction(db):
            db.add(user)
    except IntegrityError as exc:
        raise ConflictError(f"Duplicate username: {username}") from exc

    db.refresh(user)
    logger.info("Registered user %s", user.username)
    return to_profile(user)


def authenticate(db: Session, credentials: CredentialStore, username: str, password: str) -> dict:
    user = find_user(db, username)
    if not credentials.verify_password(password, user.hashed_password if user else None):
        logger.info("Failed login for %s", username)
        raise UnauthorizedError("Invalid username/password")
    return to_profile(user)


def record_login(db: Session, username: str) -> dict:
    user = get_user_or_404(db, username)
    with transaction(db):
        user.last_login_at = datetime.now()
    db.refresh(user)
    return to_profile(user)


def change_user_type(db: Session, username: str, user_type_id: int) -> dict:
    try:
        user_type = UserType(user_type_id)
    except ValueError as exc:
        raise NotFoundError(f"No user type: {user_type_id}") from exc

    user = get_user_or_404(db, username)
    with transaction(db):
        user.user_type_id = int(user_type)
        db.flush()
    db.refresh(user)
    logger.info("Set user type of %s to %s", user.username, user_type.name)
    return to_profile(user)


def get_all(db: Session) -> list[dict]:
    return [to_profile(user) for user in db.query(User).order_by(User.id).all()]


def get(db: Session, username: str) -> dict:
    return to_profile(get_user_or_404(db, username))


def update(db: Session, credentials: CredentialStore, username: str, data: dict) -> dict:
    """Partially update a user's profile; a new password is hashed first."""
    data = {field: value for field, value in data.items() if field in UPDATABLE_FIELDS}
    if data.get("password") is not None:
        data["password"] = credentials.hash_password(data["password"])

    with transaction(db):
        matched = execute_partial_update(
            db,
            User.__table__,
            data,
            where="lower(username) = lower(:key)",
            key=username,
            column_map=COLUMN_MAP,
        )
        if not matched:
            raise NotFoundError(f"No user: {username}")

    return get(db, username)


def delete(db: Session, username: str) -> dict:
    user = get_user_or_404(db, username)
    with transaction(db):
        if user.teacher is not None:
            for student in user.teacher.students:
                change_user_type(db, student.user.username, UserType.UNASSIGNED)
        db.delete(user)
    logger.info("Deleted user %s", username)
    return {"deleted": username}
