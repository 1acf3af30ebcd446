"""Authorization predicates.

Each guard either returns the identity it was given or raises
UnauthorizedError. None of them touch the database; callers resolve any
rows they need (the requesting teacher, the target student) first.
"""

from homeschool.core.errors import UnauthorizedError
from homeschool.core.roles import Identity


def ensure_logged_in(identity: Identity | None) -> Identity:
    if identity is None:
        raise UnauthorizedError()
    return identity


def ensure_admin(identity: Identity | None) -> Identity:
    if identity is None or not identity.is_admin:
        raise UnauthorizedError()
    return identity


def ensure_correct_user(identity: Identity | None, username: str) -> Identity:
    if identity is None:
        raise UnauthorizedError("Not logged in")
    if identity.username.lower() != username.lower() and not identity.is_admin:
        raise UnauthorizedError()
    return identity


def ensure_teacher(identity: Identity | None) -> Identity:
    if identity is None or not identity.is_teacher:
        raise UnauthorizedError("You are not logged into a Teacher account.")
    return identity


def ensure_admin_or_teacher(identity: Identity | None) -> Identity:
    if identity is None or not (identity.is_admin or identity.is_teacher):
        raise UnauthorizedError()
    return identity


def ensure_teacher_owns_student(teacher_id: int | None, student: dict) -> None:
    if teacher_id is None or student["teacher_id"] != teacher_id:
        raise UnauthorizedError("Student does not belong to this teacher.")
