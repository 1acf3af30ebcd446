"""Teacher extension rows and the promotion/demotion of their users."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from homeschool.core.errors import BadRequestError, NotFoundError
from homeschool.core.roles import UserType
from homeschool.database import transaction
from homeschool.models.student import Student
from homeschool.models.teacher import Teacher
from homeschool.models.user import User
from homeschool.repositories import students, users

logger = logging.getLogger(__name__)


def to_summary(teacher: Teacher) -> dict:
    user = teacher.user
    return {
        "user_id": user.id,
        "teacher_id": teacher.id,
        "username": user.username,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "user_type_id": user.user_type_id,
    }


def find_teacher(db: Session, username: str) -> Teacher | None:
    return (
        db.query(Teacher)
        .join(User, Teacher.user_id == User.id)
        .filter(func.lower(User.username) == username.lower())
        .first()
    )


def get_teacher_or_404(db: Session, username: str) -> Teacher:
    teacher = find_teacher(db, username)
    if teacher is None:
        raise NotFoundError(f"No teacher: {username}")
    return teacher


def get_all(db: Session) -> list[dict]:
    return [to_summary(teacher) for teacher in db.query(Teacher).order_by(Teacher.id).all()]


def get_by_id(db: Session, teacher_id: int) -> dict:
    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        raise NotFoundError(f"No teacher with id: {teacher_id}")
    return to_summary(teacher)


def get(db: Session, username: str) -> dict:
    """Teacher profile along with the students enrolled under them."""
    teacher = get_teacher_or_404(db, username)
    roster = (
        db.query(Student)
        .filter(Student.teacher_id == teacher.id)
        .order_by(Student.grade, Student.id)
        .all()
    )
    return {
        **to_summary(teacher),
        "avatar_url": teacher.user.avatar_url,
        "join_at": teacher.user.join_at,
        "last_login_at": teacher.user.last_login_at,
        "students": [students.to_summary(student) for student in roster],
    }


def add(db: Session, username: str) -> dict:
    user = users.get_user_or_404(db, username)
    if user.teacher is not None:
        raise BadRequestError(f"{user.username} is already a teacher")
    if user.student is not None:
        raise BadRequestError(f"{user.username} is a student")

    teacher = Teacher(user=user)
    with transaction(db):
        db.add(teacher)
        users.change_user_type(db, user.username, UserType.TEACHER)

    db.refresh(teacher)
    logger.info("Promoted %s to teacher %s", user.username, teacher.id)
    return {"user_id": user.id, "teacher_id": teacher.id}


def delete(db: Session, username: str) -> dict:
    """Remove a teacher row and demote the user.

    Students enrolled under the teacher lose their student rows too, and
    their users are demoted along with the teacher's.
    """
    user = users.get_user_or_404(db, username)
    teacher = user.teacher
    if teacher is None:
        raise NotFoundError(f"No teacher: {username}")

    with transaction(db):
        for student in teacher.students:
            users.change_user_type(db, student.user.username, UserType.UNASSIGNED)
        db.delete(teacher)
        users.change_user_type(db, user.username, UserType.UNASSIGNED)

    logger.info("Demoted teacher %s", user.username)
    return {"user_id": user.id}
