"""Student extension rows and their enrollment under a teacher."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from homeschool.core.errors import BadRequestError, NotFoundError
from homeschool.core.roles import UserType
from homeschool.database import transaction
from homeschool.helpers.sql import execute_partial_update
from homeschool.models.student import Student
from homeschool.models.teacher import Teacher
from homeschool.models.user import User
from homeschool.repositories import users

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"teacher_id", "grade"}


def to_summary(student: Student) -> dict:
    user = student.user
    return {
        "user_id": user.id,
        "student_id": student.id,
        "username": user.username,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "user_type_id": user.user_type_id,
        "teacher_id": student.teacher_id,
        "grade": student.grade,
    }


def find_student(db: Session, username: str) -> Student | None:
    return (
        db.query(Student)
        .join(User, Student.user_id == User.id)
        .filter(func.lower(User.username) == username.lower())
        .first()
    )


def get_student_or_404(db: Session, username: str) -> Student:
    student = find_student(db, username)
    if student is None:
        raise NotFoundError(f"No student: {username}")
    return student


def _get_teacher_by_id_or_404(db: Session, teacher_id: int) -> Teacher:
    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        raise NotFoundError(f"No teacher with id: {teacher_id}")
    return teacher


def get_all(db: Session, teacher_id: int | None = None) -> list[dict]:
    query = db.query(Student)
    if teacher_id is not None:
        query = query.filter(Student.teacher_id == teacher_id)
    return [to_summary(student) for student in query.order_by(Student.grade, Student.id).all()]


def get(db: Session, username: str) -> dict:
    student = get_student_or_404(db, username)
    return {
        **to_summary(student),
        "avatar_url": student.user.avatar_url,
        "join_at": student.user.join_at,
        "last_login_at": student.user.last_login_at,
    }


def add(db: Session, username: str, teacher_id: int, grade: str | None) -> dict:
    user = users.get_user_or_404(db, username)
    teacher = _get_teacher_by_id_or_404(db, teacher_id)
    if user.student is not None:
        raise BadRequestError(f"{user.username} is already a student")
    if user.teacher is not None:
        raise BadRequestError(f"{user.username} is a teacher")

    student = Student(user=user, teacher=teacher, grade=grade)
    with transaction(db):
        db.add(student)
        users.change_user_type(db, user.username, UserType.STUDENT)

    db.refresh(student)
    logger.info("Enrolled %s as student %s under teacher %s", user.username, student.id, teacher.id)
    return {
        "user_id": user.id,
        "student_id": student.id,
        "teacher_id": student.teacher_id,
        "grade": student.grade,
    }


def update(db: Session, username: str, data: dict) -> dict:
    data = {field: value for field, value in data.items() if field in UPDATABLE_FIELDS}
    user = users.get_user_or_404(db, username)
    if user.student is None:
        raise NotFoundError(f"No student: {username}")
    if "teacher_id" in data:
        _get_teacher_by_id_or_404(db, data["teacher_id"])

    with transaction(db):
        execute_partial_update(db, Student.__table__, data, where="id = :key", key=user.student.id)

    return get(db, username)


def delete(db: Session, username: str) -> dict:
    user = users.get_user_or_404(db, username)
    student = user.student
    if student is None:
        raise NotFoundError(f"No student: {username}")

    with transaction(db):
        db.delete(student)
        users.change_user_type(db, user.username, UserType.UNASSIGNED)

    logger.info("Removed student %s", user.username)
    return {"user_id": user.id}
