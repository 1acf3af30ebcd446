"""Assignments authored by teachers."""

import logging

from sqlalchemy.orm import Session

from homeschool.core.errors import NotFoundError
from homeschool.database import transaction
from homeschool.helpers.sql import execute_partial_update
from homeschool.models.assignment import Assignment
from homeschool.repositories import subjects, teachers

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"title", "instructions", "subject_code"}


def to_dict(assignment: Assignment) -> dict:
    return {
        "id": assignment.id,
        "title": assignment.title,
        "subject_code": assignment.subject_code,
        "instructions": assignment.instructions,
        "teacher_id": assignment.teacher_id,
    }


def get_assignment_or_404(db: Session, assignment_id: int) -> Assignment:
    assignment = db.get(Assignment, assignment_id)
    if assignment is None:
        raise NotFoundError(f"No assignment: {assignment_id}")
    return assignment


def create(db: Session, *, title: str, subject_code: str, instructions: str | None, teacher_id: int) -> dict:
    teachers.get_by_id(db, teacher_id)
    subjects.ensure_exists(db, subject_code)

    assignment = Assignment(
        title=title,
        subject_code=subject_code,
        instructions=instructions,
        teacher_id=teacher_id,
    )
    with transaction(db):
        db.add(assignment)

    db.refresh(assignment)
    logger.info("Teacher %s created assignment %s", teacher_id, assignment.id)
    return to_dict(assignment)


def get(db: Session, assignment_id: int) -> dict:
    return to_dict(get_assignment_or_404(db, assignment_id))


def get_all_for_teacher(db: Session, username: str) -> list[dict]:
    teacher = teachers.get_teacher_or_404(db, username)
    assignments = (
        db.query(Assignment)
        .filter(Assignment.teacher_id == teacher.id)
        .order_by(Assignment.id)
        .all()
    )
    return [to_dict(assignment) for assignment in assignments]


def update(db: Session, assignment_id: int, data: dict) -> dict:
    data = {field: value for field, value in data.items() if field in UPDATABLE_FIELDS}
    if "subject_code" in data:
        subjects.ensure_exists(db, data["subject_code"])

    with transaction(db):
        matched = execute_partial_update(db, Assignment.__table__, data, where="id = :key", key=assignment_id)
        if not matched:
            raise NotFoundError(f"No assignment: {assignment_id}")

    return get(db, assignment_id)


def delete(db: Session, assignment_id: int) -> dict:
    assignment = get_assignment_or_404(db, assignment_id)
    with transaction(db):
        db.delete(assignment)
    logger.info("Deleted assignment %s", assignment_id)
    return {"deleted": assignment_id}
