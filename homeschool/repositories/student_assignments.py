"""Per-student copies of assignments and their submit/approve state.

Status moves Assigned -> Submitted -> Approved and back again, but each
step is just a write of a (timestamp, flag) pair; nothing here checks the
pairs against each other.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from homeschool.core.errors import NotFoundError
from homeschool.database import transaction
from homeschool.helpers.sql import execute_partial_update
from homeschool.models.assignment import Assignment
from homeschool.models.student import Student
from homeschool.models.student_assignment import StudentAssignment
from homeschool.repositories import assignments, students

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"date_due", "date_submitted", "date_approved", "is_submitted", "is_approved"}


def to_dict(student_assignment: StudentAssignment) -> dict:
    return {
        "id": student_assignment.id,
        "assignment_id": student_assignment.assignment_id,
        "student_id": student_assignment.student_id,
        "date_assigned": student_assignment.date_assigned,
        "date_due": student_assignment.date_due,
        "date_submitted": student_assignment.date_submitted,
        "date_approved": student_assignment.date_approved,
        "is_submitted": student_assignment.is_submitted,
        "is_approved": student_assignment.is_approved,
    }


def get_student_assignment_or_404(db: Session, student_assignment_id: int) -> StudentAssignment:
    student_assignment = db.get(StudentAssignment, student_assignment_id)
    if student_assignment is None:
        raise NotFoundError(f"No student assignment: {student_assignment_id}")
    return student_assignment


def assign(db: Session, *, assignment_id: int, student_id: int, date_due: datetime | None) -> dict:
    if db.get(Assignment, assignment_id) is None:
        raise NotFoundError(f"No assignment with id: {assignment_id}")
    if db.get(Student, student_id) is None:
        raise NotFoundError(f"No student with id: {student_id}")

    student_assignment = StudentAssignment(
        assignment_id=assignment_id,
        student_id=student_id,
        date_assigned=datetime.now(),
        date_due=date_due,
        is_submitted=False,
        is_approved=False,
    )
    with transaction(db):
        db.add(student_assignment)

    db.refresh(student_assignment)
    logger.info("Assigned assignment %s to student %s", assignment_id, student_id)
    return to_dict(student_assignment)


def get(db: Session, student_assignment_id: int) -> dict:
    return to_dict(get_student_assignment_or_404(db, student_assignment_id))


def get_all_for_student(db: Session, username: str) -> list[dict]:
    student = students.get_student_or_404(db, username)
    rows = (
        db.query(StudentAssignment)
        .filter(StudentAssignment.student_id == student.id)
        .order_by(StudentAssignment.date_due, StudentAssignment.id)
        .all()
    )
    return [to_dict(row) for row in rows]


def get_all_for_assignment(db: Session, assignment_id: int) -> list[dict]:
    assignments.get_assignment_or_404(db, assignment_id)
    rows = (
        db.query(StudentAssignment)
        .filter(StudentAssignment.assignment_id == assignment_id)
        .order_by(StudentAssignment.date_due, StudentAssignment.id)
        .all()
    )
    return [to_dict(row) for row in rows]


def update(db: Session, student_assignment_id: int, data: dict) -> dict:
    """Write any mix of due/submitted/approved fields; pairing them is up to the caller."""
    data = {field: value for field, value in data.items() if field in UPDATABLE_FIELDS}
    with transaction(db):
        matched = execute_partial_update(
            db,
            StudentAssignment.__table__,
            data,
            where="id = :key",
            key=student_assignment_id,
        )
        if not matched:
            raise NotFoundError(f"No student assignment: {student_assignment_id}")

    return get(db, student_assignment_id)


def toggle_submit(db: Session, student_assignment_id: int) -> dict:
    with transaction(db):
        student_assignment = (
            db.query(StudentAssignment)
            .filter(StudentAssignment.id == student_assignment_id)
            .with_for_update()
            .first()
        )
        if student_assignment is None:
            raise NotFoundError(f"No student assignment: {student_assignment_id}")

        if student_assignment.is_submitted:
            student_assignment.date_submitted = None
            student_assignment.is_submitted = False
        else:
            student_assignment.date_submitted = datetime.now()
            student_assignment.is_submitted = True

    db.refresh(student_assignment)
    return {"id": student_assignment.id, "is_submitted": student_assignment.is_submitted}


def delete(db: Session, student_assignment_id: int) -> dict:
    student_assignment = get_student_assignment_or_404(db, student_assignment_id)
    with transaction(db):
        db.delete(student_assignment)
    return {"deleted": student_assignment_id}
