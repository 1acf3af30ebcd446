from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeschool.auth.dependencies import (
    require_correct_user,
    require_correct_user_or_teacher,
    require_student_owner,
    require_teacher,
)
from homeschool.core.errors import NotFoundError, UnauthorizedError
from homeschool.core.roles import Identity
from homeschool.database import get_db
from homeschool.repositories import assignments, student_assignments, students, teachers
from homeschool.schemas.assignment import StudentAssignmentCreateRequest, StudentAssignmentUpdateRequest

router = APIRouter(prefix='/studentAssignments', tags=['student assignments'])

APPROVAL_FIELDS = {'is_approved', 'date_approved'}


def get_student_row(db: Session, username: str, student_assignment_id: int) -> dict:
    """The join row, provided it belongs to the student named in the path."""
    student = students.get_student_or_404(db, username)
    row = student_assignments.get(db, student_assignment_id)
    if row['student_id'] != student.id:
        raise NotFoundError(f'No student assignment: {student_assignment_id}')
    return row


@router.post('/{assignment_id}', status_code=status.HTTP_201_CREATED)
def assign_to_student(
    assignment_id: int,
    data: StudentAssignmentCreateRequest,
    identity: Identity = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    teacher = teachers.get_teacher_or_404(db, identity.username)
    assignment = assignments.get(db, assignment_id)
    if assignment['teacher_id'] != teacher.id:
        raise UnauthorizedError('Teachers can only hand out their own assignments.')

    student_assignment = student_assignments.assign(
        db,
        assignment_id=assignment_id,
        student_id=data.student_id,
        date_due=data.date_due,
    )
    return {'student_assignment': student_assignment}


@router.get('/{username}', dependencies=[Depends(require_correct_user_or_teacher)])
def list_student_assignments(username: str, db: Session = Depends(get_db)):
    return {'student_assignments': student_assignments.get_all_for_student(db, username)}


@router.get('/{username}/{student_assignment_id}', dependencies=[Depends(require_correct_user_or_teacher)])
def get_student_assignment(username: str, student_assignment_id: int, db: Session = Depends(get_db)):
    return {'student_assignment': get_student_row(db, username, student_assignment_id)}


@router.patch('/{username}/{student_assignment_id}')
def update_student_assignment(
    username: str,
    student_assignment_id: int,
    data: StudentAssignmentUpdateRequest,
    identity: Identity = Depends(require_correct_user_or_teacher),
    db: Session = Depends(get_db),
):
    fields = data.model_dump(exclude_unset=True)
    is_own_work = not identity.is_admin and identity.username.lower() == username.lower()
    if is_own_work and APPROVAL_FIELDS & fields.keys():
        raise UnauthorizedError('Students cannot approve their own work.')

    get_student_row(db, username, student_assignment_id)
    updated = student_assignments.update(db, student_assignment_id, fields)
    return {'student_assignment': updated}


@router.post('/{username}/{student_assignment_id}/submit', dependencies=[Depends(require_correct_user)])
def toggle_submit(username: str, student_assignment_id: int, db: Session = Depends(get_db)):
    get_student_row(db, username, student_assignment_id)
    return {'student_assignment': student_assignments.toggle_submit(db, student_assignment_id)}


@router.delete('/{username}/{student_assignment_id}', dependencies=[Depends(require_student_owner)])
def delete_student_assignment(username: str, student_assignment_id: int, db: Session = Depends(get_db)):
    get_student_row(db, username, student_assignment_id)
    return student_assignments.delete(db, student_assignment_id)
