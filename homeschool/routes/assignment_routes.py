from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeschool.auth import guards
from homeschool.auth.dependencies import require_correct_user, require_teacher
from homeschool.core.errors import NotFoundError, UnauthorizedError
from homeschool.core.roles import Identity
from homeschool.database import get_db
from homeschool.repositories import assignments, student_assignments, teachers
from homeschool.schemas.assignment import AssignmentCreateRequest, AssignmentUpdateRequest

router = APIRouter(prefix='/assignments', tags=['assignments'])


def get_authored_assignment(db: Session, username: str, assignment_id: int) -> dict:
    """The assignment, provided the teacher named in the path wrote it."""
    teacher = teachers.get_teacher_or_404(db, username)
    assignment = assignments.get(db, assignment_id)
    if assignment['teacher_id'] != teacher.id:
        raise NotFoundError(f'No assignment: {assignment_id}')
    return assignment


@router.post('', status_code=status.HTTP_201_CREATED)
def create_assignment(
    data: AssignmentCreateRequest,
    identity: Identity = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    own_teacher_id = teachers.get_teacher_or_404(db, identity.username).id
    if data.teacher_id is not None and data.teacher_id != own_teacher_id:
        raise UnauthorizedError('Teachers can only create their own assignments.')

    assignment = assignments.create(
        db,
        title=data.title,
        subject_code=data.subject_code,
        instructions=data.instructions,
        teacher_id=own_teacher_id,
    )
    return {'assignment': assignment}


@router.get('/{username}', dependencies=[Depends(require_correct_user)])
def list_assignments(username: str, db: Session = Depends(get_db)):
    return {'assignments': assignments.get_all_for_teacher(db, username)}


@router.get('/{username}/{assignment_id}', dependencies=[Depends(require_correct_user)])
def get_assignment(username: str, assignment_id: int, db: Session = Depends(get_db)):
    assignment = get_authored_assignment(db, username, assignment_id)
    assignment['student_assignments'] = student_assignments.get_all_for_assignment(db, assignment_id)
    return {'assignment': assignment}


@router.patch('/{username}/{assignment_id}')
def update_assignment(
    username: str,
    assignment_id: int,
    data: AssignmentUpdateRequest,
    identity: Identity = Depends(require_correct_user),
    db: Session = Depends(get_db),
):
    if not identity.is_admin:
        guards.ensure_teacher(identity)
    get_authored_assignment(db, username, assignment_id)
    return {'assignment': assignments.update(db, assignment_id, data.model_dump(exclude_unset=True))}


@router.delete('/{username}/{assignment_id}')
def delete_assignment(
    username: str,
    assignment_id: int,
    identity: Identity = Depends(require_correct_user),
    db: Session = Depends(get_db),
):
    if not identity.is_admin:
        guards.ensure_teacher(identity)
    get_authored_assignment(db, username, assignment_id)
    return assignments.delete(db, assignment_id)
