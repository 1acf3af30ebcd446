from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeschool.auth.dependencies import (
    require_admin_or_teacher,
    require_correct_user_or_teacher,
    require_student_owner,
)
from homeschool.core.errors import BadRequestError, UnauthorizedError
from homeschool.core.roles import Identity
from homeschool.database import get_db
from homeschool.repositories import students, teachers
from homeschool.schemas.roles import StudentCreateRequest, StudentUpdateRequest

router = APIRouter(prefix='/students', tags=['students'])


@router.get('')
def list_students(
    identity: Identity = Depends(require_admin_or_teacher),
    db: Session = Depends(get_db),
):
    """Admins see every student; teachers see the students enrolled under them."""
    if identity.is_admin:
        return {'students': students.get_all(db)}
    teacher = teachers.get_teacher_or_404(db, identity.username)
    return {'students': students.get_all(db, teacher_id=teacher.id)}


@router.get('/{username}', dependencies=[Depends(require_correct_user_or_teacher)])
def get_student(username: str, db: Session = Depends(get_db)):
    return {'student': students.get(db, username)}


@router.post('', status_code=status.HTTP_201_CREATED)
def add_student(
    data: StudentCreateRequest,
    identity: Identity = Depends(require_admin_or_teacher),
    db: Session = Depends(get_db),
):
    teacher_id = data.teacher_id
    if not identity.is_admin:
        own_teacher_id = teachers.get_teacher_or_404(db, identity.username).id
        if teacher_id is not None and teacher_id != own_teacher_id:
            raise UnauthorizedError('Teachers can only enroll students under themselves.')
        teacher_id = own_teacher_id
    if teacher_id is None:
        raise BadRequestError('teacher_id is required')

    return {'student': students.add(db, data.username, teacher_id, data.grade)}


@router.patch('/{username}', dependencies=[Depends(require_student_owner)])
def update_student(username: str, data: StudentUpdateRequest, db: Session = Depends(get_db)):
    return {'student': students.update(db, username, data.model_dump(exclude_unset=True))}


@router.delete('/{username}', dependencies=[Depends(require_student_owner)])
def delete_student(username: str, db: Session = Depends(get_db)):
    students.delete(db, username)
    return {'message': 'Deleted.'}
