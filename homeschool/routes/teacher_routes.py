from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeschool.auth.dependencies import require_admin, require_correct_user
from homeschool.database import get_db
from homeschool.repositories import teachers
from homeschool.schemas.roles import TeacherCreateRequest

router = APIRouter(prefix='/teachers', tags=['teachers'])


@router.get('', dependencies=[Depends(require_admin)])
def list_teachers(db: Session = Depends(get_db)):
    return {'teachers': teachers.get_all(db)}


@router.get('/{username}', dependencies=[Depends(require_correct_user)])
def get_teacher(username: str, db: Session = Depends(get_db)):
    return {'teacher': teachers.get(db, username)}


@router.post('', status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def add_teacher(data: TeacherCreateRequest, db: Session = Depends(get_db)):
    return {'teacher': teachers.add(db, data.username)}


@router.delete('/{username}', dependencies=[Depends(require_admin)])
def delete_teacher(username: str, db: Session = Depends(get_db)):
    teachers.delete(db, username)
    return {'message': 'Deleted.'}
