from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from homeschool.auth.dependencies import require_logged_in
from homeschool.database import get_db
from homeschool.repositories import subjects

router = APIRouter(prefix='/subjects', tags=['subjects'])


@router.get('', dependencies=[Depends(require_logged_in)])
def list_subjects(db: Session = Depends(get_db)):
    return {'subjects': subjects.get_all(db)}
