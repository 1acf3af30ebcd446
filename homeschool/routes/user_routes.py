from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeschool.auth.credentials import CredentialStore
from homeschool.auth.dependencies import get_credential_store, require_admin, require_correct_user
from homeschool.database import get_db
from homeschool.repositories import users
from homeschool.schemas.user import AdminCreateUserRequest, UserUpdateRequest

router = APIRouter(prefix='/users', tags=['users'])


@router.post('', status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_user(
    data: AdminCreateUserRequest,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
):
    """Admin-only account creation; unlike /auth/register this may create admins."""
    user = users.register(db, store, **data.model_dump())
    return {'user': user, 'token': store.issue_token(user)}


@router.get('', dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    return {'users': users.get_all(db)}


@router.get('/{username}', dependencies=[Depends(require_correct_user)])
def get_user(username: str, db: Session = Depends(get_db)):
    return {'user': users.get(db, username)}


@router.patch('/{username}', dependencies=[Depends(require_correct_user)])
def update_user(
    username: str,
    data: UserUpdateRequest,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
):
    return {'user': users.update(db, store, username, data.model_dump(exclude_unset=True))}


@router.delete('/{username}', dependencies=[Depends(require_correct_user)])
def delete_user(username: str, db: Session = Depends(get_db)):
    users.delete(db, username)
    return {'message': 'Deleted.'}
