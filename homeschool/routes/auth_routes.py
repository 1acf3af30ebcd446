import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeschool.auth.credentials import CredentialStore
from homeschool.auth.dependencies import get_credential_store
from homeschool.database import get_db
from homeschool.repositories import users
from homeschool.schemas.user import LoginRequest, RegisterRequest

router = APIRouter(prefix='/auth', tags=['auth'])

logger = logging.getLogger(__name__)


@router.post('/register', status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
):
    user = users.register(db, store, **data.model_dump())
    users.record_login(db, user['username'])
    return {'token': store.issue_token(user)}


@router.post('/login')
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
):
    user = users.authenticate(db, store, data.username, data.password)
    users.record_login(db, user['username'])
    logger.info('User %s logged in', user['username'])
    return {'token': store.issue_token(user)}
