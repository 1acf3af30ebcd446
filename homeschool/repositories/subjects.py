from sqlalchemy.orm import Session

from homeschool.core.errors import NotFoundError
from homeschool.models.subject import Subject


def get_all(db: Session) -> list[dict]:
    return [
        {"code": subject.code, "name": subject.name}
        for subject in db.query(Subject).order_by(Subject.code).all()
    ]


def ensure_exists(db: Session, code: str) -> None:
    if db.get(Subject, code) is None:
        raise NotFoundError(f"No subject code: {code}")
