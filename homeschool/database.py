from contextlib import contextmanager
from threading import Lock

from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from homeschool.core import config

DEFAULT_SUBJECTS = [
    ("MATH1", "Math 1"),
    ("SCI1", "Science 1"),
    ("LANG1", "Language Arts 1"),
    ("HIST1", "History 1"),
    ("ART1", "Art 1"),
    ("MUSIC1", "Music 1"),
    ("PE1", "Physical Education 1"),
]


def build_engine(url: str, **kwargs):
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_seed_lock = Lock()
_subjects_seeded = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """Commit everything done inside the block, or roll all of it back.

    Blocks nest: only the outermost one commits or rolls back, so a
    repository call made inside another one joins its transaction.
    """
    depth = db.info.get("transaction_depth", 0)
    db.info["transaction_depth"] = depth + 1
    try:
        yield db
        if depth == 0:
            db.commit()
    except Exception:
        if depth == 0:
            db.rollback()
        raise
    finally:
        db.info["transaction_depth"] = depth


def seed_subjects(db: Session) -> int:
    from homeschool.models.subject import Subject

    existing = set(db.scalars(select(Subject.code)).all())
    missing = [Subject(code=code, name=name) for code, name in DEFAULT_SUBJECTS if code not in existing]
    with transaction(db):
        db.add_all(missing)
    return len(missing)


def init_db() -> None:
    global _subjects_seeded

    from homeschool.models import assignment, student, student_assignment, subject, teacher, user  # noqa: F401

    Base.metadata.create_all(bind=engine)

    if _subjects_seeded:
        return

    with _seed_lock:
        if _subjects_seeded:
            return

        db = SessionLocal()
        try:
            seed_subjects(db)
        finally:
            db.close()

        _subjects_seeded = True
