"""User model definitions."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from homeschool.core.roles import UserType
from homeschool.database import Base


class User(Base):
    """Represents an account; teacher/student capabilities live in extension rows."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    user_type_id = Column(Integer, nullable=False, default=int(UserType.UNASSIGNED))
    is_admin = Column(Boolean, nullable=False, default=False)
    avatar_url = Column(String)
    join_at = Column(DateTime, nullable=False, default=datetime.now)
    last_login_at = Column(DateTime)

    teacher = relationship("Teacher", back_populates="user", uselist=False, cascade="all, delete-orphan")
    student = relationship("Student", back_populates="user", uselist=False, cascade="all, delete-orphan")
