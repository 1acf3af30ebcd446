"""Teacher model definitions."""

from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from homeschool.database import Base


class Teacher(Base):
    """One-to-one extension of a user promoted to teacher."""
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    user = relationship("User", back_populates="teacher")
    students = relationship("Student", back_populates="teacher", cascade="all, delete")
    assignments = relationship("Assignment", back_populates="teacher", cascade="all, delete-orphan")
