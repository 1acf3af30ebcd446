"""Student model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from homeschool.database import Base


class Student(Base):
    """One-to-one extension of a user enrolled under a teacher."""
    __tablename__ = "students"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    teacher_id = Column(Integer, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)
    grade = Column(String)

    user = relationship("User", back_populates="student")
    teacher = relationship("Teacher", back_populates="students")
    student_assignments = relationship("StudentAssignment", back_populates="student", cascade="all, delete")
