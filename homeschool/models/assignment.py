"""Assignment model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from homeschool.database import Base


class Assignment(Base):
    """Work authored by a teacher, handed out to students via StudentAssignment."""
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    subject_code = Column(String, ForeignKey("subjects.code"), nullable=False)
    instructions = Column(Text)
    teacher_id = Column(Integer, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)

    teacher = relationship("Teacher", back_populates="assignments")
    student_assignments = relationship("StudentAssignment", back_populates="assignment", cascade="all, delete-orphan")
