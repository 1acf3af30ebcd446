"""StudentAssignment model definitions."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from homeschool.database import Base


class StudentAssignment(Base):
    """One student's copy of an assignment and its submission/approval state."""
    __tablename__ = "students_assignments"

    id = Column(Integer, primary_key=True)
    assignment_id = Column(Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    date_assigned = Column(DateTime, nullable=False)
    date_due = Column(DateTime)
    date_submitted = Column(DateTime)
    date_approved = Column(DateTime)
    is_submitted = Column(Boolean, nullable=False, default=False)
    is_approved = Column(Boolean, nullable=False, default=False)

    assignment = relationship("Assignment", back_populates="student_assignments")
    student = relationship("Student", back_populates="student_assignments")
