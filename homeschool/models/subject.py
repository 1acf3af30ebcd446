"""Subject registry."""

from sqlalchemy import Column, String

from homeschool.database import Base


class Subject(Base):
    __tablename__ = "subjects"

    code = Column(String, primary_key=True)
    name = Column(String, nullable=False)
