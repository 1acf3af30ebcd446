from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssignmentCreateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    title: str = Field(min_length=1, max_length=100)
    subject_code: str = Field(min_length=1, max_length=10)
    instructions: str | None = None
    teacher_id: int | None = None

    @field_validator('subject_code')
    @classmethod
    def normalize_subject_code(cls, value: str) -> str:
        return value.strip().upper()


class AssignmentUpdateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    title: str | None = Field(default=None, min_length=1, max_length=100)
    subject_code: str | None = Field(default=None, min_length=1, max_length=10)
    instructions: str | None = None

    @field_validator('title')
    @classmethod
    def reject_null_title(cls, value: str | None) -> str:
        if value is None:
            raise ValueError('Title cannot be null.')
        return value

    @field_validator('subject_code')
    @classmethod
    def normalize_subject_code(cls, value: str | None) -> str:
        if value is None:
            raise ValueError('Subject code cannot be null.')
        return value.strip().upper()


class StudentAssignmentCreateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    student_id: int
    date_due: datetime


class StudentAssignmentUpdateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    date_due: datetime | None = None
    date_submitted: datetime | None = None
    date_approved: datetime | None = None
    is_submitted: bool | None = None
    is_approved: bool | None = None

    @field_validator('is_submitted', 'is_approved')
    @classmethod
    def reject_null_flags(cls, value: bool | None) -> bool:
        if value is None:
            raise ValueError('Flag cannot be null.')
        return value
