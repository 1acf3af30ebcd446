from pydantic import BaseModel, ConfigDict, Field, field_validator


class TeacherCreateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    username: str = Field(min_length=1)


class StudentCreateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    username: str = Field(min_length=1)
    teacher_id: int | None = None
    grade: str | None = Field(default=None, max_length=10)


class StudentUpdateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    teacher_id: int | None = None
    grade: str | None = Field(default=None, max_length=10)

    @field_validator('teacher_id')
    @classmethod
    def reject_null_teacher(cls, value: int | None) -> int:
        if value is None:
            raise ValueError('Teacher id cannot be null.')
        return value
