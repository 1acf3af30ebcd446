from pydantic import BaseModel, ConfigDict, Field, field_validator

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"


def normalize_email(value: str) -> str:
    normalized = value.strip().lower()
    local, _, domain = normalized.partition('@')
    if not local or '.' not in domain:
        raise ValueError('Invalid email address.')
    return normalized


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    username: str = Field(min_length=1, max_length=30, pattern=USERNAME_PATTERN)
    password: str = Field(min_length=5, max_length=72)
    email: str = Field(min_length=3, max_length=254)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('first_name', 'last_name')
    @classmethod
    def strip_names(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name cannot be blank.')
        return normalized


class AdminCreateUserRequest(RegisterRequest):
    is_admin: bool = False


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserUpdateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    email: str | None = None
    first_name: str | None = Field(default=None, min_length=1, max_length=30)
    last_name: str | None = Field(default=None, min_length=1, max_length=30)
    avatar_url: str | None = None
    password: str | None = Field(default=None, min_length=5, max_length=72)

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str | None) -> str:
        if value is None:
            raise ValueError('Email cannot be null.')
        return normalize_email(value)

    @field_validator('first_name', 'last_name', 'password')
    @classmethod
    def reject_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError('Field cannot be null.')
        return value
