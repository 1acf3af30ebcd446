"""Role markers and the identity view of verified token claims."""

from dataclasses import dataclass
from enum import IntEnum


class UserType(IntEnum):
    UNASSIGNED = 1
    TEACHER = 2
    STUDENT = 3


@dataclass(frozen=True)
class Identity:
    """Decoded claims of a verified bearer token."""

    username: str
    user_type: UserType = UserType.UNASSIGNED
    is_admin: bool = False

    @property
    def is_teacher(self) -> bool:
        return self.user_type is UserType.TEACHER

    @property
    def is_student(self) -> bool:
        return self.user_type is UserType.STUDENT

    @classmethod
    def from_claims(cls, claims: dict) -> "Identity | None":
        username = claims.get("username")
        if not username:
            return None
        try:
            user_type = UserType(claims.get("user_type_id", UserType.UNASSIGNED))
        except ValueError:
            user_type = UserType.UNASSIGNED
        return cls(username=username, user_type=user_type, is_admin=bool(claims.get("is_admin", False)))
