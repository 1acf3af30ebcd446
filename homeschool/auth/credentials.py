from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from homeschool.core.roles import UserType


class CredentialStore:
    """Password hashing and bearer-token issuing, configured at construction."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_minutes: int = 0,
        work_factor: int = 12,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=work_factor)

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str | None) -> bool:
        if not hashed_password:
            # Burn a hash anyway so unknown users take as long as bad passwords.
            self.pwd_context.dummy_verify()
            return False
        return self.pwd_context.verify(plain_password, hashed_password)

    def issue_token(self, user: dict) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "username": user["username"],
            "user_type_id": int(user.get("user_type_id") or UserType.UNASSIGNED),
            "is_admin": bool(user.get("is_admin", False)),
            "iat": now,
        }
        if self.expires_minutes:
            payload["exp"] = now + timedelta(minutes=self.expires_minutes)
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str | None) -> dict | None:
        """Return the claims of a valid token; anything else is anonymous."""
        if not token:
            return None
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            return None
