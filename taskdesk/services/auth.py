"""Authentication service with JWT session tokens and password hashing."""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import bcrypt
from jose import JWTError, jwt

from taskdesk.config import settings

ACCESS = "access"
REFRESH = "refresh"


class AuthService:
    """Service for password hashing and session token handling."""

    def __init__(self):
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.access_ttl = timedelta(minutes=settings.jwt_access_token_expire_minutes)
        self.refresh_ttl = timedelta(days=settings.jwt_refresh_token_expire_days)

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        try:
            return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def _create_token(self, user_id: UUID, token_type: str, ttl: timedelta) -> str:
        expire = datetime.now(timezone.utc) + ttl
        to_encode: dict[str, Any] = {
            "sub": str(user_id),
            "type": token_type,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def create_access_token(self, user_id: UUID) -> str:
        """Create a JWT access token."""
        return self._create_token(user_id, ACCESS, self.access_ttl)

    def create_refresh_token(self, user_id: UUID) -> str:
        """Create a JWT refresh token."""
        return self._create_token(user_id, REFRESH, self.refresh_ttl)

    def user_id_from_token(self, token: str, token_type: str = ACCESS) -> UUID | None:
        """Return the user ID of a valid token of the given type, else None."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

        if payload.get("type") != token_type:
            return None

        try:
            return UUID(payload.get("sub", ""))
        except ValueError:
            return None


auth_service = AuthService()
