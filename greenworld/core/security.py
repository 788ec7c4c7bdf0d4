"""Security utilities for bearer session tokens and password hashing."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from greenworld.db.enums import Role


TOKEN_ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried inside a verified session token."""

    id: int
    email: str
    role: Role


# =============================================================================
# Session Token (JWT in Authorization header)
# =============================================================================

class TokenService:
    """
    Issues and verifies signed session tokens.

    The secret and validity window are passed in explicitly so that each
    app instance (and each test) can run with its own key.
    """

    def __init__(self, secret: str, expires_days: int = 7):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self.expires_in = timedelta(days=expires_days)

    def issue(self, user) -> str:
        """
        Create a signed token for a user-like object (id, email, role).

        Tokens are valid for a fixed window from issuance; there is no refresh.
        """
        now = datetime.now(timezone.utc)
        role = user.role.value if isinstance(user.role, Role) else str(user.role)
        payload = {
            "id": user.id,
            "email": user.email,
            "role": role,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: str) -> TokenClaims | None:
        """
        Decode and verify a token.

        Returns None for a bad signature, expired token, corrupt structure or
        missing claims. Never raises for malformed input.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.InvalidTokenError:
            return None

        user_id = payload.get("id")
        email = payload.get("email")
        role = payload.get("role")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            return None
        if not isinstance(email, str) or not Role.has_value(role):
            return None
        return TokenClaims(id=user_id, email=email, role=Role(role))


# =============================================================================
# Passwords
# =============================================================================

# bcrypt only hashes the first 72 bytes
PASSWORD_MAX_BYTES = 72


def password_fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= PASSWORD_MAX_BYTES


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False
