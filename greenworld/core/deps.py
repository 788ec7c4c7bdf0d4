"""FastAPI dependencies for authentication, authorization, and database access."""

from functools import lru_cache
from typing import Annotated, Generator, Iterable

from fastapi import Depends, HTTPException, Path, Request
from sqlalchemy.orm import Session

from greenworld.core.config import settings
from greenworld.core.security import TokenService
from greenworld.db.enums import ROLES_CAN_EDIT_ANY_PROJECT, Role
from greenworld.db.session import SessionLocal
from greenworld.schemas.auth import UserSession
from greenworld.schemas.common import MAX_INT


AUTH_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "

# Ids outside the column range are rejected before they reach the database
RowId = Annotated[int, Path(ge=1, le=MAX_INT)]


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built from settings. Override in tests."""
    return TokenService(settings.JWT_SECRET, settings.JWT_EXPIRES_DAYS)


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get(AUTH_HEADER)
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None


def _resolve_user(db: Session, tokens: TokenService, token: str) -> UserSession | None:
    # Import here to avoid circular imports
    from greenworld.db.models import User

    claims = tokens.verify(token)
    if claims is None:
        return None
    user = db.get(User, claims.id)
    if user is None:
        return None
    return UserSession.model_validate(user)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> UserSession:
    """
    Get authenticated user from the bearer token.

    Validates:
    - Authorization header carries a Bearer token
    - Token signature and expiry
    - User row still exists (a deleted account is a stale session)

    Raises:
        HTTPException 401: Authentication failed
    """
    token = _bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="No token provided")

    user = _resolve_user(db, tokens, token)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user


def get_optional_user(
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> UserSession | None:
    """
    Same resolution as get_current_user, but anonymous requests proceed.

    A missing, invalid or stale token yields None instead of an error.
    """
    token = _bearer_token(request)
    if not token:
        return None
    return _resolve_user(db, tokens, token)


def require_roles(allowed_roles: Iterable[Role]):
    """
    Dependency factory for role-based authorization.

    Always paired with required auth: no identity is 401, wrong role is 403.

    Usage:
        @router.get("/users", dependencies=[Depends(require_roles(ROLES_CAN_MANAGE_USERS))])
    """
    allowed = frozenset(allowed_roles)

    def dependency(user: UserSession = Depends(get_current_user)) -> UserSession:
        if user.role not in allowed:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user

    return dependency


# =============================================================================
# Ownership helpers
# =============================================================================

def can_edit_project(user: UserSession, ngo_id: int) -> bool:
    """Owner NGO, or a role that bypasses ownership."""
    return user.role in ROLES_CAN_EDIT_ANY_PROJECT or user.id == ngo_id


def can_view_draft(user: UserSession | None, ngo_id: int) -> bool:
    """Drafts are visible to their owner and to admins only."""
    return user is not None and can_edit_project(user, ngo_id)
