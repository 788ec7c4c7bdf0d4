"""Authentication endpoints: register, login, me, logout, profile."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from greenworld.core.deps import get_current_user, get_db, get_token_service
from greenworld.core.rate_limit import auth_limit, limiter
from greenworld.core.security import TokenService
from greenworld.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    ProfileUpdate,
    RegisterRequest,
    UserSession,
)
from greenworld.schemas.common import MessageResponse
from greenworld.services import user_service

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(auth_limit)
def register(
    request: Request,
    data: RegisterRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Create an account and return it with a session token."""
    try:
        user = user_service.create_user(
            db,
            email=data.email,
            password=data.password,
            name=data.name,
            role=data.role,
            organization_name=data.organization_name,
        )
        db.commit()
    except user_service.EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AuthResponse(
        message="Account created successfully",
        user=UserSession.model_validate(user),
        token=tokens.issue(user),
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(auth_limit)
def login(
    request: Request,
    data: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Verify credentials and return a fresh session token."""
    try:
        user = user_service.authenticate(db, data.email, data.password)
    except user_service.InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))

    return AuthResponse(
        message="Login successful",
        user=UserSession.model_validate(user),
        token=tokens.issue(user),
    )


@router.get("/me", response_model=MeResponse)
def me(user: UserSession = Depends(get_current_user)):
    """Return the identity resolved from the bearer token."""
    return MeResponse(user=user)


@router.post("/logout", response_model=MessageResponse)
def logout():
    """
    Tokens are stateless; the client discards its copy.

    Kept so clients have a uniform logout call.
    """
    return MessageResponse(message="Logged out successfully")


@router.put("/profile", response_model=MeResponse)
def update_profile(
    data: ProfileUpdate,
    user: UserSession = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update name and organization name of the caller."""
    try:
        updated = user_service.update_profile(
            db,
            user.id,
            name=data.name,
            organization_name=data.organization_name,
            fields_set=data.model_fields_set,
        )
        db.commit()
    except user_service.UserNotFoundError:
        raise HTTPException(status_code=401, detail="User not found")

    return MeResponse(user=UserSession.model_validate(updated))
