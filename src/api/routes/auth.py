"""Authentication routes (register, login, account management).

Handlers that hash or check passwords are plain ``def`` so FastAPI runs
them in its threadpool; bcrypt would otherwise block the event loop.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_token_service, get_user_repo
from api.models import (
    ChangeEmailRequest,
    ChangePasswordRequest,
    EmailResponse,
    IdentityResponse,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    StatusResponse,
    TokenResponse,
)
from api.security import get_current_identity
from domain.model.errors import AuthError, ConflictError, NotFoundError, ValidationError
from domain.model.identity import Identity
from port.user_repository import UserRepository
from services import auth_service
from services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
):
    """Register a new user.

    Returns:
        JWT token for the new user

    Raises:
        HTTPException: 409 if email already exists, 400 if validation fails
    """
    try:
        token = auth_service.register(repo, tokens, request.email, request.password)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return TokenResponse(status=201, message="Registered", token=token)


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
):
    """Login user and return JWT token.

    Raises:
        HTTPException: 401 if credentials are invalid
    """
    try:
        token = auth_service.login(repo, tokens, request.email, request.password)
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    return TokenResponse(status=200, message="Logged in", token=token)


@router.get("/me", response_model=MeResponse)
async def get_me(identity: Identity = Depends(get_current_identity)):
    """Return the identity carried by the bearer token."""
    return MeResponse(status=200, user=IdentityResponse.from_identity(identity))


@router.put("/auth/email", response_model=EmailResponse)
def update_email(
    request: ChangeEmailRequest,
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    """Update the current user's email.

    Tokens issued before the change keep carrying the old email until they expire.
    """
    try:
        email = auth_service.change_email(repo, identity.subject_id, request.email)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return EmailResponse(status=200, message="Email updated", email=email)


@router.put("/auth/password", response_model=StatusResponse)
def update_password(
    request: ChangePasswordRequest,
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    """Update the current user's password."""
    try:
        auth_service.change_password(
            repo,
            identity.subject_id,
            current_password=request.current_password,
            new_password=request.new_password,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    return StatusResponse(status=200, message="Password updated")


@router.delete("/auth/account", response_model=StatusResponse)
async def delete_account(
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    """Delete the current user's account."""
    auth_service.delete_account(repo, identity.subject_id)
    return StatusResponse(status=200, message="Account deleted")
