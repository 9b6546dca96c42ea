"""Authentication endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from app.api.deps import CurrentUserDep, SessionDep
from app.schemas.auth import ApiTokenResponse, Token, UserCreate, UserResponse
from app.services.auth_service import (
    authenticate_user,
    create_access_token,
    issue_api_token,
    register_user,
    revoke_api_token,
)
from app.utils.exceptions import AuthenticationError

router = APIRouter(prefix="/api/auth", tags=["authentication"])


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, session: SessionDep) -> Token:
    """
    Register a new user account.

    Returns JWT token on successful registration.
    """
    try:
        user = register_user(session, user_data.username, user_data.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.detail)

    assert user.id is not None
    return Token(access_token=create_access_token(user.id))


@router.post("/login", response_model=Token)
def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()], session: SessionDep
) -> Token:
    """
    Login with username and password.

    Returns JWT token on successful authentication.
    """
    try:
        user = authenticate_user(session, form_data.username, form_data.password)
    except AuthenticationError as e:
        raise e.to_http_exception()

    assert user.id is not None
    return Token(access_token=create_access_token(user.id))


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: CurrentUserDep) -> UserResponse:
    """Get the current authenticated user's information."""
    return UserResponse.model_validate(current_user)


@router.post("/api-token", response_model=ApiTokenResponse)
def generate_api_token(current_user: CurrentUserDep, session: SessionDep) -> ApiTokenResponse:
    """
    Generate a new long-lived API token.

    Generating a new token invalidates the previous one.
    """
    return ApiTokenResponse(api_token=issue_api_token(session, current_user))


@router.delete("/api-token", status_code=status.HTTP_204_NO_CONTENT)
def delete_api_token(current_user: CurrentUserDep, session: SessionDep) -> None:
    """Revoke the current API token."""
    revoke_api_token(session, current_user)
