"""Authentication: password hashing, JWT and API tokens, user lookup."""

import secrets
from datetime import timedelta

import bcrypt
from jose import JWTError, jwt
from sqlmodel import Session, select

from app.config import settings
from app.models.user import User
from app.schemas.auth import TokenData
from app.utils.datetime import utc_now
from app.utils.exceptions import AuthenticationError


def get_password_hash(password: str) -> str:
    """Hash a plain text password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain text password against its bcrypt hash."""
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: User ID to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT string
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {"sub": str(user_id), "exp": utc_now() + lifetime}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenData:
    """
    Decode and validate a JWT access token.

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        raise AuthenticationError(f"Token validation failed: {e}")

    subject = payload.get("sub")
    if subject is None:
        raise AuthenticationError("Invalid token payload")
    try:
        return TokenData(user_id=int(subject))
    except ValueError:
        raise AuthenticationError("Invalid user ID in token")


def register_user(session: Session, username: str, password: str) -> User:
    """
    Create a user account.

    Raises:
        AuthenticationError: If the username is taken
    """
    existing = session.exec(select(User).where(User.username == username)).first()
    if existing:
        raise AuthenticationError("Username already registered")

    user = User(username=username, hashed_password=get_password_hash(password))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def authenticate_user(session: Session, username: str, password: str) -> User:
    """
    Look up a user by credentials.

    Raises:
        AuthenticationError: On unknown user or wrong password
    """
    user = session.exec(select(User).where(User.username == username)).first()
    if not user or not verify_password(password, user.hashed_password):
        raise AuthenticationError("Incorrect username or password")
    return user


def resolve_token(session: Session, token: str) -> User | None:
    """Find the user for a JWT or a long-lived API token."""
    try:
        token_data = decode_access_token(token)
        if token_data.user_id is not None:
            user = session.get(User, token_data.user_id)
            if user:
                return user
    except AuthenticationError:
        pass

    return session.exec(select(User).where(User.api_token == token)).first()


def issue_api_token(session: Session, user: User) -> str:
    """Generate a new API token, replacing any previous one."""
    user.api_token = secrets.token_urlsafe(32)
    session.add(user)
    session.commit()
    return user.api_token


def revoke_api_token(session: Session, user: User) -> None:
    user.api_token = None
    session.add(user)
    session.commit()
