"""Custom exception classes."""

from fastapi import HTTPException, status


class NotewiseException(Exception):
    """Base exception for Notewise application."""

    pass


class AuthenticationError(NotewiseException):
    """Raised when authentication fails."""

    def __init__(self, detail: str = "Could not validate credentials"):
        self.detail = detail
        super().__init__(detail)

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=self.detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(NotewiseException):
    """Raised when a resource is not found."""

    def __init__(self, resource: str = "Resource", detail: str | None = None):
        self.detail = detail or f"{resource} not found"
        super().__init__(self.detail)

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=self.detail,
        )


class ConflictError(NotewiseException):
    """Raised when a request collides with one already in progress."""

    def __init__(self, detail: str = "Request already in progress"):
        self.detail = detail
        super().__init__(detail)

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=self.detail,
        )
