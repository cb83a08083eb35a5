"""
Domain exceptions for the API.

Every error a handler raises on purpose is an APIException: it carries an
HTTP status, a human-readable `detail` and a stable `error_code` that
clients can branch on. main.py renders them as {"detail", "error_code"}.
"""
from fastapi import HTTPException, status
from typing import Optional, Dict, Any


class APIException(HTTPException):
    """Base API exception with consistent structure."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.detail, "error_code": self.error_code}


class NotFoundError(APIException):
    def __init__(self, resource: str, identifier: str, error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found: {identifier}",
            error_code=error_code,
        )
        self.resource = resource
        self.identifier = identifier


class NoActiveChallengeError(NotFoundError):
    """The user has no challenge in progress (never started, or already finished)."""

    def __init__(self, user_id: str):
        super().__init__("Active challenge", user_id, error_code="NO_ACTIVE_CHALLENGE")


class ValidationError(APIException):
    """Request value outside what the domain accepts (422)."""

    def __init__(self, detail: str, field: Optional[str] = None):
        error_code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code=error_code,
        )
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.field:
            body["field"] = self.field
        return body


class UnauthorizedError(APIException):
    """Missing or unusable Supabase access token."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(APIException):
    def __init__(self, detail: str = "Access denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN",
        )


class ConflictError(APIException):
    def __init__(self, detail: str, error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code,
        )


class SessionAlreadyCompletedError(ConflictError):
    def __init__(self, session_id: str):
        super().__init__(
            f"Workout session already completed: {session_id}",
            error_code="SESSION_ALREADY_COMPLETED",
        )
        self.session_id = session_id
