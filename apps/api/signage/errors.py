"""Application exception types."""

from signage.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to the JSON error payload."""

    def __init__(self, status_code: int, code: str, message: str, details: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(error=message, code=code, details=details)
        super().__init__(message)


__all__ = ["ApiError"]
