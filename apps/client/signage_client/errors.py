"""Client-side exception types."""

NETWORK_ERROR_MESSAGE = "Network error or server unavailable"


class ApiRequestError(Exception):
    """Uniform failure for any non-2xx response or transport problem.

    ``status`` is the HTTP status code, or ``0`` when no response arrived.
    """

    def __init__(self, message: str, status: int) -> None:
        self.message = message
        self.status = status
        super().__init__(message)

    @property
    def is_unauthorized(self) -> bool:
        return self.status == 401

    @property
    def is_network_error(self) -> bool:
        return self.status == 0


__all__ = ["ApiRequestError", "NETWORK_ERROR_MESSAGE"]
