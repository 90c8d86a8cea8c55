import logging

from fastapi import status


class AppError(Exception):
    """
    Base class for errors that are reported to the client.

    Subclasses set ``status_code`` and a default ``detail``; ``log_level`` is
    the level the exception handler logs the error at.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred."
    log_level: int = logging.ERROR

    def __init__(self, detail: str | None = None):
        if detail:
            self.detail = detail
        super().__init__(self.detail)

    def __str__(self) -> str:
        return self.detail


class ClientError(AppError):
    """An error caused by the request, logged as a warning."""

    status_code = status.HTTP_400_BAD_REQUEST
    log_level = logging.WARNING
