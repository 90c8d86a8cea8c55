import logging

from fastapi import status

from .base import AppError

__all__ = [
    "AvatarStorageError",
    "AvatarNotFound",
    "AvatarConflict",
]


class AvatarStorageError(AppError, OSError):
    """Raised when the avatar file cannot be read or written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, user_id: int):
        detail = f"Could not access the avatar of user with id {user_id}."
        super().__init__(detail)


class AvatarNotFound(AvatarStorageError):
    status_code = status.HTTP_404_NOT_FOUND
    log_level = logging.WARNING

    def __init__(self, user_id: int):
        AppError.__init__(self, f"Avatar of user with id {user_id} not found.")


class AvatarConflict(AvatarStorageError):
    """Raised when another request wrote the avatar file first."""

    status_code = status.HTTP_409_CONFLICT
    log_level = logging.WARNING

    def __init__(self, user_id: int):
        AppError.__init__(
            self, f"Avatar of user with id {user_id} is being replaced concurrently."
        )
