from fastapi import status

from .base import ClientError


class AccessDenied(ClientError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Access denied."
