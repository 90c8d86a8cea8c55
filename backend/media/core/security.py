from datetime import datetime, timedelta, timezone

import jwt

from media.core.config import settings

ALGORITHM = "HS256"


def create_access_token(
    subject: str,
    roles: list[str],
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token for a principal.

    Parameters:
        subject (str): The principal name, the user's email.
        roles (list[str]): Roles granted to the principal.
        expires_delta (timedelta | None): Lifetime of the token. Defaults to
            ACCESS_TOKEN_EXPIRE_MINUTES.
    Returns:
        str: The encoded JWT.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"exp": expire, "sub": subject, "roles": roles}
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt
