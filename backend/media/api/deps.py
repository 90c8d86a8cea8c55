from collections.abc import Generator
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import InvalidTokenError
from pydantic import ValidationError
from sqlmodel import Session

from media.core import security
from media.core.config import settings
from media.core.db import engine
from media.models.auth_schemas import Principal, TokenPayload
from media.models.user import User
from media.services import access
from media.services import users as users_service

reusable_bearer = HTTPBearer()


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[HTTPAuthorizationCredentials, Depends(reusable_bearer)]


def get_current_principal(token: TokenDep) -> Principal:
    try:
        payload = jwt.decode(
            token.credentials, settings.SECRET_KEY, algorithms=[security.ALGORITHM]
        )
        token_data = TokenPayload(**payload)
        if token_data.sub is None:
            raise InvalidTokenError("Token has no subject")
        principal = Principal(email=token_data.sub, roles=token_data.roles)
    except (InvalidTokenError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def get_author_principal(principal: CurrentPrincipal) -> Principal:
    access.ensure_author_role(principal)
    return principal


AuthorPrincipal = Annotated[Principal, Depends(get_author_principal)]


def get_current_user(session: SessionDep, principal: AuthorPrincipal) -> User:
    return users_service.get_by_email(session=session, email=principal.email)


CurrentUser = Annotated[User, Depends(get_current_user)]
