from logging import getLogger

from sqlmodel import Session

from media.core.config import settings
from media.crud import user as users_crud
from media.exceptions.access_exceptions import AccessDenied
from media.models.auth_schemas import Principal

logger = getLogger(__name__)


def check_author_role(principal: Principal) -> bool:
    """
    Check whether the principal holds the role required to manage profiles.

    Parameters:
        principal (Principal): The authenticated principal.
    Returns:
        bool: True if the principal holds the author role.
    """
    return settings.AUTHOR_ROLE in principal.roles


def is_author_authenticated(
    *,
    session: Session,
    target_owner_id: int,
    principal: Principal,
) -> bool:
    """
    Check whether the principal is the owner of the target resource.
    There is no administrator override: only the owner itself matches.

    Parameters:
        session (Session): Database session.
        target_owner_id (int): ID of the user owning the target resource.
        principal (Principal): The authenticated principal.
    Returns:
        bool: True if the principal's own user ID equals target_owner_id.
    """
    user = users_crud.get_user_by_email(session=session, email=principal.email)
    return user is not None and user.id == target_owner_id


def ensure_author_role(principal: Principal) -> None:
    """
    Raises:
        AccessDenied: If the principal does not hold the author role.
    """
    if not check_author_role(principal):
        logger.warning(f"Principal {principal.email} lacks role {settings.AUTHOR_ROLE}")
        raise AccessDenied(f"Role {settings.AUTHOR_ROLE} is required.")


def ensure_author_authenticated(
    *,
    session: Session,
    target_owner_id: int,
    principal: Principal,
) -> None:
    """
    Raises:
        AccessDenied: If the principal is not the owner of the target resource.
    """
    if not is_author_authenticated(
        session=session,
        target_owner_id=target_owner_id,
        principal=principal,
    ):
        logger.warning(
            f"Principal {principal.email} denied access to user {target_owner_id}"
        )
        raise AccessDenied(
            f"Access to resources of user with id {target_owner_id} is denied."
        )
