from logging import getLogger
from pathlib import Path

from sqlmodel import Session

from media.converters import user as user_converters
from media.core.config import settings
from media.crud import user as users_crud
from media.exceptions.avatar_exceptions import (
    AvatarConflict,
    AvatarNotFound,
    AvatarStorageError,
)
from media.exceptions.base import AppError
from media.exceptions.user_exceptions import UserEmailNotFound
from media.models.auth_schemas import Principal
from media.schemas.user import UserPublic
from media.services import access

logger = getLogger(__name__)


def get_photo_path(user_id: int) -> Path:
    return Path(settings.USER_PHOTO_DIR) / str(user_id)


def get_photo_link(user_id: int) -> str:
    return f"/users/{user_id}"


def remove_photo(user_id: int) -> None:
    """
    Remove the avatar file of a user if there is one.

    Raises:
        AvatarStorageError: If the file exists but could not be removed.
    """
    file_path = get_photo_path(user_id)
    try:
        file_path.unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"Could not remove avatar {file_path}: {e}")
        raise AvatarStorageError(user_id) from e


def _discard_written_photo(file_path: Path) -> None:
    try:
        file_path.unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"Could not remove unsaved avatar {file_path}: {e}")


def update_user_image(
    *,
    session: Session,
    image: bytes,
    principal: Principal,
) -> UserPublic:
    """
    Store a new avatar for the authenticated user, replacing the previous one.

    Whatever is at the avatar path is removed first, whether or not the profile
    references it, and the cleared reference is saved before the new file is
    created with create-new semantics. A file written by this call is removed
    again when it could not be completed or its reference could not be saved.

    Parameters:
        session (Session): Database session.
        image (bytes): The raw image.
        principal (Principal): The authenticated principal.
    Returns:
        UserPublic: The profile with the updated avatar reference.
    Raises:
        AccessDenied: If the principal does not hold the author role.
        UserEmailNotFound: If no user matches the principal's email.
        AvatarConflict: If another request created the file in between.
        AvatarStorageError: If the file could not be removed or written.
        AppError: If the avatar reference could not be saved.
    """
    access.ensure_author_role(principal)
    user_db = users_crud.get_user_by_email(session=session, email=principal.email)
    if user_db is None:
        raise UserEmailNotFound(principal.email)
    file_path = get_photo_path(user_db.id)

    remove_photo(user_db.id)
    if user_db.image is not None:
        user_db.image = None
        try:
            session.add(user_db)
            session.commit()
        except Exception as e:
            session.rollback()
            raise AppError from e

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        f = file_path.open("xb")
    except FileExistsError as e:
        logger.warning(f"Avatar {file_path} was created by another request")
        raise AvatarConflict(user_db.id) from e
    except OSError as e:
        logger.error(f"Could not create avatar {file_path}: {e}")
        raise AvatarStorageError(user_db.id) from e

    try:
        with f:
            f.write(image)
    except OSError as e:
        logger.error(f"Could not write avatar {file_path}: {e}")
        _discard_written_photo(file_path)
        raise AvatarStorageError(user_db.id) from e

    user_db.image = get_photo_link(user_db.id)
    try:
        session.add(user_db)
        session.commit()
    except Exception as e:
        session.rollback()
        _discard_written_photo(file_path)
        raise AppError from e
    logger.info(f"Stored avatar of user {user_db.id} at {file_path}")
    return user_converters.to_public(user_db)


def get_photo_by_id(user_id: int) -> bytes:
    """
    Read the avatar of a user.

    Parameters:
        user_id (int): ID of the user.
    Returns:
        bytes: The raw image.
    Raises:
        AvatarNotFound: If the user has no avatar file.
        AvatarStorageError: If the file could not be read.
    """
    file_path = get_photo_path(user_id)
    try:
        return file_path.read_bytes()
    except FileNotFoundError as e:
        raise AvatarNotFound(user_id) from e
    except OSError as e:
        logger.error(f"Could not read avatar {file_path}: {e}")
        raise AvatarStorageError(user_id) from e
