from logging import getLogger

from sqlmodel import Session

from media.converters import user as user_converters
from media.crud import friend as friends_crud
from media.crud import message as messages_crud
from media.crud import post_reading as post_reading_crud
from media.crud import user as users_crud
from media.exceptions.avatar_exceptions import AvatarStorageError
from media.exceptions.base import AppError
from media.exceptions.user_exceptions import (
    EmailAlreadyExists,
    LoginAlreadyExists,
    UserEmailNotFound,
    UserLoginNotFound,
    UserNotFound,
)
from media.models.auth_schemas import Message, Principal
from media.models.user import User, UserUpdate
from media.schemas.user import UserMessagePublic, UserPublic
from media.services import access
from media.services import avatars as avatars_service

logger = getLogger(__name__)


def get_by_login(*, session: Session, login: str) -> User:
    """
    Get a user by their login name.

    Raises:
        UserLoginNotFound: If no user has this login.
    """
    user_db = users_crud.get_user_by_login(session=session, login=login)
    if user_db is None:
        raise UserLoginNotFound(login)
    return user_db


def get_by_email(*, session: Session, email: str) -> User:
    """
    Get a user by their email, the principal name used for authentication.

    Raises:
        UserEmailNotFound: If no user has this email.
    """
    user_db = users_crud.get_user_by_email(session=session, email=email)
    if user_db is None:
        raise UserEmailNotFound(email)
    return user_db


def get_user(
    *,
    session: Session,
    principal: Principal,
) -> UserPublic:
    """
    Get the profile of the authenticated user.

    Parameters:
        session (Session): Database session.
        principal (Principal): The authenticated principal.
    Returns:
        UserPublic: The public representation of the user.
    Raises:
        AccessDenied: If the principal does not hold the author role.
        UserEmailNotFound: If no user matches the principal's email.
    """
    access.ensure_author_role(principal)
    user_db = get_by_email(session=session, email=principal.email)
    return user_converters.to_public(user_db)


def update_user(
    *,
    session: Session,
    user_in: UserUpdate,
    principal: Principal,
) -> UserPublic:
    """
    Update the profile of the authenticated user.
    The id given in user_in is replaced with the caller's own id, so a caller
    can never update the row of another user.

    Parameters:
        session (Session): Database session.
        user_in (UserUpdate): The new profile data.
        principal (Principal): The authenticated principal.
    Returns:
        UserPublic: The persisted profile.
    Raises:
        AccessDenied: If the principal does not hold the author role.
        UserEmailNotFound: If no user matches the principal's email.
        EmailAlreadyExists: If the new email belongs to another user.
        LoginAlreadyExists: If the new login belongs to another user.
        AppError: For any other (unexpected) errors.
    """
    access.ensure_author_role(principal)
    user_db = get_by_email(session=session, email=principal.email)

    if user_in.id is not None and user_in.id != user_db.id:
        logger.warning(
            f"User {user_db.id} sent a profile update for user {user_in.id}, id ignored"
        )
    user_in.id = user_db.id

    if user_in.email:
        existing_user = users_crud.get_user_by_email(
            session=session, email=user_in.email
        )
        if existing_user is not None and existing_user.id != user_db.id:
            raise EmailAlreadyExists(user_in.email)
    if user_in.login:
        existing_user = users_crud.get_user_by_login(
            session=session, login=user_in.login
        )
        if existing_user is not None and existing_user.id != user_db.id:
            raise LoginAlreadyExists(user_in.login)

    try:
        users_crud.update_user(session=session, db_user=user_db, user_in=user_in)
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e
    return user_converters.to_public(user_db)


def delete_user_cascade(*, session: Session, user: User) -> None:
    """
    Delete a user together with every row referencing it: relationship edges
    in either direction, messages and read-tracking records.
    Only flushes; the caller commits.
    """
    removed_out = friends_crud.delete_all_by_user1(session=session, user_id=user.id)
    removed_in = friends_crud.delete_all_by_user2(session=session, user_id=user.id)
    messages_crud.delete_all_by_user_id(session=session, user_id=user.id)
    post_reading_crud.delete_all_by_user_id(session=session, user_id=user.id)
    users_crud.delete_user(session=session, db_user=user)
    logger.info(
        f"Deleted user {user.id} with {removed_out} outgoing and {removed_in} incoming relationships"
    )


def delete_user(
    *,
    session: Session,
    user_id: int,
    principal: Principal,
) -> Message:
    """
    Delete the profile of the authenticated user. The avatar file is removed
    once the deletion is committed.

    Parameters:
        session (Session): Database session.
        user_id (int): ID of the profile to delete, must be the caller's own.
        principal (Principal): The authenticated principal.
    Returns:
        Message: Confirmation message.
    Raises:
        AccessDenied: If the principal lacks the author role or does not own the profile.
        AppError: For any other (unexpected) errors.
    """
    access.ensure_author_role(principal)
    access.ensure_author_authenticated(
        session=session,
        target_owner_id=user_id,
        principal=principal,
    )
    user_db = get_by_email(session=session, email=principal.email)
    deleted_id = user_db.id
    try:
        delete_user_cascade(session=session, user=user_db)
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e

    # the row is gone, a leftover file must not fail the request
    try:
        avatars_service.remove_photo(deleted_id)
    except AvatarStorageError:
        logger.error(f"Avatar of deleted user {deleted_id} is still on disk")
    return Message(message="User deleted successfully.")


def find_by_id(
    *,
    session: Session,
    user_id: int,
    principal: Principal,
) -> UserPublic:
    """
    Get a user by their ID.

    Parameters:
        session (Session): Database session.
        user_id (int): ID of the user to retrieve.
        principal (Principal): The authenticated principal.
    Returns:
        UserPublic: The public representation of the user.
    Raises:
        AccessDenied: If the principal does not hold the author role.
        UserNotFound: If the user with the given ID does not exist.
    """
    access.ensure_author_role(principal)
    user_db = users_crud.get_user_by_id(session=session, user_id=user_id)
    if not user_db:
        raise UserNotFound(user_id)
    return user_converters.to_public(user_db)


def message_of_friend(
    *,
    session: Session,
    user_id: int,
    text: str,
) -> Message:
    """
    Append a message to the message collection of a user.

    Parameters:
        session (Session): Database session.
        user_id (int): ID of the receiving user.
        text (str): The message.
    Returns:
        Message: Confirmation message.
    Raises:
        UserNotFound: If the receiving user does not exist.
        AppError: For any other (unexpected) errors.
    """
    user_db = users_crud.get_user_by_id(session=session, user_id=user_id)
    if not user_db:
        raise UserNotFound(user_id)
    try:
        messages_crud.add_message(session=session, user_id=user_id, text=text)
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e
    return Message(message="Message sent successfully.")


def get_messages(
    *,
    session: Session,
    principal: Principal,
) -> list[UserMessagePublic]:
    """
    Get the messages of the authenticated user, oldest first.
    """
    access.ensure_author_role(principal)
    user_db = get_by_email(session=session, email=principal.email)
    messages = messages_crud.get_messages(session=session, user_id=user_db.id)
    return [user_converters.to_message_public(message) for message in messages]
