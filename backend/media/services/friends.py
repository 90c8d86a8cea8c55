from logging import getLogger

from psycopg.errors import ForeignKeyViolation, UniqueViolation
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from media.converters import friend as friend_converters
from media.core.config import settings
from media.core.enums import StatusFriend
from media.crud import friend as friends_crud
from media.crud import user as users_crud
from media.exceptions.base import AppError
from media.exceptions.friends_exceptions import (
    EdgeAlreadyExistsError,
    EdgeNotFoundError,
    FriendshipAlreadyExistsError,
    SelfRelationshipError,
)
from media.exceptions.user_exceptions import OneOrMoreUsersNotFound, UserNotFound
from media.models.auth_schemas import Message, Principal
from media.schemas.friend import FriendPublic
from media.services import access
from media.services import users as users_service

logger = getLogger(__name__)


def _create_subscription(*, session: Session, user1: int, user2: int) -> None:
    """
    Add a SUBSCRIPTION edge from user1 to user2 to the session. Does not commit.
    Raises:
        SelfRelationshipError: If user1 and user2 are the same user.
        EdgeAlreadyExistsError: If the edge already exists.
        OneOrMoreUsersNotFound: If one or both users do not exist.
        AppError: For any other (unexpected) errors.
    """
    if user1 == user2:
        raise SelfRelationshipError(user1)
    if friends_crud.get_edge(session=session, user1=user1, user2=user2) is not None:
        raise EdgeAlreadyExistsError(user1, user2)
    try:
        friends_crud.create_edge(
            session=session,
            user1=user1,
            user2=user2,
            status=StatusFriend.SUBSCRIPTION,
        )
    except IntegrityError as e:
        session.rollback()
        if isinstance(e.orig, UniqueViolation):
            raise EdgeAlreadyExistsError(user1, user2) from e
        elif isinstance(e.orig, ForeignKeyViolation):
            raise OneOrMoreUsersNotFound([user1, user2]) from e
        else:
            raise AppError from e


def go_friend(
    *,
    session: Session,
    initiator_login: str,
    target_login: str,
) -> Message:
    """
    Invite a user to be friends: the target receives an invitation message and
    a SUBSCRIPTION edge from the initiator to the target is created.
    Both happen in one transaction.

    Raises:
        UserLoginNotFound: If either login does not exist.
        SelfRelationshipError: If a user invites themselves.
        EdgeAlreadyExistsError: If the initiator already follows the target.
        AppError: For any other (unexpected) errors.
    """
    target = users_service.get_by_login(session=session, login=target_login)
    initiator = users_service.get_by_login(session=session, login=initiator_login)

    _create_subscription(session=session, user1=initiator.id, user2=target.id)
    users_service.message_of_friend(
        session=session,
        user_id=target.id,
        text=settings.FRIEND_INVITATION_MESSAGE.format(login=initiator_login),
    )
    logger.info(f"User {initiator.id} invited user {target.id} to be friends")
    return Message(message="Friend invitation sent successfully.")


def add_friend(
    *,
    session: Session,
    user_id: int,
    target_login: str,
) -> Message:
    """
    Turn the SUBSCRIPTION edge from user_id to the target into a friendship.

    Raises:
        UserNotFound: If user_id does not exist.
        UserLoginNotFound: If the target login does not exist.
        EdgeNotFoundError: If there is no edge from user_id to the target.
        FriendshipAlreadyExistsError: If the edge already has status FRIEND.
        AppError: For any other (unexpected) errors.
    """
    if users_crud.get_user_by_id(session=session, user_id=user_id) is None:
        raise UserNotFound(user_id)
    target = users_service.get_by_login(session=session, login=target_login)
    target_id = target.id

    try:
        updated = friends_crud.update_status(
            session=session,
            user1=user_id,
            user2=target_id,
            from_status=StatusFriend.SUBSCRIPTION,
            to_status=StatusFriend.FRIEND,
        )
        if not updated:
            edge = friends_crud.get_edge(session=session, user1=user_id, user2=target_id)
            if edge is None:
                raise EdgeNotFoundError(user_id, target_id)
            raise FriendshipAlreadyExistsError(user_id, target_id)
        session.commit()
    except AppError:
        session.rollback()
        raise
    except Exception as e:
        session.rollback()
        raise AppError from e
    return Message(message="Friend added successfully.")


def add_subscription(
    *,
    session: Session,
    target_login: str,
    principal: Principal,
) -> Message:
    """
    Subscribe the authenticated user to the target user.

    Raises:
        UserEmailNotFound: If no user matches the principal's email.
        UserLoginNotFound: If the target login does not exist.
        SelfRelationshipError: If a user subscribes to themselves.
        EdgeAlreadyExistsError: If the subscription already exists.
        AppError: For any other (unexpected) errors.
    """
    access.ensure_author_role(principal)
    user = users_service.get_by_email(session=session, email=principal.email)
    target = users_service.get_by_login(session=session, login=target_login)

    _create_subscription(session=session, user1=user.id, user2=target.id)
    try:
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e
    return Message(message="Subscription added successfully.")


def delete_subscription(
    *,
    session: Session,
    target_login: str,
    principal: Principal,
) -> Message:
    """
    Remove the edge from the authenticated user to the target user.

    Raises:
        UserEmailNotFound: If no user matches the principal's email.
        UserLoginNotFound: If the target login does not exist.
        EdgeNotFoundError: If the authenticated user has no edge to the target.
        AppError: For any other (unexpected) errors.
    """
    access.ensure_author_role(principal)
    user = users_service.get_by_email(session=session, email=principal.email)
    target = users_service.get_by_login(session=session, login=target_login)

    edge = friends_crud.get_edge(session=session, user1=user.id, user2=target.id)
    if edge is None:
        raise EdgeNotFoundError(user.id, target.id)
    try:
        friends_crud.delete_edge(session=session, edge=edge)
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e
    return Message(message="Subscription removed successfully.")


def get_relationships(
    *,
    session: Session,
    principal: Principal,
    status: StatusFriend | None = None,
) -> list[FriendPublic]:
    """
    Get the outgoing edges of the authenticated user.

    Parameters:
        session (Session): Database session.
        principal (Principal): The authenticated principal.
        status (StatusFriend | None): Only return edges with this status.
    Returns:
        list[FriendPublic]: The edges, ordered by target user ID.
    """
    access.ensure_author_role(principal)
    user = users_service.get_by_email(session=session, email=principal.email)
    edges = friends_crud.get_edges_from(
        session=session,
        user_id=user.id,
        status=status,
    )
    return [friend_converters.to_public(edge) for edge in edges]
