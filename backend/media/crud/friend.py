from sqlalchemy import delete, update
from sqlmodel import Session, col, select

from media.core.enums import StatusFriend
from media.models.friend import Friend


def create_edge(
    *,
    session: Session,
    user1: int,
    user2: int,
    status: StatusFriend,
) -> Friend:
    """
    Create a directed relationship edge from user1 to user2.

    Parameters:
        session (Session): The database session.
        user1 (int): The ID of the initiating user.
        user2 (int): The ID of the target user.
        status (StatusFriend): The initial status of the edge.
    Returns:
        Friend: The created edge.
    Raises:
        IntegrityError: If an edge already exists between the users in this direction,
        or if either user does not exist in the database.
    """
    edge = Friend(user1=user1, user2=user2, status=status)
    session.add(edge)
    session.flush()
    return edge


def get_edge(
    *,
    session: Session,
    user1: int,
    user2: int,
) -> Friend | None:
    """
    Get the edge from user1 to user2.

    Parameters:
        session (Session): The database session.
        user1 (int): The ID of the initiating user.
        user2 (int): The ID of the target user.
    Returns:
        Friend | None: The edge if it exists, otherwise None.
    """
    return session.exec(
        select(Friend).where(
            Friend.user1 == user1,
            Friend.user2 == user2,
        )
    ).one_or_none()


def get_edges_from(
    *,
    session: Session,
    user_id: int,
    status: StatusFriend | None = None,
) -> list[Friend]:
    """
    Get the outgoing edges of a user, optionally filtered by status.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the initiating user.
        status (StatusFriend | None): Only return edges with this status.
    Returns:
        list[Friend]: The edges ordered by target user ID.
    """
    stmt = select(Friend).where(Friend.user1 == user_id)
    if status is not None:
        stmt = stmt.where(Friend.status == status)
    stmt = stmt.order_by(col(Friend.user2))
    return list(session.exec(stmt).all())


def set_status(
    *,
    session: Session,
    edge: Friend,
    status: StatusFriend,
) -> Friend:
    """
    Overwrite the status of an edge that was already loaded into the session.

    This does not check the status the edge had in the database, so two
    requests holding the same edge can both succeed. Status transitions made
    on behalf of users go through `update_status` instead; this is for
    callers that own the edge exclusively, such as data fixes.
    """
    edge.status = status
    session.add(edge)
    session.flush()
    return edge


def update_status(
    *,
    session: Session,
    user1: int,
    user2: int,
    from_status: StatusFriend,
    to_status: StatusFriend,
) -> bool:
    """
    Move the edge from user1 to user2 from one status to another.
    The update only applies when the stored status still equals from_status,
    so two concurrent transitions cannot both succeed.

    Parameters:
        session (Session): The database session.
        user1 (int): The ID of the initiating user.
        user2 (int): The ID of the target user.
        from_status (StatusFriend): The status the edge must currently have.
        to_status (StatusFriend): The new status.
    Returns:
        bool: True if the edge was updated, False if no edge with from_status exists.
    """
    result = session.execute(
        update(Friend)
        .where(
            col(Friend.user1) == user1,
            col(Friend.user2) == user2,
            col(Friend.status) == from_status,
        )
        .values(status=to_status)
        .execution_options(synchronize_session="evaluate")
    )
    return result.rowcount == 1


def delete_edge(
    *,
    session: Session,
    edge: Friend,
) -> Friend:
    session.delete(edge)
    session.flush()
    return edge


def delete_all_by_user1(*, session: Session, user_id: int) -> int:
    """
    Delete every edge initiated by a user.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the user.
    Returns:
        int: The number of deleted edges.
    """
    result = session.execute(
        delete(Friend)
        .where(col(Friend.user1) == user_id)
        .execution_options(synchronize_session="evaluate")
    )
    return result.rowcount


def delete_all_by_user2(*, session: Session, user_id: int) -> int:
    """
    Delete every edge targeting a user.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the user.
    Returns:
        int: The number of deleted edges.
    """
    result = session.execute(
        delete(Friend)
        .where(col(Friend.user2) == user_id)
        .execution_options(synchronize_session="evaluate")
    )
    return result.rowcount
