from sqlalchemy import delete
from sqlmodel import Session, col

from media.models.post_reading import PostReading


def delete_all_by_user_id(*, session: Session, user_id: int) -> int:
    """
    Delete the read-tracking records of a user.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the user.
    Returns:
        int: The number of deleted records.
    """
    result = session.execute(
        delete(PostReading)
        .where(col(PostReading.user_id) == user_id)
        .execution_options(synchronize_session="evaluate")
    )
    return result.rowcount
