from sqlalchemy import delete
from sqlmodel import Session, col, select

from media.models.message import UserMessage


def add_message(*, session: Session, user_id: int, text: str) -> UserMessage:
    """
    Append a message to a user's message collection.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the receiving user.
        text (str): The message text.
    Returns:
        UserMessage: The stored message.
    Raises:
        IntegrityError: If the user does not exist in the database.
    """
    message = UserMessage(user_id=user_id, text=text)
    session.add(message)
    session.flush()
    return message


def get_messages(*, session: Session, user_id: int) -> list[UserMessage]:
    stmt = (
        select(UserMessage)
        .where(UserMessage.user_id == user_id)
        .order_by(col(UserMessage.id))
    )
    return list(session.exec(stmt).all())


def delete_all_by_user_id(*, session: Session, user_id: int) -> int:
    result = session.execute(
        delete(UserMessage)
        .where(col(UserMessage.user_id) == user_id)
        .execution_options(synchronize_session="evaluate")
    )
    return result.rowcount
