from sqlmodel import Field, SQLModel

from media.core.enums import StatusFriend

__all__ = [
    "Friend",
]


class Friend(SQLModel, table=True):
    user1: int = Field(foreign_key="user.id", primary_key=True, ondelete="CASCADE")
    user2: int = Field(foreign_key="user.id", primary_key=True, ondelete="CASCADE")

    status: StatusFriend = Field(default=StatusFriend.SUBSCRIPTION)
