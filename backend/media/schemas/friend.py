from sqlmodel import SQLModel

from media.core.enums import StatusFriend

__all__ = [
    "FriendPublic",
]


class FriendPublic(SQLModel):
    user1: int
    user2: int
    status: StatusFriend
