from .auth_schemas import Message, Principal, TokenPayload
from .friend import Friend
from .message import UserMessage
from .post_reading import PostReading
from .user import User, UserBase, UserUpdate

__all__ = [
    "User",
    "UserBase",
    "UserUpdate",
    "Friend",
    "UserMessage",
    "PostReading",
    "Message",
    "Principal",
    "TokenPayload",
]
