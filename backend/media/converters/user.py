from media.models.message import UserMessage
from media.models.user import User
from media.schemas.user import UserMessagePublic, UserPublic


def to_public(user: User) -> UserPublic:
    User.model_validate(user)
    return UserPublic(**user.model_dump())


def to_message_public(message: UserMessage) -> UserMessagePublic:
    return UserMessagePublic(**message.model_dump())
