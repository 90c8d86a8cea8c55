from datetime import datetime

from sqlmodel import Field, SQLModel

from media.models.user import UserBase

__all__ = [
    "UserPublic",
    "UserMessageCreate",
    "UserMessagePublic",
]


class UserPublic(UserBase):
    id: int
    image: str | None


class UserMessageCreate(SQLModel):
    text: str = Field(min_length=1)


class UserMessagePublic(SQLModel):
    id: int
    text: str
    created_at: datetime
