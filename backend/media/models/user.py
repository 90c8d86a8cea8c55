from pydantic import EmailStr
from sqlmodel import Field, SQLModel

__all__ = [
    "UserBase",
    "UserUpdate",
    "User",
]


# Shared properties
class UserBase(SQLModel):
    login: str = Field(unique=True, index=True, min_length=1, max_length=255)
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    is_active: bool = Field(default=True)
    display_name: str | None = Field(default=None, max_length=255)


# Properties to receive via API on update. The id is accepted but never
# trusted: it is always replaced with the id of the authenticated caller.
class UserUpdate(SQLModel):
    id: int | None = None
    login: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = Field(default=None, max_length=255)
    display_name: str | None = Field(default=None, max_length=255)


# Database model, database table inferred from class name
class User(UserBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    image: str | None = Field(
        default=None,
        max_length=255,
        description="Retrieval URI of the user's avatar",
    )
