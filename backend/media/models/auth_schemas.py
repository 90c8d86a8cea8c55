from pydantic import EmailStr
from sqlmodel import Field, SQLModel

__all__ = [
    "Message",
    "TokenPayload",
    "Principal",
]


# Generic message
class Message(SQLModel):
    message: str


# Contents of JWT token
class TokenPayload(SQLModel):
    sub: str | None = Field(
        default=None, description="Subject of the token, the user's email"
    )
    roles: list[str] = Field(default_factory=list)


# Authenticated identity of the current request
class Principal(SQLModel):
    email: EmailStr
    roles: list[str] = Field(default_factory=list)
