from sqlmodel import Field, SQLModel

__all__ = [
    "PostReading",
]


# Marks a post as read by a user. Posts are owned by the posts subsystem,
# so post_id is not a foreign key here.
class PostReading(SQLModel, table=True):
    user_id: int = Field(foreign_key="user.id", primary_key=True, ondelete="CASCADE")
    post_id: int = Field(primary_key=True, index=True)
