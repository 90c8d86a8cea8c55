"""create user, friend, message and post reading tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""

import sqlalchemy as sa
import sqlmodel.sql.sqltypes
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c2a9d7b10"
down_revision = None
branch_labels = None
depends_on = None

status_friend = sa.Enum("SUBSCRIPTION", "FRIEND", name="statusfriend")


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("login", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column(
            "display_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True
        ),
        sa.Column("image", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_email"), "user", ["email"], unique=True)
    op.create_index(op.f("ix_user_login"), "user", ["login"], unique=True)

    op.create_table(
        "friend",
        sa.Column("user1", sa.Integer(), nullable=False),
        sa.Column("user2", sa.Integer(), nullable=False),
        sa.Column("status", status_friend, nullable=False),
        sa.ForeignKeyConstraint(["user1"], ["user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user2"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user1", "user2"),
    )

    op.create_table(
        "usermessage",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("text", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_usermessage_user_id"), "usermessage", ["user_id"], unique=False
    )

    op.create_table(
        "postreading",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "post_id"),
    )
    op.create_index(
        op.f("ix_postreading_post_id"), "postreading", ["post_id"], unique=False
    )


def downgrade():
    op.drop_index(op.f("ix_postreading_post_id"), table_name="postreading")
    op.drop_table("postreading")
    op.drop_index(op.f("ix_usermessage_user_id"), table_name="usermessage")
    op.drop_table("usermessage")
    op.drop_table("friend")
    status_friend.drop(op.get_bind(), checkfirst=True)
    op.drop_index(op.f("ix_user_login"), table_name="user")
    op.drop_index(op.f("ix_user_email"), table_name="user")
    op.drop_table("user")
