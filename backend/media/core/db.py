from sqlmodel import Session, SQLModel, create_engine

from media import models  # noqa: F401  # registers every table on the metadata
from media.core.config import settings

engine = create_engine(str(settings.SQLALCHEMY_DATABASE_URI))


def init_db(session: Session) -> None:
    """
    Create the tables on the engine bound to the session.

    Tables should normally be created with Alembic migrations;
    this is used for local development and tests.
    """
    SQLModel.metadata.create_all(session.get_bind())
