import os

os.environ.setdefault("LOG_TO_FILE", "false")

from collections.abc import Callable, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session  # noqa: E402

from media.api.deps import get_db  # noqa: E402
from media.core.config import settings  # noqa: E402
from media.core.db import init_db  # noqa: E402
from media.core.security import create_access_token  # noqa: E402
from media.main import app  # noqa: E402
from media.models.auth_schemas import Principal  # noqa: E402
from media.models.user import User  # noqa: E402

from .fixtures.factories import *  # noqa: E402,F403


@pytest.fixture(scope="function")
def test_engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    with Session(engine) as session:
        init_db(session)

    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_transaction(test_engine: Engine) -> Generator[Session, None, None]:
    session = Session(test_engine)

    def override_get_db() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_db] = override_get_db

    yield session

    session.close()
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def principal_for() -> Callable[..., Principal]:
    def factory(user: User, roles: list[str] | None = None) -> Principal:
        if roles is None:
            roles = [settings.AUTHOR_ROLE]
        return Principal(email=user.email, roles=roles)

    return factory


@pytest.fixture
def token_headers_for() -> Callable[..., dict[str, str]]:
    def factory(user: User, roles: list[str] | None = None) -> dict[str, str]:
        if roles is None:
            roles = [settings.AUTHOR_ROLE]
        token = create_access_token(user.email, roles)
        return {"Authorization": f"Bearer {token}"}

    return factory
