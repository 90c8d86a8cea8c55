from collections.abc import Callable

import pytest
from psycopg.errors import ForeignKeyViolation, UniqueViolation
from pytest_mock import MockerFixture
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from media.core.config import settings
from media.core.enums import StatusFriend
from media.crud import friend as friend_crud
from media.crud import message as message_crud
from media.exceptions.access_exceptions import AccessDenied
from media.exceptions.friends_exceptions import (
    EdgeAlreadyExistsError,
    EdgeNotFoundError,
    FriendshipAlreadyExistsError,
    SelfRelationshipError,
)
from media.exceptions.user_exceptions import OneOrMoreUsersNotFound, UserLoginNotFound
from media.models.auth_schemas import Principal
from media.models.friend import Friend
from media.models.user import User
from media.services import friends as friends_services


def _principal(email: str = "alice@mail.com") -> Principal:
    return Principal(email=email, roles=[settings.AUTHOR_ROLE])


def test_add_subscription_success(
    mocker: MockerFixture,
):
    mocker.patch(
        "media.crud.user.get_user_by_email", return_value=mocker.MagicMock(id=1)
    )
    mocker.patch(
        "media.crud.user.get_user_by_login", return_value=mocker.MagicMock(id=2)
    )
    mocker.patch("media.crud.friend.get_edge", return_value=None)
    mock_create = mocker.patch("media.crud.friend.create_edge")
    mock_session = mocker.MagicMock()

    result = friends_services.add_subscription(
        session=mock_session,
        target_login="bob",
        principal=_principal(),
    )

    mock_create.assert_called_once_with(
        session=mock_session,
        user1=1,
        user2=2,
        status=StatusFriend.SUBSCRIPTION,
    )
    mock_session.commit.assert_called_once()
    assert result.message == "Subscription added successfully."


@pytest.mark.parametrize(
    "org_exc, expected_exc",
    [
        (UniqueViolation, EdgeAlreadyExistsError),
        (ForeignKeyViolation, OneOrMoreUsersNotFound),
    ],
)
def test_add_subscription_integrity_error(
    mocker: MockerFixture,
    org_exc,
    expected_exc,
):
    mocker.patch(
        "media.crud.user.get_user_by_email", return_value=mocker.MagicMock(id=1)
    )
    mocker.patch(
        "media.crud.user.get_user_by_login", return_value=mocker.MagicMock(id=2)
    )
    mocker.patch("media.crud.friend.get_edge", return_value=None)
    mock_create = mocker.patch("media.crud.friend.create_edge")
    mock_create.side_effect = IntegrityError(
        statement="Integrity error", orig=org_exc("Integrity violation"), params=None
    )
    mock_session = mocker.MagicMock()

    with pytest.raises(expected_exc):
        friends_services.add_subscription(
            session=mock_session,
            target_login="bob",
            principal=_principal(),
        )

    mock_session.rollback.assert_called_once()
    mock_session.commit.assert_not_called()


def test_add_subscription_existing_edge(
    mocker: MockerFixture,
):
    mocker.patch(
        "media.crud.user.get_user_by_email", return_value=mocker.MagicMock(id=1)
    )
    mocker.patch(
        "media.crud.user.get_user_by_login", return_value=mocker.MagicMock(id=2)
    )
    mocker.patch("media.crud.friend.get_edge", return_value=mocker.MagicMock())
    mock_create = mocker.patch("media.crud.friend.create_edge")

    with pytest.raises(EdgeAlreadyExistsError):
        friends_services.add_subscription(
            session=mocker.MagicMock(),
            target_login="bob",
            principal=_principal(),
        )

    mock_create.assert_not_called()


def test_add_subscription_to_self(
    mocker: MockerFixture,
):
    mocker.patch(
        "media.crud.user.get_user_by_email", return_value=mocker.MagicMock(id=1)
    )
    mocker.patch(
        "media.crud.user.get_user_by_login", return_value=mocker.MagicMock(id=1)
    )
    mock_create = mocker.patch("media.crud.friend.create_edge")

    with pytest.raises(SelfRelationshipError):
        friends_services.add_subscription(
            session=mocker.MagicMock(),
            target_login="alice",
            principal=_principal(),
        )

    mock_create.assert_not_called()


def test_add_subscription_requires_role(
    mocker: MockerFixture,
):
    mock_lookup = mocker.patch("media.crud.user.get_user_by_email")
    mock_create = mocker.patch("media.crud.friend.create_edge")

    with pytest.raises(AccessDenied):
        friends_services.add_subscription(
            session=mocker.MagicMock(),
            target_login="bob",
            principal=Principal(email="alice@mail.com", roles=[]),
        )

    mock_lookup.assert_not_called()
    mock_create.assert_not_called()


def test_go_friend_success(
    mocker: MockerFixture,
):
    users = {
        "alice": mocker.MagicMock(id=1),
        "bob": mocker.MagicMock(id=2),
    }
    mocker.patch(
        "media.crud.user.get_user_by_login",
        side_effect=lambda *, session, login: users.get(login),
    )
    mocker.patch("media.crud.user.get_user_by_id", return_value=users["bob"])
    mocker.patch("media.crud.friend.get_edge", return_value=None)
    mock_create = mocker.patch("media.crud.friend.create_edge")
    mock_message = mocker.patch("media.crud.message.add_message")
    mock_session = mocker.MagicMock()

    result = friends_services.go_friend(
        session=mock_session,
        initiator_login="alice",
        target_login="bob",
    )

    mock_create.assert_called_once_with(
        session=mock_session,
        user1=1,
        user2=2,
        status=StatusFriend.SUBSCRIPTION,
    )
    mock_message.assert_called_once_with(
        session=mock_session,
        user_id=2,
        text=settings.FRIEND_INVITATION_MESSAGE.format(login="alice"),
    )
    mock_session.commit.assert_called_once()
    assert result.message == "Friend invitation sent successfully."


def test_go_friend_target_not_found(
    mocker: MockerFixture,
):
    mocker.patch("media.crud.user.get_user_by_login", return_value=None)
    mock_create = mocker.patch("media.crud.friend.create_edge")
    mock_message = mocker.patch("media.crud.message.add_message")

    with pytest.raises(UserLoginNotFound):
        friends_services.go_friend(
            session=mocker.MagicMock(),
            initiator_login="alice",
            target_login="nobody",
        )

    mock_create.assert_not_called()
    mock_message.assert_not_called()


def test_add_friend_success(
    mocker: MockerFixture,
):
    mocker.patch("media.crud.user.get_user_by_id", return_value=mocker.MagicMock(id=1))
    mocker.patch(
        "media.crud.user.get_user_by_login", return_value=mocker.MagicMock(id=2)
    )
    mock_update = mocker.patch("media.crud.friend.update_status", return_value=True)
    mock_session = mocker.MagicMock()

    result = friends_services.add_friend(
        session=mock_session,
        user_id=1,
        target_login="bob",
    )

    mock_update.assert_called_once_with(
        session=mock_session,
        user1=1,
        user2=2,
        from_status=StatusFriend.SUBSCRIPTION,
        to_status=StatusFriend.FRIEND,
    )
    mock_session.commit.assert_called_once()
    assert result.message == "Friend added successfully."


@pytest.mark.parametrize(
    "existing_edge, expected_exc",
    [
        (None, EdgeNotFoundError),
        (Friend(user1=1, user2=2, status=StatusFriend.FRIEND), FriendshipAlreadyExistsError),
    ],
)
def test_add_friend_failure(
    mocker: MockerFixture,
    existing_edge,
    expected_exc,
):
    mocker.patch("media.crud.user.get_user_by_id", return_value=mocker.MagicMock(id=1))
    mocker.patch(
        "media.crud.user.get_user_by_login", return_value=mocker.MagicMock(id=2)
    )
    mocker.patch("media.crud.friend.update_status", return_value=False)
    mocker.patch("media.crud.friend.get_edge", return_value=existing_edge)
    mock_session = mocker.MagicMock()

    with pytest.raises(expected_exc):
        friends_services.add_friend(
            session=mock_session,
            user_id=1,
            target_login="bob",
        )

    mock_session.rollback.assert_called_once()
    mock_session.commit.assert_not_called()


def test_delete_subscription_not_found(
    mocker: MockerFixture,
):
    mocker.patch(
        "media.crud.user.get_user_by_email", return_value=mocker.MagicMock(id=1)
    )
    mocker.patch(
        "media.crud.user.get_user_by_login", return_value=mocker.MagicMock(id=2)
    )
    mocker.patch("media.crud.friend.get_edge", return_value=None)
    mock_delete = mocker.patch("media.crud.friend.delete_edge")

    with pytest.raises(EdgeNotFoundError):
        friends_services.delete_subscription(
            session=mocker.MagicMock(),
            target_login="bob",
            principal=_principal(),
        )

    mock_delete.assert_not_called()


# --------------------------------------
# Relationship lifecycle against a database
# --------------------------------------


def test_add_subscription_creates_edge(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
    principal_for: Callable[..., Principal],
):
    alice = user_factory(login="alice", email="a@x.com")
    bob = user_factory(login="bob")
    assert (alice.id, bob.id) == (1, 2)

    friends_services.add_subscription(
        session=db_transaction,
        target_login="bob",
        principal=principal_for(alice),
    )

    edge = friend_crud.get_edge(session=db_transaction, user1=1, user2=2)
    assert edge is not None
    assert (edge.user1, edge.user2, edge.status) == (1, 2, StatusFriend.SUBSCRIPTION)


def test_add_subscription_twice(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
    principal_for: Callable[..., Principal],
):
    alice = user_factory()
    bob = user_factory()

    friends_services.add_subscription(
        session=db_transaction, target_login=bob.login, principal=principal_for(alice)
    )

    with pytest.raises(EdgeAlreadyExistsError):
        friends_services.add_subscription(
            session=db_transaction,
            target_login=bob.login,
            principal=principal_for(alice),
        )


def test_add_friend_is_persisted(
    *,
    db_transaction: Session,
    test_engine: Engine,
    user_factory: Callable[..., User],
    friend_factory: Callable[..., Friend],
):
    alice = user_factory()
    bob = user_factory()
    friend_factory(user1=alice.id, user2=bob.id)

    friends_services.add_friend(
        session=db_transaction,
        user_id=alice.id,
        target_login=bob.login,
    )

    with Session(test_engine) as fresh_session:
        edge = friend_crud.get_edge(
            session=fresh_session, user1=alice.id, user2=bob.id
        )
        assert edge is not None
        assert edge.status == StatusFriend.FRIEND


def test_add_friend_twice(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
    friend_factory: Callable[..., Friend],
):
    alice = user_factory()
    bob = user_factory()
    friend_factory(user1=alice.id, user2=bob.id)

    friends_services.add_friend(
        session=db_transaction, user_id=alice.id, target_login=bob.login
    )
    with pytest.raises(FriendshipAlreadyExistsError):
        friends_services.add_friend(
            session=db_transaction, user_id=alice.id, target_login=bob.login
        )


def test_add_friend_without_edge(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
    friend_factory: Callable[..., Friend],
):
    alice = user_factory()
    bob = user_factory()
    # an edge in the other direction does not count
    friend_factory(user1=bob.id, user2=alice.id)

    with pytest.raises(EdgeNotFoundError):
        friends_services.add_friend(
            session=db_transaction, user_id=alice.id, target_login=bob.login
        )


def test_delete_subscription_removes_edge(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
    friend_factory: Callable[..., Friend],
    principal_for: Callable[..., Principal],
):
    alice = user_factory()
    bob = user_factory()
    friend_factory(user1=alice.id, user2=bob.id)

    friends_services.delete_subscription(
        session=db_transaction, target_login=bob.login, principal=principal_for(alice)
    )

    assert (
        friend_crud.get_edge(session=db_transaction, user1=alice.id, user2=bob.id)
        is None
    )
    with pytest.raises(EdgeNotFoundError):
        friends_services.delete_subscription(
            session=db_transaction,
            target_login=bob.login,
            principal=principal_for(alice),
        )


def test_go_friend_sends_invitation(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
):
    alice = user_factory(login="alice")
    bob = user_factory(login="bob")

    friends_services.go_friend(
        session=db_transaction, initiator_login="alice", target_login="bob"
    )

    edge = friend_crud.get_edge(session=db_transaction, user1=alice.id, user2=bob.id)
    messages = message_crud.get_messages(session=db_transaction, user_id=bob.id)
    assert edge is not None
    assert edge.status == StatusFriend.SUBSCRIPTION
    assert [message.text for message in messages] == [
        settings.FRIEND_INVITATION_MESSAGE.format(login="alice")
    ]
    assert message_crud.get_messages(session=db_transaction, user_id=alice.id) == []


def test_go_friend_twice_commits_nothing_more(
    *,
    db_transaction: Session,
    test_engine: Engine,
    user_factory: Callable[..., User],
):
    alice_id = user_factory(login="alice").id
    bob_id = user_factory(login="bob").id
    friends_services.go_friend(
        session=db_transaction, initiator_login="alice", target_login="bob"
    )

    with pytest.raises(EdgeAlreadyExistsError) as exc_info:
        friends_services.go_friend(
            session=db_transaction, initiator_login="alice", target_login="bob"
        )

    assert exc_info.value.status_code == 409
    with Session(test_engine) as fresh_session:
        messages = message_crud.get_messages(session=fresh_session, user_id=bob_id)
        edges = friend_crud.get_edges_from(session=fresh_session, user_id=alice_id)
    assert len(messages) == 1
    assert [(edge.user2, edge.status) for edge in edges] == [
        (bob_id, StatusFriend.SUBSCRIPTION)
    ]


def test_get_relationships(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
    friend_factory: Callable[..., Friend],
    principal_for: Callable[..., Principal],
):
    alice = user_factory()
    bob = user_factory()
    carol = user_factory()
    friend_factory(user1=alice.id, user2=bob.id, status=StatusFriend.FRIEND)
    friend_factory(user1=alice.id, user2=carol.id)

    friends = friends_services.get_relationships(
        session=db_transaction,
        principal=principal_for(alice),
        status=StatusFriend.FRIEND,
    )
    everything = friends_services.get_relationships(
        session=db_transaction,
        principal=principal_for(alice),
    )

    assert [edge.user2 for edge in friends] == [bob.id]
    assert [edge.user2 for edge in everything] == [bob.id, carol.id]
