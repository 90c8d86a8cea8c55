from fastapi import APIRouter

from media.api.deps import AuthorPrincipal, CurrentUser, SessionDep
from media.core.enums import StatusFriend
from media.models.auth_schemas import Message
from media.schemas.friend import FriendPublic
from media.services import friends as friends_service
from media.services import users as users_service

router = APIRouter(prefix="/friends", tags=["friends"])


@router.get("/", response_model=list[FriendPublic])
def get_relationships(
    *,
    session: SessionDep,
    principal: AuthorPrincipal,
    status: StatusFriend | None = None,
) -> list[FriendPublic]:
    return friends_service.get_relationships(
        session=session, principal=principal, status=status
    )


@router.post("/invite/{login}")
def invite_friend(
    *, session: SessionDep, current_user: CurrentUser, login: str
) -> Message:
    return friends_service.go_friend(
        session=session,
        initiator_login=current_user.login,
        target_login=login,
    )


@router.post("/accept/{login}")
def accept_friend(
    *, session: SessionDep, current_user: CurrentUser, login: str
) -> Message:
    """
    Accept the invitation the user with this login sent to the current user.
    """
    inviter = users_service.get_by_login(session=session, login=login)
    return friends_service.add_friend(
        session=session,
        user_id=inviter.id,
        target_login=current_user.login,
    )


@router.post("/subscription/{login}")
def add_subscription(
    *, session: SessionDep, principal: AuthorPrincipal, login: str
) -> Message:
    return friends_service.add_subscription(
        session=session, target_login=login, principal=principal
    )


@router.delete("/subscription/{login}")
def delete_subscription(
    *, session: SessionDep, principal: AuthorPrincipal, login: str
) -> Message:
    return friends_service.delete_subscription(
        session=session, target_login=login, principal=principal
    )
