from fastapi import APIRouter, Response

from media.api.deps import AuthorPrincipal, SessionDep
from media.models.auth_schemas import Message
from media.schemas.user import UserMessageCreate, UserPublic
from media.services import avatars as avatars_service
from media.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_class=Response)
def get_user_photo(user_id: int) -> Response:
    """
    Get the avatar of a user. This is the link stored as the avatar reference
    and is readable without authentication.
    """
    content = avatars_service.get_photo_by_id(user_id)
    return Response(content=content, media_type="application/octet-stream")


@router.get("/{user_id}/profile", response_model=UserPublic)
def get_user_profile(
    session: SessionDep, principal: AuthorPrincipal, user_id: int
) -> UserPublic:
    return users_service.find_by_id(
        session=session, user_id=user_id, principal=principal
    )


@router.delete("/{user_id}", response_model=Message)
def delete_user(
    session: SessionDep, principal: AuthorPrincipal, user_id: int
) -> Message:
    return users_service.delete_user(
        session=session, user_id=user_id, principal=principal
    )


@router.post("/{user_id}/messages", response_model=Message)
def send_message(
    *,
    session: SessionDep,
    _: AuthorPrincipal,
    user_id: int,
    message_in: UserMessageCreate,
) -> Message:
    return users_service.message_of_friend(
        session=session, user_id=user_id, text=message_in.text
    )
