from fastapi import APIRouter, UploadFile

from media.api.deps import AuthorPrincipal, SessionDep
from media.models.user import UserUpdate
from media.schemas.user import UserMessagePublic, UserPublic
from media.services import avatars as avatars_service
from media.services import users as users_service

router = APIRouter(prefix="/me", tags=["me"])


@router.get("/", response_model=UserPublic)
def get_current_user(session: SessionDep, principal: AuthorPrincipal) -> UserPublic:
    return users_service.get_user(session=session, principal=principal)


@router.put("/", response_model=UserPublic)
def update_user_me(
    *, session: SessionDep, user_in: UserUpdate, principal: AuthorPrincipal
) -> UserPublic:
    return users_service.update_user(
        session=session, user_in=user_in, principal=principal
    )


@router.get("/messages", response_model=list[UserMessagePublic])
def get_my_messages(
    session: SessionDep, principal: AuthorPrincipal
) -> list[UserMessagePublic]:
    return users_service.get_messages(session=session, principal=principal)


@router.put("/image", response_model=UserPublic)
def update_user_image(
    *, session: SessionDep, principal: AuthorPrincipal, image: UploadFile
) -> UserPublic:
    content = image.file.read()
    return avatars_service.update_user_image(
        session=session, image=content, principal=principal
    )
