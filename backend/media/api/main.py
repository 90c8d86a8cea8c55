from fastapi import APIRouter

from media.api.routes import friends, me, users, utils

api_router = APIRouter()
api_router.include_router(me.router)
api_router.include_router(users.router)
api_router.include_router(friends.router)
api_router.include_router(utils.router)
