from fastapi import APIRouter, Depends

from quizhub.core.auth_middleware import get_current_user
from quizhub.models.user import User
from quizhub.schemas.req.user import UserCreateReq, UserLoginReq
from quizhub.services.auth import AuthService

auth_router = APIRouter()


@auth_router.post("/register", status_code=201)
async def register(req: UserCreateReq, auth_service: AuthService = Depends(AuthService)):
    return await auth_service.register(req)


@auth_router.post("/login")
async def login(req: UserLoginReq, auth_service: AuthService = Depends(AuthService)):
    return await auth_service.login(req)


@auth_router.get("/me")
async def me(
    user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(AuthService),
):
    return await auth_service.get_me(user)
