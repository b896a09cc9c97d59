from fastapi import APIRouter, Depends

from quizhub.core.auth_middleware import get_current_user
from quizhub.models.user import User
from quizhub.schemas.req.user import RoleUpdateReq
from quizhub.services.admin import AdminService

admin_router = APIRouter()


@admin_router.get("/users")
async def get_users(
    user: User = Depends(get_current_user),
    admin_service: AdminService = Depends(AdminService),
):
    return await admin_service.get_users(user)


@admin_router.put("/users/{user_id}")
async def update_user_role(
    user_id: str,
    req: RoleUpdateReq,
    user: User = Depends(get_current_user),
    admin_service: AdminService = Depends(AdminService),
):
    return await admin_service.update_role(user_id, req.role, user)


@admin_router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    user: User = Depends(get_current_user),
    admin_service: AdminService = Depends(AdminService),
):
    return await admin_service.delete_user(user_id, user)


@admin_router.get("/stats")
async def get_stats(
    user: User = Depends(get_current_user),
    admin_service: AdminService = Depends(AdminService),
):
    return await admin_service.get_stats(user)
