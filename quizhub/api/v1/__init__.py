from fastapi import APIRouter

from quizhub.api.v1.admin import admin_router
from quizhub.api.v1.attempt import attempt_router
from quizhub.api.v1.auth import auth_router
from quizhub.api.v1.health import health_router
from quizhub.api.v1.quiz import quiz_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(quiz_router, prefix="/quizzes", tags=["quizzes"])
api_router.include_router(attempt_router, prefix="/attempts", tags=["attempts"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
