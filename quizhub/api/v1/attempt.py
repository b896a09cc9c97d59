from typing import Optional

from fastapi import APIRouter, Depends, Header, Response

from quizhub.core.auth_middleware import get_current_user
from quizhub.models.user import User
from quizhub.schemas.req.attempt import AttemptCreateDTO
from quizhub.services.attempt import AttemptService

attempt_router = APIRouter()


@attempt_router.post("", status_code=201)
async def submit_attempt(
    attempt_data: AttemptCreateDTO,
    response: Response,
    idempotency_key: Optional[str] = Header(default=None, max_length=128),
    user: User = Depends(get_current_user),
    attempt_service: AttemptService = Depends(AttemptService),
):
    """Grade a submission and update quiz and user statistics."""
    attempt, created = await attempt_service.submit_attempt(attempt_data, user, idempotency_key)
    if not created:
        response.status_code = 200
    return attempt


@attempt_router.get("/user")
async def get_user_attempts(
    user: User = Depends(get_current_user),
    attempt_service: AttemptService = Depends(AttemptService),
):
    return await attempt_service.get_user_attempts(user)


@attempt_router.get("/quiz/{quiz_id}")
async def get_quiz_attempts(
    quiz_id: str,
    user: User = Depends(get_current_user),
    attempt_service: AttemptService = Depends(AttemptService),
):
    return await attempt_service.get_quiz_attempts(quiz_id, user)


@attempt_router.get("/{attempt_id}")
async def get_attempt(
    attempt_id: str,
    user: User = Depends(get_current_user),
    attempt_service: AttemptService = Depends(AttemptService),
):
    return await attempt_service.get_attempt(attempt_id, user)
