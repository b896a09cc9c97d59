from typing import Optional

from fastapi import APIRouter, Depends

from quizhub.core.auth_middleware import get_current_user, get_optional_user
from quizhub.models.user import User
from quizhub.schemas.req.quiz import QuizCreateDTO, QuizUpdateDTO
from quizhub.services.quiz import QuizService

quiz_router = APIRouter()


@quiz_router.post("", status_code=201)
async def create_quiz(
    quiz_data: QuizCreateDTO,
    user: User = Depends(get_current_user),
    quiz_service: QuizService = Depends(QuizService),
):
    return await quiz_service.create_quiz(quiz_data, user)


@quiz_router.get("")
async def get_all_quizzes(
    user: Optional[User] = Depends(get_optional_user),
    quiz_service: QuizService = Depends(QuizService),
):
    return await quiz_service.get_all_quizzes(user)


@quiz_router.get("/user")
async def get_my_quizzes(
    user: User = Depends(get_current_user),
    quiz_service: QuizService = Depends(QuizService),
):
    """Quizzes created by the caller, answer key included."""
    return await quiz_service.get_my_quizzes(user)


@quiz_router.get("/user/{user_id}")
async def get_user_quizzes(
    user_id: str,
    user: Optional[User] = Depends(get_optional_user),
    quiz_service: QuizService = Depends(QuizService),
):
    return await quiz_service.get_user_quizzes(user_id, user)


@quiz_router.get("/{quiz_id}")
async def get_quiz(
    quiz_id: str,
    user: Optional[User] = Depends(get_optional_user),
    quiz_service: QuizService = Depends(QuizService),
):
    return await quiz_service.get_quiz(quiz_id, user)


@quiz_router.put("/{quiz_id}")
async def update_quiz(
    quiz_id: str,
    quiz_data: QuizUpdateDTO,
    user: User = Depends(get_current_user),
    quiz_service: QuizService = Depends(QuizService),
):
    return await quiz_service.update_quiz(quiz_id, quiz_data, user)


@quiz_router.delete("/{quiz_id}")
async def delete_quiz(
    quiz_id: str,
    user: User = Depends(get_current_user),
    quiz_service: QuizService = Depends(QuizService),
):
    return await quiz_service.delete_quiz(quiz_id, user)
