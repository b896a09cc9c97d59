from datetime import datetime
from typing import Optional

from quizhub.models.user import User, UserRoleEnum
from quizhub.schemas.base import CamelModel


class UserSummary(CamelModel):
    id: str
    username: str


class UserResponse(CamelModel):
    id: str
    username: str
    email: str
    role: UserRoleEnum
    quizzes_taken: int
    total_score: float
    average_score: float
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    token: str
    user: UserResponse


def build_user_summary(user: Optional[User]) -> Optional[UserSummary]:
    if user is None:
        return None
    return UserSummary(id=str(user.id), username=user.username)


def build_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        username=user.username,
        email=user.email,
        role=user.role,
        quizzes_taken=user.quizzes_taken,
        total_score=user.total_score,
        average_score=round(user.average_score, 2),
        created_at=user.created_at,
    )
