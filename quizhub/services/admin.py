import logging
from typing import List

from beanie import UpdateResponse
from beanie.operators import Set

from quizhub.core.errors import InvalidArgument, NotFound
from quizhub.core.policy import Action, authorize
from quizhub.helpers.object_id import parse_object_id
from quizhub.models.attempt import Attempt
from quizhub.models.quiz import Quiz
from quizhub.models.user import User, UserRoleEnum
from quizhub.schemas.res.attempt import build_attempt_response
from quizhub.schemas.res.quiz import build_quiz_response
from quizhub.schemas.res.user import UserResponse, build_user_response
from quizhub.services.lookups import quizzes_by_id, users_by_id

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


class AdminService:
    async def _get_user_or_404(self, user_id: str) -> User:
        user = await User.get(parse_object_id(user_id, "userId"))
        if not user:
            raise NotFound("User not found", {"userId": user_id})
        return user

    async def get_users(self, actor: User) -> List[UserResponse]:
        authorize(actor, Action.MANAGE_USERS)
        users = await User.find_all().sort(-User.created_at).to_list()
        return [build_user_response(user) for user in users]

    async def update_role(self, user_id: str, role: UserRoleEnum, actor: User) -> UserResponse:
        authorize(actor, Action.MANAGE_USERS)
        user = await self._get_user_or_404(user_id)
        updated = await User.find_one(User.id == user.id).update(
            Set({User.role: role.value}),
            response_type=UpdateResponse.NEW_DOCUMENT,
        )
        if updated is None:
            raise NotFound("User not found", {"userId": user_id})
        logger.info("User %s role changed %s -> %s by %s", user.id, user.role.value, role.value, actor.id)
        return build_user_response(updated)

    async def delete_user(self, user_id: str, actor: User) -> dict:
        authorize(actor, Action.MANAGE_USERS)
        user = await self._get_user_or_404(user_id)
        if user.id == actor.id:
            raise InvalidArgument("Cannot delete yourself", {"userId": user_id})
        await user.delete()
        logger.info("User %s deleted by %s", user.id, actor.id)
        return {"message": "User removed"}

    async def get_stats(self, actor: User) -> dict:
        """Platform counts plus the most recent users, quizzes and attempts."""
        authorize(actor, Action.VIEW_PLATFORM_STATS)

        total_users = await User.find_all().count()
        total_quizzes = await Quiz.find_all().count()
        total_attempts = await Attempt.find_all().count()

        recent_users = await User.find_all().sort(-User.created_at).limit(RECENT_LIMIT).to_list()
        recent_quizzes = await Quiz.find_all().sort(-Quiz.created_at).limit(RECENT_LIMIT).to_list()
        recent_attempts = await Attempt.find_all().sort(-Attempt.completed_at).limit(RECENT_LIMIT).to_list()

        people = await users_by_id(
            [quiz.creator_id for quiz in recent_quizzes] + [attempt.user_id for attempt in recent_attempts]
        )
        quizzes = await quizzes_by_id(attempt.quiz_id for attempt in recent_attempts)

        return {
            "counts": {
                "users": total_users,
                "quizzes": total_quizzes,
                "attempts": total_attempts,
            },
            "recent": {
                "users": [build_user_response(user) for user in recent_users],
                "quizzes": [
                    build_quiz_response(quiz, people.get(quiz.creator_id), include_answer_key=True)
                    for quiz in recent_quizzes
                ],
                "attempts": [
                    build_attempt_response(
                        attempt,
                        user=people.get(attempt.user_id),
                        quiz=quizzes.get(attempt.quiz_id),
                    )
                    for attempt in recent_attempts
                ],
            },
        }
