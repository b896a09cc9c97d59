"""
Running statistics for quizzes and users.

Both aggregates are stored as (count, sum of percentages) and moved with a
single $inc per document, evaluated by MongoDB. Concurrent submissions for
the same quiz or user therefore cannot overwrite each other, and the
average is derived on read as sum / count. This is the same value as the
incremental form (avg * n + p) / (n + 1), with avg = 0 before the first
attempt.
"""
import logging
from typing import Optional

from beanie import PydanticObjectId, UpdateResponse
from beanie.operators import Inc

from quizhub.models.quiz import Quiz
from quizhub.models.user import User

logger = logging.getLogger(__name__)


async def record_quiz_attempt(quiz_id: PydanticObjectId, percentage: float) -> Optional[Quiz]:
    quiz = await Quiz.find_one(Quiz.id == quiz_id).update(
        Inc({Quiz.total_attempts: 1, Quiz.total_percentage: percentage}),
        response_type=UpdateResponse.NEW_DOCUMENT,
    )
    if quiz is None:
        logger.warning("Quiz %s vanished before its statistics were updated", quiz_id)
    return quiz


async def record_user_attempt(user_id: PydanticObjectId, percentage: float) -> Optional[User]:
    user = await User.find_one(User.id == user_id).update(
        Inc({User.quizzes_taken: 1, User.total_score: percentage}),
        response_type=UpdateResponse.NEW_DOCUMENT,
    )
    if user is None:
        logger.warning("User %s vanished before their statistics were updated", user_id)
    return user


async def apply_attempt(quiz_id: PydanticObjectId, user_id: PydanticObjectId, percentage: float) -> None:
    """Apply one attempt's percentage to its quiz and user. Call once per inserted attempt."""
    quiz = await record_quiz_attempt(quiz_id, percentage)
    user = await record_user_attempt(user_id, percentage)
    logger.info(
        "Statistics updated: quiz %s -> %s attempts avg %.2f, user %s -> %s taken avg %.2f",
        quiz_id,
        quiz.total_attempts if quiz else "?",
        quiz.average_score if quiz else 0.0,
        user_id,
        user.quizzes_taken if user else "?",
        user.average_score if user else 0.0,
    )
