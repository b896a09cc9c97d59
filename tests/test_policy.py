"""
Test cases for the access policy.
"""
from datetime import datetime, timezone

import pytest
from beanie import PydanticObjectId

from quizhub.core.errors import Forbidden
from quizhub.core.policy import Action, authorize, is_allowed
from quizhub.models.attempt import Attempt
from quizhub.models.quiz import DifficultyEnum, Quiz


def build_quiz(owner) -> Quiz:
    return Quiz(
        title="T",
        description="D",
        category="C",
        difficulty=DifficultyEnum.EASY,
        time_limit=1,
        questions=[],
        creator_id=owner.id,
    )


def build_attempt(owner) -> Attempt:
    now = datetime.now(timezone.utc)
    return Attempt(
        user_id=owner.id,
        quiz_id=PydanticObjectId(),
        score=0,
        max_score=0,
        percentage=0,
        time_spent=0,
        started_at=now,
        completed_at=now,
    )


class TestQuizPolicy:
    """Who may read, edit and see the answer key of a quiz."""

    async def test_everyone_reads_quizzes(self, user, other_user):
        quiz = build_quiz(user)
        assert is_allowed(None, Action.READ_QUIZ, quiz)
        assert is_allowed(other_user, Action.READ_QUIZ, quiz)

    async def test_answer_key_for_owner_and_admin_only(self, user, other_user, admin):
        quiz = build_quiz(user)
        assert is_allowed(user, Action.VIEW_ANSWER_KEY, quiz)
        assert is_allowed(admin, Action.VIEW_ANSWER_KEY, quiz)
        assert not is_allowed(other_user, Action.VIEW_ANSWER_KEY, quiz)
        assert not is_allowed(None, Action.VIEW_ANSWER_KEY, quiz)

    @pytest.mark.parametrize("action", [Action.UPDATE_QUIZ, Action.DELETE_QUIZ, Action.LIST_QUIZ_ATTEMPTS])
    async def test_writes_for_owner_and_admin_only(self, action, user, other_user, admin):
        quiz = build_quiz(user)
        assert is_allowed(user, action, quiz)
        assert is_allowed(admin, action, quiz)
        assert not is_allowed(other_user, action, quiz)

    async def test_authorize_raises_forbidden(self, user, other_user):
        with pytest.raises(Forbidden):
            authorize(other_user, Action.DELETE_QUIZ, build_quiz(user))


class TestAttemptPolicy:
    """Attempts are readable by their owner and by admins."""

    async def test_owner_and_admin_read_attempt(self, user, other_user, admin):
        attempt = build_attempt(user)
        assert is_allowed(user, Action.READ_ATTEMPT, attempt)
        assert is_allowed(admin, Action.READ_ATTEMPT, attempt)
        assert not is_allowed(other_user, Action.READ_ATTEMPT, attempt)


class TestAdminPolicy:
    """Platform administration is admin only."""

    @pytest.mark.parametrize("action", [Action.MANAGE_USERS, Action.VIEW_PLATFORM_STATS])
    async def test_admin_only(self, action, user, admin):
        assert is_allowed(admin, action)
        assert not is_allowed(user, action)
        assert not is_allowed(None, action)
