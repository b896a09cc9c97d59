"""
Test cases for running quiz and user statistics.

The increments are applied by the store, so stale in-memory copies and
concurrent submissions must not lose updates.
"""
import asyncio
from statistics import mean

import pytest
from beanie import PydanticObjectId

from quizhub.models.quiz import DifficultyEnum, Option, Question, Quiz
from quizhub.models.user import User
from quizhub.schemas.req.quiz import QuizUpdateDTO
from quizhub.services import statistics
from quizhub.services.quiz import QuizService


def running_average(previous_average: float, previous_count: int, value: float) -> float:
    """Incremental mean, the form the stored (count, sum) pair must agree with."""
    if not previous_count:
        return value
    return (previous_average * previous_count + value) / (previous_count + 1)


async def make_quiz(creator: User) -> Quiz:
    quiz = Quiz(
        title="Stats",
        description="For statistics",
        category="general",
        difficulty=DifficultyEnum.MEDIUM,
        time_limit=5,
        questions=[Question(text="Q", options=[Option(text="a", is_correct=True), Option(text="b")])],
        creator_id=creator.id,
    )
    await quiz.insert()
    return quiz


class TestApplyAttempt:
    """Statistics side effects of one submitted attempt."""

    async def test_worked_example(self, user):
        quiz = await make_quiz(user)
        assert quiz.total_attempts == 0
        assert quiz.average_score == 0

        await statistics.apply_attempt(quiz.id, user.id, 80)
        fresh = await Quiz.get(quiz.id)
        assert fresh.total_attempts == 1
        assert fresh.average_score == pytest.approx(80)

        await statistics.apply_attempt(quiz.id, user.id, 60)
        fresh = await Quiz.get(quiz.id)
        assert fresh.total_attempts == 2
        assert fresh.average_score == pytest.approx(70)

    async def test_user_aggregates_follow_the_same_rule(self, user, other_user):
        first = await make_quiz(other_user)
        second = await make_quiz(other_user)
        percentages = [100, 50, 25]

        await statistics.apply_attempt(first.id, user.id, percentages[0])
        await statistics.apply_attempt(second.id, user.id, percentages[1])
        await statistics.apply_attempt(first.id, user.id, percentages[2])

        fresh = await User.get(user.id)
        assert fresh.quizzes_taken == 3
        assert fresh.total_score == pytest.approx(sum(percentages))
        assert fresh.average_score == pytest.approx(mean(percentages))

    async def test_sequential_mean(self, user):
        quiz = await make_quiz(user)
        percentages = [12.5, 100, 0, 66.67, 40, 90]
        expected = 0.0
        for count, value in enumerate(percentages):
            expected = running_average(expected, count, value)
            await statistics.apply_attempt(quiz.id, user.id, value)

        fresh = await Quiz.get(quiz.id)
        assert fresh.total_attempts == len(percentages)
        assert fresh.average_score == pytest.approx(mean(percentages))
        assert fresh.average_score == pytest.approx(expected)

    async def test_missing_quiz_is_not_created(self, user):
        missing_id = PydanticObjectId()
        assert await statistics.record_quiz_attempt(missing_id, 50) is None
        assert await Quiz.get(missing_id) is None


class TestConcurrentUpdates:
    """Lost-update hazard under concurrent submissions."""

    async def test_concurrent_increments_are_not_lost(self, user):
        quiz = await make_quiz(user)
        percentages = [float(value) for value in range(0, 100, 5)]

        await asyncio.gather(
            *(statistics.apply_attempt(quiz.id, user.id, value) for value in percentages)
        )

        fresh_quiz = await Quiz.get(quiz.id)
        fresh_user = await User.get(user.id)
        assert fresh_quiz.total_attempts == len(percentages)
        assert fresh_quiz.average_score == pytest.approx(mean(percentages))
        assert fresh_user.quizzes_taken == len(percentages)
        assert fresh_user.average_score == pytest.approx(mean(percentages))

    async def test_stale_snapshot_does_not_reset_counts(self, user):
        quiz = await make_quiz(user)
        stale = await Quiz.get(quiz.id)

        await statistics.apply_attempt(quiz.id, user.id, 40)
        await statistics.apply_attempt(quiz.id, user.id, 60)
        assert stale.total_attempts == 0

        updated = await statistics.record_quiz_attempt(stale.id, 80)
        assert updated.total_attempts == 3
        assert updated.average_score == pytest.approx(60)

    async def test_quiz_edit_keeps_statistics(self, user):
        quiz = await make_quiz(user)
        await statistics.apply_attempt(quiz.id, user.id, 30)
        await statistics.apply_attempt(quiz.id, user.id, 70)

        response = await QuizService().update_quiz(str(quiz.id), QuizUpdateDTO(title="Renamed"), user)

        assert response.title == "Renamed"
        assert response.total_attempts == 2
        assert response.average_score == pytest.approx(50)
