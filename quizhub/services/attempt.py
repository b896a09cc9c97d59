import logging
import math
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from pymongo.errors import DuplicateKeyError

from quizhub.core.errors import InvalidArgument, NotFound
from quizhub.core.policy import Action, authorize
from quizhub.helpers.object_id import parse_object_id
from quizhub.models.attempt import Attempt
from quizhub.models.quiz import Quiz
from quizhub.models.user import User
from quizhub.schemas.req.attempt import AttemptCreateDTO
from quizhub.schemas.res.attempt import AttemptResponse, build_attempt_response
from quizhub.services import statistics
from quizhub.services.lookups import quizzes_by_id, users_by_id
from quizhub.services.scoring import GradedSubmission, grade_submission

logger = logging.getLogger(__name__)

PERCENTAGE_TOLERANCE = 0.5


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _warn_on_client_mismatch(attempt_data: AttemptCreateDTO, graded: GradedSubmission, user_id) -> None:
    if attempt_data.score is not None and attempt_data.score != graded.score:
        logger.warning(
            "Client score %s differs from graded score %s (quiz %s, user %s)",
            attempt_data.score, graded.score, attempt_data.quiz_id, user_id,
        )
    if attempt_data.percentage is not None and not math.isclose(
        attempt_data.percentage, graded.percentage, abs_tol=PERCENTAGE_TOLERANCE
    ):
        logger.warning(
            "Client percentage %s differs from graded percentage %s (quiz %s, user %s)",
            attempt_data.percentage, graded.percentage, attempt_data.quiz_id, user_id,
        )


class AttemptService:
    async def _find_by_key(self, user: User, submission_key: str) -> Optional[Attempt]:
        return await Attempt.find_one(
            Attempt.user_id == user.id,
            Attempt.submission_key == submission_key,
        )

    def _replay(self, existing: Attempt, quiz_id, submission_key: str) -> AttemptResponse:
        if existing.quiz_id != quiz_id:
            raise InvalidArgument(
                "Submission key already used for another quiz",
                {"submissionKey": submission_key, "quizId": str(quiz_id)},
            )
        logger.info("Replayed submission %s for user %s", submission_key, existing.user_id)
        return build_attempt_response(existing)

    async def submit_attempt(
        self,
        attempt_data: AttemptCreateDTO,
        actor: User,
        idempotency_key: Optional[str] = None,
    ) -> Tuple[AttemptResponse, bool]:
        """
        Grade and store one attempt, then apply it to quiz and user statistics.

        Returns the attempt and whether it was newly created. A repeated
        submission key returns the stored attempt and leaves statistics alone;
        reusing a key for a different quiz is rejected.
        """
        quiz_id = parse_object_id(attempt_data.quiz_id, "quizId")
        submission_key = idempotency_key or attempt_data.submission_key

        if submission_key:
            existing = await self._find_by_key(actor, submission_key)
            if existing:
                return self._replay(existing, quiz_id, submission_key), False

        quiz = await Quiz.get(quiz_id)
        if not quiz:
            raise NotFound("Quiz not found", {"quizId": attempt_data.quiz_id})

        graded = grade_submission(
            quiz.questions,
            [(answer.question_index, answer.selected_option) for answer in attempt_data.answers],
        )
        _warn_on_client_mismatch(attempt_data, graded, actor.id)

        completed_at = _as_utc(attempt_data.completed_at or datetime.now(timezone.utc))
        try:
            started_at = completed_at - timedelta(seconds=attempt_data.time_spent)
        except OverflowError as exc:
            raise InvalidArgument(
                "completedAt and timeSpent do not give a valid start time",
                {"completedAt": completed_at.isoformat(), "timeSpent": attempt_data.time_spent},
            ) from exc
        attempt = Attempt(
            user_id=actor.id,
            quiz_id=quiz.id,
            answers=graded.answers,
            score=graded.score,
            max_score=graded.max_score,
            percentage=graded.percentage,
            time_spent=attempt_data.time_spent,
            started_at=started_at,
            completed_at=completed_at,
        )
        if submission_key:
            attempt.submission_key = submission_key

        try:
            await attempt.insert()
        except DuplicateKeyError:
            # Lost a race against the same submission key
            existing = await self._find_by_key(actor, attempt.submission_key)
            if existing is None:
                raise
            return self._replay(existing, quiz.id, attempt.submission_key), False

        logger.info(
            "Attempt %s stored: quiz %s, user %s, %s/%s (%.2f%%)",
            attempt.id, quiz.id, actor.id, graded.score, graded.max_score, graded.percentage,
        )
        await statistics.apply_attempt(quiz.id, actor.id, graded.percentage)
        return build_attempt_response(attempt, quiz=quiz), True

    async def get_user_attempts(self, actor: User) -> List[AttemptResponse]:
        attempts = await Attempt.find(Attempt.user_id == actor.id).sort(-Attempt.completed_at).to_list()
        quizzes = await quizzes_by_id(attempt.quiz_id for attempt in attempts)
        return [build_attempt_response(attempt, quiz=quizzes.get(attempt.quiz_id)) for attempt in attempts]

    async def get_quiz_attempts(self, quiz_id: str, actor: User) -> List[AttemptResponse]:
        quiz = await Quiz.get(parse_object_id(quiz_id, "quizId"))
        if not quiz:
            raise NotFound("Quiz not found", {"quizId": quiz_id})
        authorize(actor, Action.LIST_QUIZ_ATTEMPTS, quiz)

        attempts = await Attempt.find(Attempt.quiz_id == quiz.id).sort(-Attempt.completed_at).to_list()
        users = await users_by_id(attempt.user_id for attempt in attempts)
        return [build_attempt_response(attempt, user=users.get(attempt.user_id)) for attempt in attempts]

    async def get_attempt(self, attempt_id: str, actor: User) -> AttemptResponse:
        attempt = await Attempt.get(parse_object_id(attempt_id, "attemptId"))
        if not attempt:
            raise NotFound("Attempt not found", {"attemptId": attempt_id})
        authorize(actor, Action.READ_ATTEMPT, attempt)

        quiz = await Quiz.get(attempt.quiz_id)
        user = await User.get(attempt.user_id)
        return build_attempt_response(attempt, user=user, quiz=quiz)
