from datetime import datetime
from typing import List, Optional

from quizhub.models.attempt import Attempt
from quizhub.models.quiz import Quiz
from quizhub.models.user import User
from quizhub.schemas.base import CamelModel
from quizhub.schemas.res.quiz import QuizSummary, build_quiz_summary
from quizhub.schemas.res.user import UserSummary, build_user_summary


class AnswerResponse(CamelModel):
    question_index: int
    selected_option: int
    is_correct: bool


class AttemptResponse(CamelModel):
    id: str
    user_id: str
    quiz_id: str
    user: Optional[UserSummary] = None
    quiz: Optional[QuizSummary] = None
    answers: List[AnswerResponse]
    score: int
    max_score: int
    percentage: float
    time_spent: int
    started_at: datetime
    completed_at: datetime
    submission_key: str
    created_at: Optional[datetime] = None


def build_attempt_response(
    attempt: Attempt,
    user: Optional[User] = None,
    quiz: Optional[Quiz] = None,
) -> AttemptResponse:
    return AttemptResponse(
        id=str(attempt.id),
        user_id=str(attempt.user_id),
        quiz_id=str(attempt.quiz_id),
        user=build_user_summary(user),
        quiz=build_quiz_summary(quiz),
        answers=[
            AnswerResponse(
                question_index=answer.question_index,
                selected_option=answer.selected_option,
                is_correct=answer.is_correct,
            )
            for answer in attempt.answers
        ],
        score=attempt.score,
        max_score=attempt.max_score,
        percentage=attempt.percentage,
        time_spent=attempt.time_spent,
        started_at=attempt.started_at,
        completed_at=attempt.completed_at,
        submission_key=attempt.submission_key,
        created_at=attempt.created_at,
    )
