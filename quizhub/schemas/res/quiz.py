from datetime import datetime
from typing import List, Optional

from quizhub.models.quiz import DifficultyEnum, Quiz
from quizhub.models.user import User
from quizhub.schemas.base import CamelModel
from quizhub.schemas.res.user import UserSummary, build_user_summary


class OptionResponse(CamelModel):
    text: str


class OptionWithKeyResponse(OptionResponse):
    is_correct: bool


class QuestionResponse(CamelModel):
    text: str
    options: List[OptionResponse]


class QuestionWithKeyResponse(QuestionResponse):
    options: List[OptionWithKeyResponse]


class QuizResponse(CamelModel):
    id: str
    title: str
    description: str
    category: str
    difficulty: DifficultyEnum
    time_limit: int
    questions: List[QuestionResponse]
    total_questions: int
    creator_id: str
    creator: Optional[UserSummary] = None
    is_published: bool
    total_attempts: int
    average_score: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class QuizWithKeyResponse(QuizResponse):
    questions: List[QuestionWithKeyResponse]


class QuizSummary(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    difficulty: Optional[DifficultyEnum] = None


def build_quiz_response(quiz: Quiz, creator: Optional[User], include_answer_key: bool) -> QuizResponse:
    """Serialize a quiz; the answer key only survives when include_answer_key is set."""
    fields = dict(
        id=str(quiz.id),
        title=quiz.title,
        description=quiz.description,
        category=quiz.category,
        difficulty=quiz.difficulty,
        time_limit=quiz.time_limit,
        total_questions=quiz.total_questions,
        creator_id=str(quiz.creator_id),
        creator=build_user_summary(creator),
        is_published=quiz.is_published,
        total_attempts=quiz.total_attempts,
        average_score=round(quiz.average_score, 2),
        created_at=quiz.created_at,
        updated_at=quiz.updated_at,
    )
    if include_answer_key:
        questions = [
            QuestionWithKeyResponse(
                text=question.text,
                options=[
                    OptionWithKeyResponse(text=option.text, is_correct=option.is_correct)
                    for option in question.options
                ],
            )
            for question in quiz.questions
        ]
        return QuizWithKeyResponse(questions=questions, **fields)

    questions = [
        QuestionResponse(
            text=question.text,
            options=[OptionResponse(text=option.text) for option in question.options],
        )
        for question in quiz.questions
    ]
    return QuizResponse(questions=questions, **fields)


def build_quiz_summary(quiz: Optional[Quiz]) -> Optional[QuizSummary]:
    if quiz is None:
        return None
    return QuizSummary(
        id=str(quiz.id),
        title=quiz.title,
        description=quiz.description,
        difficulty=quiz.difficulty,
    )
