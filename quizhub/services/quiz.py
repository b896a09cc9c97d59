import logging
from datetime import datetime, timezone
from typing import List, Optional

from beanie import UpdateResponse
from beanie.operators import Set

from quizhub.core.errors import NotFound
from quizhub.core.policy import Action, authorize, is_allowed
from quizhub.helpers.object_id import parse_object_id
from quizhub.models.quiz import Option, Question, Quiz
from quizhub.models.user import User
from quizhub.schemas.req.quiz import QuestionDTO, QuizCreateDTO, QuizUpdateDTO
from quizhub.schemas.res.quiz import QuizResponse, build_quiz_response
from quizhub.services.lookups import users_by_id

logger = logging.getLogger(__name__)


def _to_questions(questions: List[QuestionDTO]) -> List[Question]:
    return [
        Question(
            text=question.text,
            options=[Option(text=option.text, is_correct=option.is_correct) for option in question.options],
        )
        for question in questions
    ]


class QuizService:
    async def _get_or_404(self, quiz_id: str) -> Quiz:
        quiz = await Quiz.get(parse_object_id(quiz_id, "quizId"))
        if not quiz:
            raise NotFound("Quiz not found", {"quizId": quiz_id})
        return quiz

    async def _respond(self, quizzes: List[Quiz], actor: Optional[User]) -> List[QuizResponse]:
        creators = await users_by_id(quiz.creator_id for quiz in quizzes)
        return [
            build_quiz_response(
                quiz,
                creators.get(quiz.creator_id),
                include_answer_key=is_allowed(actor, Action.VIEW_ANSWER_KEY, quiz),
            )
            for quiz in quizzes
        ]

    async def create_quiz(self, quiz_data: QuizCreateDTO, actor: User) -> QuizResponse:
        """Create a quiz owned by the caller."""
        quiz = Quiz(
            title=quiz_data.title,
            description=quiz_data.description,
            category=quiz_data.category,
            difficulty=quiz_data.difficulty,
            time_limit=quiz_data.time_limit,
            questions=_to_questions(quiz_data.questions),
            creator_id=actor.id,
            is_published=quiz_data.is_published,
        )
        await quiz.insert()
        logger.info("Quiz %s created by %s with %d questions", quiz.id, actor.id, quiz.total_questions)
        return build_quiz_response(quiz, actor, include_answer_key=True)

    async def get_all_quizzes(self, actor: Optional[User]) -> List[QuizResponse]:
        quizzes = await Quiz.find_all().sort(-Quiz.created_at).to_list()
        return await self._respond(quizzes, actor)

    async def get_quiz(self, quiz_id: str, actor: Optional[User]) -> QuizResponse:
        quiz = await self._get_or_404(quiz_id)
        authorize(actor, Action.READ_QUIZ, quiz)
        return (await self._respond([quiz], actor))[0]

    async def get_my_quizzes(self, actor: User) -> List[QuizResponse]:
        quizzes = await Quiz.find(Quiz.creator_id == actor.id).sort(-Quiz.created_at).to_list()
        return await self._respond(quizzes, actor)

    async def get_user_quizzes(self, user_id: str, actor: Optional[User]) -> List[QuizResponse]:
        """Published quizzes of another user."""
        creator_id = parse_object_id(user_id, "userId")
        quizzes = (
            await Quiz.find(Quiz.creator_id == creator_id, Quiz.is_published == True)  # noqa: E712
            .sort(-Quiz.created_at)
            .to_list()
        )
        return await self._respond(quizzes, actor)

    async def update_quiz(self, quiz_id: str, quiz_data: QuizUpdateDTO, actor: User) -> QuizResponse:
        quiz = await self._get_or_404(quiz_id)
        authorize(actor, Action.UPDATE_QUIZ, quiz)

        changes = {
            field: value
            for field, value in quiz_data.model_dump(exclude_unset=True, mode="json").items()
            if value is not None
        }
        changes["updated_at"] = datetime.now(timezone.utc)
        # $set only the edited fields so concurrent statistics increments survive
        updated = await Quiz.find_one(Quiz.id == quiz.id).update(
            Set(changes),
            response_type=UpdateResponse.NEW_DOCUMENT,
        )
        if updated is None:
            raise NotFound("Quiz not found", {"quizId": quiz_id})
        logger.info("Quiz %s updated by %s: %s", quiz.id, actor.id, sorted(changes))
        return (await self._respond([updated], actor))[0]

    async def delete_quiz(self, quiz_id: str, actor: User) -> dict:
        quiz = await self._get_or_404(quiz_id)
        authorize(actor, Action.DELETE_QUIZ, quiz)
        await quiz.delete()
        logger.info("Quiz %s deleted by %s", quiz.id, actor.id)
        return {"message": "Quiz removed"}
