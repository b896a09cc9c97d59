from typing import Dict, Iterable

from beanie import PydanticObjectId
from beanie.operators import In

from quizhub.models.quiz import Quiz
from quizhub.models.user import User


async def users_by_id(user_ids: Iterable[PydanticObjectId]) -> Dict[PydanticObjectId, User]:
    ids = list(set(user_ids))
    if not ids:
        return {}
    users = await User.find(In(User.id, ids)).to_list()
    return {user.id: user for user in users}


async def quizzes_by_id(quiz_ids: Iterable[PydanticObjectId]) -> Dict[PydanticObjectId, Quiz]:
    ids = list(set(quiz_ids))
    if not ids:
        return {}
    quizzes = await Quiz.find(In(Quiz.id, ids)).to_list()
    return {quiz.id: quiz for quiz in quizzes}
