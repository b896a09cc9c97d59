"""
Access policy for quizzes, attempts and platform administration.

Every use case asks this module instead of branching on roles itself.
Two roles exist (user, admin) and one ownership relation: a quiz is
owned by its creator, an attempt by the user who submitted it.
"""
import logging
from enum import Enum
from typing import Optional, Union

from quizhub.core.errors import Forbidden
from quizhub.models.attempt import Attempt
from quizhub.models.quiz import Quiz
from quizhub.models.user import User

logger = logging.getLogger(__name__)


class Action(str, Enum):
    READ_QUIZ = "read_quiz"
    VIEW_ANSWER_KEY = "view_answer_key"
    UPDATE_QUIZ = "update_quiz"
    DELETE_QUIZ = "delete_quiz"
    LIST_QUIZ_ATTEMPTS = "list_quiz_attempts"
    READ_ATTEMPT = "read_attempt"
    MANAGE_USERS = "manage_users"
    VIEW_PLATFORM_STATS = "view_platform_stats"


OWNER_OR_ADMIN = {
    Action.VIEW_ANSWER_KEY,
    Action.UPDATE_QUIZ,
    Action.DELETE_QUIZ,
    Action.LIST_QUIZ_ATTEMPTS,
    Action.READ_ATTEMPT,
}
ADMIN_ONLY = {Action.MANAGE_USERS, Action.VIEW_PLATFORM_STATS}


def _owner_id(resource: Union[Quiz, Attempt, None]):
    if isinstance(resource, Quiz):
        return resource.creator_id
    if isinstance(resource, Attempt):
        return resource.user_id
    return None


def is_allowed(actor: Optional[User], action: Action, resource: Union[Quiz, Attempt, None] = None) -> bool:
    if action == Action.READ_QUIZ:
        return True
    if actor is None:
        return False
    if actor.is_admin:
        return True
    if action in ADMIN_ONLY:
        return False
    if action in OWNER_OR_ADMIN:
        owner_id = _owner_id(resource)
        return owner_id is not None and owner_id == actor.id
    return False


def authorize(actor: Optional[User], action: Action, resource: Union[Quiz, Attempt, None] = None) -> None:
    if not is_allowed(actor, action, resource):
        logger.info(
            "Denied %s for user %s",
            action.value,
            actor.id if actor is not None else "anonymous",
        )
        raise Forbidden("Not authorized", {"action": action.value})
