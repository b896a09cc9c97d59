from datetime import datetime, timezone
from enum import Enum

from beanie import Document, Indexed
from pydantic import Field


class UserRoleEnum(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(Document):
    username: Indexed(str, unique=True)
    email: Indexed(str, unique=True)
    password: str
    role: UserRoleEnum = UserRoleEnum.USER
    quizzes_taken: int = 0
    total_score: float = 0  # sum of attempt percentages
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "users"

    @property
    def average_score(self) -> float:
        if not self.quizzes_taken:
            return 0.0
        return self.total_score / self.quizzes_taken

    @property
    def is_admin(self) -> bool:
        return self.role == UserRoleEnum.ADMIN
