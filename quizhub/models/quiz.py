from datetime import datetime, timezone
from enum import Enum
from typing import List

from beanie import Document, PydanticObjectId
from pydantic import BaseModel, Field
from pymongo import ASCENDING, DESCENDING, IndexModel


class DifficultyEnum(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Option(BaseModel):
    text: str
    is_correct: bool = False


class Question(BaseModel):
    text: str
    options: List[Option]


class Quiz(Document):
    title: str
    description: str
    category: str
    difficulty: DifficultyEnum
    time_limit: int  # minutes
    questions: List[Question]
    creator_id: PydanticObjectId
    is_published: bool = False
    # Aggregates only ever move through $inc, see services/statistics.py
    total_attempts: int = 0
    total_percentage: float = 0
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "quizzes"
        indexes = [
            IndexModel([("creator_id", ASCENDING)]),
            IndexModel([("created_at", DESCENDING)]),
        ]

    @property
    def average_score(self) -> float:
        if not self.total_attempts:
            return 0.0
        return self.total_percentage / self.total_attempts

    @property
    def total_questions(self) -> int:
        return len(self.questions)
