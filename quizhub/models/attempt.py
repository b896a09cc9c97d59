from datetime import datetime, timezone
from typing import List
from uuid import uuid4

from beanie import Document, PydanticObjectId
from pydantic import BaseModel, Field
from pymongo import ASCENDING, DESCENDING, IndexModel


class Answer(BaseModel):
    question_index: int
    selected_option: int
    is_correct: bool


class Attempt(Document):
    """One completed submission of answers to a quiz. Never updated after insert."""

    user_id: PydanticObjectId
    quiz_id: PydanticObjectId
    answers: List[Answer] = Field(default_factory=list)
    score: int = Field(ge=0)
    max_score: int = Field(ge=0)
    percentage: float = Field(ge=0, le=100)
    time_spent: int = Field(ge=0)  # seconds
    started_at: datetime
    completed_at: datetime
    # Client idempotency key; a random one is generated when the client sends none
    submission_key: str = Field(default_factory=lambda: uuid4().hex)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "attempts"
        indexes = [
            IndexModel([("user_id", ASCENDING), ("completed_at", DESCENDING)]),
            IndexModel([("quiz_id", ASCENDING), ("completed_at", DESCENDING)]),
            IndexModel([("user_id", ASCENDING), ("submission_key", ASCENDING)], unique=True),
        ]
