from datetime import datetime
from typing import List, Optional

from pydantic import Field

from quizhub.schemas.base import CamelModel

MAX_TIME_SPENT = 7 * 24 * 60 * 60  # seconds


class AnswerDTO(CamelModel):
    question_index: int = Field(ge=0)
    selected_option: int = Field(ge=0)


class AttemptCreateDTO(CamelModel):
    quiz_id: str = Field(min_length=1)
    answers: List[AnswerDTO]
    time_spent: int = Field(ge=0, le=MAX_TIME_SPENT)
    # Client-computed values; the server grades on its own and only compares
    score: Optional[float] = Field(default=None, ge=0)
    percentage: Optional[float] = Field(default=None, ge=0, le=100)
    completed_at: Optional[datetime] = None
    submission_key: Optional[str] = Field(default=None, min_length=1, max_length=128)
