from typing import List, Optional

from pydantic import Field, field_validator

from quizhub.models.quiz import DifficultyEnum
from quizhub.schemas.base import CamelModel

MAX_TIME_LIMIT = 180


class OptionDTO(CamelModel):
    text: str = Field(min_length=1)
    is_correct: bool = False


class QuestionDTO(CamelModel):
    text: str = Field(min_length=1)
    options: List[OptionDTO] = Field(min_length=2)

    @field_validator("options")
    @classmethod
    def require_correct_option(cls, options: List[OptionDTO]) -> List[OptionDTO]:
        if not any(option.is_correct for option in options):
            raise ValueError("at least one option must be marked correct")
        return options


class QuizCreateDTO(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1)
    difficulty: DifficultyEnum
    time_limit: int = Field(ge=1, le=MAX_TIME_LIMIT)
    questions: List[QuestionDTO] = Field(min_length=1)
    is_published: bool = False


class QuizUpdateDTO(CamelModel):
    """Partial update; creator and statistics are not writable."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    difficulty: Optional[DifficultyEnum] = None
    time_limit: Optional[int] = Field(default=None, ge=1, le=MAX_TIME_LIMIT)
    questions: Optional[List[QuestionDTO]] = Field(default=None, min_length=1)
    is_published: Optional[bool] = None
