"""
Grading of single-select multiple choice submissions.

A submission is a list of (question_index, selected_option) pairs. The
stored answer key decides correctness; whatever correctness the client
claims is ignored. Every question is worth one point and unanswered
questions score zero.
"""
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from quizhub.core.errors import InvalidArgument
from quizhub.models.attempt import Answer
from quizhub.models.quiz import Question


@dataclass(frozen=True)
class GradedSubmission:
    answers: List[Answer]
    score: int
    max_score: int
    percentage: float


def compute_percentage(score: float, max_score: float) -> float:
    if max_score <= 0:
        return 0.0
    percentage = score / max_score * 100
    return round(min(max(percentage, 0.0), 100.0), 2)


def grade_submission(questions: Sequence[Question], selections: Iterable[Tuple[int, int]]) -> GradedSubmission:
    answers: List[Answer] = []
    seen = set()
    for question_index, selected_option in selections:
        if question_index < 0 or question_index >= len(questions):
            raise InvalidArgument(
                "Answer references a question that does not exist",
                {"questionIndex": question_index},
            )
        if question_index in seen:
            raise InvalidArgument("Question answered more than once", {"questionIndex": question_index})
        seen.add(question_index)

        options = questions[question_index].options
        if selected_option < 0 or selected_option >= len(options):
            raise InvalidArgument(
                "Selected option does not exist",
                {"questionIndex": question_index, "selectedOption": selected_option},
            )
        answers.append(
            Answer(
                question_index=question_index,
                selected_option=selected_option,
                is_correct=options[selected_option].is_correct,
            )
        )

    answers.sort(key=lambda answer: answer.question_index)
    score = sum(1 for answer in answers if answer.is_correct)
    max_score = len(questions)
    return GradedSubmission(
        answers=answers,
        score=score,
        max_score=max_score,
        percentage=compute_percentage(score, max_score),
    )
