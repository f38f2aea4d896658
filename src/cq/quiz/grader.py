"""Answer grading against the withheld answer key."""

from __future__ import annotations

from collections.abc import Sequence

from cq.errors import EmptySubmission, NotFound, UnknownQuestion
from cq.quiz.schemas import DetailedAnswer, SubmittedAnswer
from cq.store.base import RecordStore
from cq.store.records import Kind, Question


def grade_answers(
    topic_id: int,
    questions: Sequence[Question],
    answers: Sequence[SubmittedAnswer],
) -> list[DetailedAnswer]:
    """Grade ``answers`` against the topic's full question bank.

    Correctness is exact, case-sensitive string equality with no
    normalization. Output order equals input order. Any answer whose
    question is not in ``questions`` fails the whole call before anything
    is returned.
    """
    by_id = {q.id: q for q in questions}
    graded = []
    for answer in answers:
        question = by_id.get(answer.question_id)
        if question is None:
            raise UnknownQuestion(answer.question_id, topic_id)
        graded.append(
            DetailedAnswer(
                question_id=answer.question_id,
                question=question.prompt,
                user_answer=answer.answer,
                correct_answer=question.correct_answer,
                is_correct=answer.answer == question.correct_answer,
                time_spent=answer.time_spent,
                cultural_fact=question.cultural_fact,
                image_url=question.image_url,
                difficulty=question.difficulty,
            )
        )
    return graded


async def grade(
    store: RecordStore,
    topic_id: int,
    answers: Sequence[SubmittedAnswer],
) -> list[DetailedAnswer]:
    """Load the topic's questions and grade the submitted answers."""
    if not answers:
        raise EmptySubmission
    if await store.get(Kind.TOPIC, topic_id) is None:
        raise NotFound(f"Topic {topic_id} not found")
    questions = await store.list(Kind.QUESTION, topic_id=topic_id)
    return grade_answers(topic_id, questions, answers)
