"""Quiz engine error taxonomy.

Every error is raised before any record is written, or inside the store
transaction so that the transaction rolls back. None of them is retried by
the engine; the HTTP layer maps them to status codes in
``cq.middleware.error_handler``.
"""

from __future__ import annotations


class QuizError(Exception):
    """Base class for all engine errors."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(QuizError):
    """A referenced topic or question does not exist."""

    status_code = 404


class EmptySubmission(QuizError):
    """A submission carried zero answers."""

    status_code = 400

    def __init__(self, message: str = "Submission contains no answers") -> None:
        super().__init__(message)


class UnknownQuestion(QuizError):
    """An answer references a question outside the topic's question bank."""

    status_code = 400

    def __init__(self, question_id: int, topic_id: int) -> None:
        super().__init__(f"Question {question_id} not found in topic {topic_id}")
        self.question_id = question_id
        self.topic_id = topic_id


class StoreUnavailable(QuizError):
    """The underlying record store failed."""

    status_code = 503
