class QuizError(Exception):
    """Base class for every condition the quiz core reports to its caller.

    ``code`` and ``status_code`` are only read by the HTTP layer; the core
    never looks at them.
    """

    code = "QUIZ_ERROR"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SessionNotFoundError(QuizError):
    code = "SESSION_NOT_FOUND"
    status_code = 404

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class QuestionNotFoundError(QuizError):
    code = "QUESTION_NOT_FOUND"
    status_code = 404

    def __init__(self, question_id: int) -> None:
        super().__init__(f"Question not found: {question_id}")
        self.question_id = question_id


class QuizCompletedError(QuizError):
    code = "QUIZ_COMPLETED"

    def __init__(self) -> None:
        super().__init__("All questions have already been answered")


class QuizIncompleteError(QuizError):
    code = "QUIZ_INCOMPLETE"

    def __init__(self, answered: int, total: int) -> None:
        super().__init__(f"Quiz has not been completed yet ({answered} of {total} answered)")
        self.answered = answered
        self.total = total


class AlreadyAnsweredError(QuizError):
    code = "ALREADY_ANSWERED"

    def __init__(self, question_id: int) -> None:
        super().__init__(f"Question {question_id} has already been answered")
        self.question_id = question_id


class NoHintsAvailableError(QuizError):
    code = "NO_HINTS_AVAILABLE"

    def __init__(self) -> None:
        super().__init__("No hints available")


class InvalidHintKindError(QuizError):
    code = "INVALID_HINT_TYPE"

    def __init__(self, hint_type: object) -> None:
        super().__init__(f"Invalid hint type: {hint_type}")
        self.hint_type = hint_type


class InsufficientDataError(QuizError):
    code = "INSUFFICIENT_DATA"
    status_code = 422

    def __init__(self, difficulty: str, available: int, requested: int) -> None:
        super().__init__(
            f"Not enough countries for difficulty {difficulty}. "
            f"Available: {available}, Requested: {requested}"
        )
        self.difficulty = difficulty
        self.available = available
        self.requested = requested


class InvalidQuizConfigError(QuizError):
    code = "INVALID_QUIZ_CONFIG"
