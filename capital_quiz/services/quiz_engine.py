import logging
import uuid
from typing import Callable, Dict, List, Optional, Union
from ..constants import Difficulty, HintType, INITIAL_HINTS, POINTS_BY_DIFFICULTY, QUESTION_QUANTITIES
from ..errors import (
    AlreadyAnsweredError,
    InvalidHintKindError,
    InvalidQuizConfigError,
    NoHintsAvailableError,
    QuestionNotFoundError,
    QuizCompletedError,
    QuizIncompleteError,
    SessionNotFoundError,
)
from ..models import AnswerFeedback, AnswerRecord, HintResult, PublicQuestion, Question, QuestionView, QuizResult
from ..state import Session, SessionStore
from .question_generator import QuestionGenerator
from .results import build_result

logger = logging.getLogger("capital_quiz")

HintData = Union[str, List[str]]

def _eliminate_alternative(question: Question) -> HintData:
    # First incorrect alternative in current order; the correct one always stays
    to_eliminate = next((alt for alt in question.alternatives if alt != question.correct_capital), None)
    if to_eliminate is not None:
        question.alternatives = [alt for alt in question.alternatives if alt != to_eliminate]
    return list(question.alternatives)

def _show_fact(question: Question) -> HintData:
    return question.fact

_HINT_HANDLERS: Dict[HintType, Callable[[Question], HintData]] = {
    HintType.ELIMINATE_ALTERNATIVE: _eliminate_alternative,
    HintType.SHOW_FACT: _show_fact,
}

_missing = set(HintType) - set(_HINT_HANDLERS)
if _missing:
    raise RuntimeError(f"hint types without a handler: {sorted(h.value for h in _missing)}")

class QuizEngine:
    """Runs quiz sessions: start, serve questions, grade, hints, results.

    A session goes Configuring -> Active inside ``start_quiz`` and leaves the
    store when ``get_results`` succeeds. Every call that touches a session
    holds that session's lock for its whole duration.
    """

    def __init__(self, store: SessionStore, generator: QuestionGenerator, initial_hints: int = INITIAL_HINTS) -> None:
        self.store = store
        self.generator = generator
        self.initial_hints = initial_hints

    def _require_session(self, session_id: str) -> Session:
        session = self.store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def start_quiz(self, difficulty: Difficulty | str, question_quantity: int) -> Session:
        try:
            tier = Difficulty(difficulty)
        except ValueError:
            raise InvalidQuizConfigError(f"Unsupported difficulty: {difficulty}") from None
        if question_quantity not in QUESTION_QUANTITIES:
            raise InvalidQuizConfigError(f"Unsupported question quantity: {question_quantity}")
        questions = self.generator.generate(tier, question_quantity)
        session = Session(
            session_id=str(uuid.uuid4()),
            difficulty=tier,
            question_quantity=question_quantity,
            questions=questions,
            hints_available=self.initial_hints,
        )
        self.store.create(session)
        logger.debug({"event": "session_started", "session_id": session.id, "difficulty": tier.value, "question_quantity": question_quantity})
        return session

    def get_current_question(self, session_id: str) -> QuestionView:
        with self.store.lock_for(session_id):
            session = self._require_session(session_id)
            if session.current_question_index >= len(session.questions):
                raise QuizCompletedError()
            question = session.questions[session.current_question_index]
            return QuestionView(
                question=PublicQuestion.from_question(question),
                progress=f"{session.current_question_index + 1} of {session.question_quantity}",
                hints_available=session.hints_available,
            )

    def submit_answer(self, session_id: str, question_id: int, selected_answer: Optional[str], time_spent: int) -> AnswerFeedback:
        with self.store.lock_for(session_id):
            session = self._require_session(session_id)
            question = session.find_question(question_id)
            if question is None:
                raise QuestionNotFoundError(question_id)
            if session.find_answer(question_id) is not None:
                raise AlreadyAnsweredError(question_id)

            # None means the timer ran out
            is_correct = selected_answer is not None and selected_answer == question.correct_capital
            points_earned = POINTS_BY_DIFFICULTY[session.difficulty] if is_correct else 0
            session.answers.append(AnswerRecord(
                question_id=question_id,
                selected_answer=selected_answer,
                is_correct=is_correct,
                points_earned=points_earned,
                time_spent=time_spent,
            ))
            session.current_question_index += 1
            is_last_question = session.current_question_index >= len(session.questions)

            logger.debug({
                "event": "submit_answer",
                "session_id": session_id,
                "question_id": question_id,
                "selected_answer": selected_answer,
                "correct_answer": question.correct_capital,
                "is_correct": is_correct,
                "points_earned": points_earned,
                "time_spent": time_spent,
            })
            message = "Correct!" if is_correct else f"Incorrect! The correct answer is: {question.correct_capital}"
            return AnswerFeedback(
                is_correct=is_correct,
                correct_answer=question.correct_capital,
                points_earned=points_earned,
                message=message,
                is_last_question=is_last_question,
            )

    def use_hint(self, session_id: str, question_id: int, hint_type: HintType | str) -> HintResult:
        with self.store.lock_for(session_id):
            session = self._require_session(session_id)
            if session.hints_available <= 0:
                raise NoHintsAvailableError()
            question = session.find_question(question_id)
            if question is None:
                raise QuestionNotFoundError(question_id)
            # Spent once the session and question checks pass, even for an unknown kind
            session.hints_available -= 1
            try:
                kind = HintType(hint_type)
            except ValueError:
                logger.debug({"event": "invalid_hint_type", "session_id": session_id, "hint_type": hint_type, "hints_remaining": session.hints_available})
                raise InvalidHintKindError(hint_type) from None
            hint_data = _HINT_HANDLERS[kind](question)
            logger.debug({"event": "hint_used", "session_id": session_id, "question_id": question_id, "hint_type": kind.value, "hints_remaining": session.hints_available})
            return HintResult(hint_type=kind, hint_data=hint_data, hints_remaining=session.hints_available)

    def get_results(self, session_id: str) -> QuizResult:
        with self.store.lock_for(session_id):
            session = self._require_session(session_id)
            if not session.is_complete:
                raise QuizIncompleteError(len(session.answers), session.question_quantity)
            result = build_result(session)
            self.store.delete(session_id)
            logger.debug({"event": "quiz_completed", "session_id": session_id, "total_score": result.total_score, "accuracy": result.accuracy_percentage})
            return result
