import math
from datetime import datetime, timezone
from typing import Optional
from ..constants import PERFORMANCE_MESSAGES
from ..models import QuizResult
from ..state import Session

def accuracy_percentage(correct: int, total: int) -> float:
    """Percentage rounded half-up to one decimal."""
    if total <= 0:
        return 0.0
    return math.floor(correct / total * 1000 + 0.5) / 10

def performance_message(accuracy: float) -> str:
    for threshold, message in PERFORMANCE_MESSAGES:
        if accuracy >= threshold:
            return message
    return PERFORMANCE_MESSAGES[-1][1]

def build_result(session: Session, completed_at: Optional[datetime] = None) -> QuizResult:
    total_score = sum(a.points_earned for a in session.answers)
    correct = sum(1 for a in session.answers if a.is_correct)
    accuracy = accuracy_percentage(correct, session.question_quantity)
    return QuizResult(
        session_id=session.id,
        difficulty=session.difficulty,
        question_quantity=session.question_quantity,
        total_score=total_score,
        correct_answers=correct,
        incorrect_answers=len(session.answers) - correct,
        accuracy_percentage=accuracy,
        performance_message=performance_message(accuracy),
        completed_at=completed_at or datetime.now(timezone.utc),
    )
