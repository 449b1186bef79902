from enum import Enum
from typing import Dict, List, Tuple


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class HintType(str, Enum):
    ELIMINATE_ALTERNATIVE = "eliminate_alternative"
    SHOW_FACT = "show_fact"


QUESTION_QUANTITIES: Tuple[int, ...] = (5, 10, 15, 20)

POINTS_BY_DIFFICULTY: Dict[Difficulty, int] = {
    Difficulty.EASY: 5,
    Difficulty.MEDIUM: 10,
    Difficulty.HARD: 15,
}

INITIAL_HINTS = 3
TIME_PER_QUESTION = 30
ALTERNATIVES_COUNT = 4
INCORRECT_ALTERNATIVES_COUNT = ALTERNATIVES_COUNT - 1

# Highest threshold first; the first match wins.
PERFORMANCE_MESSAGES: List[Tuple[float, str]] = [
    (90, "Excellent!"),
    (70, "Very good!"),
    (50, "Good job!"),
    (0, "Keep practicing!"),
]
