import logging
import random
from typing import List
from ..constants import Difficulty, INCORRECT_ALTERNATIVES_COUNT, TIME_PER_QUESTION
from ..errors import InsufficientDataError, InvalidQuizConfigError
from ..models import Question
from .dataset import CountryDataset

logger = logging.getLogger("capital_quiz")

class QuestionGenerator:
    def __init__(self, dataset: CountryDataset, rng: random.Random | None = None) -> None:
        self.dataset = dataset
        self.rng = rng or random.Random()

    def _build_alternatives(self, correct_capital: str, all_capitals: List[str]) -> List[str]:
        """Correct capital plus three distinct wrong ones, in random order.

        Distractors may come from any tier.
        """
        incorrect_pool = [c for c in all_capitals if c != correct_capital]
        incorrect = self.rng.sample(incorrect_pool, INCORRECT_ALTERNATIVES_COUNT)
        alternatives = [correct_capital] + incorrect
        # Second, independent permutation so the correct answer's slot is uniform
        self.rng.shuffle(alternatives)
        return alternatives

    def generate(self, difficulty: Difficulty | str, count: int) -> List[Question]:
        try:
            tier = Difficulty(difficulty)
        except ValueError:
            raise InvalidQuizConfigError(f"Unsupported difficulty: {difficulty}") from None
        if count < 1:
            raise InvalidQuizConfigError(f"Question count must be positive, got {count}")
        candidates = self.dataset.by_difficulty(tier)
        if len(candidates) < count:
            raise InsufficientDataError(tier.value, len(candidates), count)
        all_capitals = self.dataset.capitals()
        selected = self.rng.sample(candidates, count)
        questions = [
            Question(
                id=index + 1,
                country=record.country,
                correct_capital=record.capital,
                alternatives=self._build_alternatives(record.capital, all_capitals),
                fact=record.fact,
                time_remaining=TIME_PER_QUESTION,
            )
            for index, record in enumerate(selected)
        ]
        logger.debug({"event": "questions_generated", "difficulty": tier.value, "count": len(questions)})
        return questions
