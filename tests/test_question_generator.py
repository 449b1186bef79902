import random

import pytest

from capital_quiz.constants import Difficulty, TIME_PER_QUESTION
from capital_quiz.errors import InsufficientDataError, InvalidQuizConfigError
from capital_quiz.services.question_generator import QuestionGenerator


def test_generates_requested_count_with_sequential_ids(dataset, rng):
    questions = QuestionGenerator(dataset, rng=rng).generate(Difficulty.EASY, 5)
    assert [q.id for q in questions] == [1, 2, 3, 4, 5]


def test_countries_do_not_repeat(dataset, rng):
    questions = QuestionGenerator(dataset, rng=rng).generate(Difficulty.MEDIUM, 20)
    assert len({q.country for q in questions}) == 20


def test_questions_come_from_requested_tier(dataset, rng):
    hard = {r.country: r for r in dataset.by_difficulty(Difficulty.HARD)}
    for q in QuestionGenerator(dataset, rng=rng).generate(Difficulty.HARD, 10):
        assert q.country in hard
        assert q.correct_capital == hard[q.country].capital
        assert q.fact == hard[q.country].fact
        assert q.time_remaining == TIME_PER_QUESTION


def test_alternatives_are_four_unique_including_correct(dataset, rng):
    all_capitals = set(dataset.capitals())
    for q in QuestionGenerator(dataset, rng=rng).generate(Difficulty.EASY, 20):
        assert len(q.alternatives) == 4
        assert len(set(q.alternatives)) == 4
        assert q.correct_capital in q.alternatives
        assert set(q.alternatives) <= all_capitals


def test_distractors_can_come_from_any_tier(small_dataset):
    # Only five medium countries, so distractors must reach into other tiers
    gen = QuestionGenerator(small_dataset, rng=random.Random(7))
    seen = set()
    for _ in range(20):
        for q in gen.generate(Difficulty.MEDIUM, 5):
            seen.update(a for a in q.alternatives if a != q.correct_capital)
    assert any(not a.startswith("medium-") for a in seen)


def test_correct_answer_position_varies(dataset):
    gen = QuestionGenerator(dataset, rng=random.Random(99))
    positions = set()
    for _ in range(10):
        for q in gen.generate(Difficulty.EASY, 20):
            positions.add(q.alternatives.index(q.correct_capital))
    assert positions == {0, 1, 2, 3}


def test_same_seed_is_reproducible(dataset):
    first = QuestionGenerator(dataset, rng=random.Random(42)).generate(Difficulty.HARD, 15)
    second = QuestionGenerator(dataset, rng=random.Random(42)).generate(Difficulty.HARD, 15)
    assert [q.model_dump() for q in first] == [q.model_dump() for q in second]


def test_insufficient_data_reports_counts(small_dataset, rng):
    with pytest.raises(InsufficientDataError) as excinfo:
        QuestionGenerator(small_dataset, rng=rng).generate(Difficulty.EASY, 20)
    err = excinfo.value
    assert err.available == 15
    assert err.requested == 20
    assert "15" in err.message and "20" in err.message


def test_exactly_available_count_succeeds(small_dataset, rng):
    questions = QuestionGenerator(small_dataset, rng=rng).generate(Difficulty.EASY, 15)
    assert len(questions) == 15


@pytest.mark.parametrize("difficulty,count", [
    ("legendary", 5),
    ("easy", 0),
    ("easy", -3),
])
def test_unsupported_config_is_a_quiz_error(dataset, rng, difficulty, count):
    with pytest.raises(InvalidQuizConfigError):
        QuestionGenerator(dataset, rng=rng).generate(difficulty, count)
