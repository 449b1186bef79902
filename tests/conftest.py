import random

import pytest
from fastapi.testclient import TestClient

from capital_quiz.config import Settings
from capital_quiz.constants import Difficulty
from capital_quiz.main import create_app
from capital_quiz.models import CountryRecord
from capital_quiz.services.dataset import CountryDataset, load_default_dataset
from capital_quiz.services.question_generator import QuestionGenerator
from capital_quiz.services.quiz_engine import QuizEngine
from capital_quiz.state import SessionStore


def make_dataset(per_tier):
    """Synthetic table: ``per_tier`` maps tier -> number of countries."""
    records = []
    for tier, count in per_tier.items():
        for i in range(count):
            records.append(CountryRecord(
                country=f"{tier.value}-country-{i}",
                capital=f"{tier.value}-capital-{i}",
                difficulty=tier,
                fact=f"fact about {tier.value} country {i}",
            ))
    return CountryDataset(records)


@pytest.fixture
def dataset():
    return load_default_dataset()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def engine(dataset, rng, store):
    return QuizEngine(store, QuestionGenerator(dataset, rng=rng))


@pytest.fixture
def client(engine):
    config = Settings(api_prefix="/api/v1/external", log_level="DEBUG")
    with TestClient(create_app(config, engine=engine)) as c:
        yield c


@pytest.fixture
def small_dataset():
    return make_dataset({Difficulty.EASY: 15, Difficulty.MEDIUM: 5, Difficulty.HARD: 5})
