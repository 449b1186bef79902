import json
import logging
from functools import lru_cache
from typing import Iterable, List, Tuple
from ..config import settings
from ..constants import Difficulty
from ..models import CountryRecord

logger = logging.getLogger("capital_quiz")

class CountryDataset:
    """Read-only table of countries, their capitals and a fun fact each."""

    def __init__(self, records: Iterable[CountryRecord]) -> None:
        self._records: Tuple[CountryRecord, ...] = tuple(records)

    @classmethod
    def from_json(cls, path: str) -> "CountryDataset":
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        records = [CountryRecord.model_validate(item) for item in raw]
        capitals = [r.capital for r in records]
        if len(set(capitals)) != len(capitals):
            raise ValueError(f"duplicate capitals in {path}")
        logger.info({"event": "dataset_loaded", "path": path, "count": len(records)})
        return cls(records)

    def countries(self) -> Tuple[CountryRecord, ...]:
        return self._records

    def by_difficulty(self, difficulty: Difficulty | str) -> List[CountryRecord]:
        # Unknown tiers simply match nothing
        return [r for r in self._records if r.difficulty == difficulty]

    def capitals(self) -> List[str]:
        return [r.capital for r in self._records]

    def __len__(self) -> int:
        return len(self._records)

@lru_cache(maxsize=None)
def load_default_dataset() -> CountryDataset:
    return CountryDataset.from_json(settings.countries_path)
