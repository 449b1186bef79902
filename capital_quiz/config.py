import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()

_DEFAULT_COUNTRIES_PATH = os.path.join(os.path.dirname(__file__), "data", "countries.json")

def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)

class Settings(BaseModel):
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/api/v1/external")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    cors_origins: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    initial_hints: int = int(os.getenv("INITIAL_HINTS", "3"))
    session_ttl_minutes: int | None = _optional_int("SESSION_TTL_MINUTES") if "SESSION_TTL_MINUTES" in os.environ else 120
    max_sessions: int | None = _optional_int("MAX_SESSIONS") if "MAX_SESSIONS" in os.environ else 10000
    quiz_seed: int | None = _optional_int("QUIZ_SEED")
    countries_path: str = os.getenv("COUNTRIES_PATH", _DEFAULT_COUNTRIES_PATH)

settings = Settings()
