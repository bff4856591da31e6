import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv #for .env files
from pydantic import BaseModel

load_dotenv()

DEVELOPMENT = "development"
PRODUCTION = "production"


def _env_flag(name: str, default: Optional[bool] = None) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    database_url: str = "sqlite:///./jobtracker.db"
    secret_key: str = "your_default_jwt_secret_key"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    environment: str = PRODUCTION
    force_regenerate: bool = False   # skip the generated-content cache
    premium_ai_only: bool = False    # gate the AI endpoints on User.is_premium
    free_tier_job_limit: int = 10
    frontend_url: str = "http://localhost:3000"

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def api_key_status(self) -> str:
        return "configured" if self.has_api_key else "missing"

    @classmethod
    def from_env(cls) -> "Settings":
        environment = os.getenv("APP_ENV", PRODUCTION).strip().lower() or PRODUCTION
        # development mode always regenerates unless told otherwise
        force = _env_flag("FORCE_REGENERATE", environment == DEVELOPMENT)
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./jobtracker.db"),
            secret_key=os.getenv("SECRET_KEY", "your_default_jwt_secret_key"),
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            environment=environment,
            force_regenerate=force,
            premium_ai_only=_env_flag("PREMIUM_AI_ONLY", False),
            free_tier_job_limit=int(os.getenv("FREE_TIER_JOB_LIMIT", 10)),
            frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3000"),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
