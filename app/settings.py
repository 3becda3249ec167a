import os
from pydantic import BaseModel
from functools import lru_cache
from dotenv import load_dotenv
load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    APP_NAME: str = os.getenv("APP_NAME", "Casting Marketplace API")
    ENV: str = os.getenv("ENV", "development")
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    STORAGE_DIR: str = os.getenv("STORAGE_DIR", "storage")
    MAX_RESUME_BYTES: int = int(os.getenv("MAX_RESUME_BYTES", str(10 * 1024 * 1024)))
    SQLITE_PATH: str = os.getenv("SQLITE_PATH", "casting.sqlite3")
    DATABASE_URL: str | None = os.getenv("DATABASE_URL") or None

    # OpenAI-compatible gateway, tried first when configured
    AI_GATEWAY_URL: str = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions")
    AI_GATEWAY_API_KEY: str | None = os.getenv("AI_GATEWAY_API_KEY") or None
    AI_GATEWAY_MODEL: str = os.getenv("AI_GATEWAY_MODEL", "google/gemini-2.5-flash")
    AI_GATEWAY_VISION_MODEL: str = os.getenv("AI_GATEWAY_VISION_MODEL", "google/gemini-2.5-pro")
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY") or None
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_VISION_MODEL: str = os.getenv("OPENAI_VISION_MODEL", "gpt-4o")
    OPENAI_EMBEDDING_MODEL: str = os.getenv("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small")
    OPENROUTER_API_KEY: str | None = os.getenv("OPENROUTER_API_KEY") or None
    OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "google/gemini-2.5-flash")
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    LLM_TIMEOUT: int = int(os.getenv("LLM_TIMEOUT", "60"))
    LLM_MAX_ATTEMPTS: int = int(os.getenv("LLM_MAX_ATTEMPTS", "3"))

    SHORTLIST_MIN_SCORE: float = float(os.getenv("SHORTLIST_MIN_SCORE", "50"))
    CANDIDATE_POOL_SIZE: int = int(os.getenv("CANDIDATE_POOL_SIZE", "50"))

    QDRANT_URL: str = os.getenv("QDRANT_URL", "http://localhost:6333")
    QDRANT_API_KEY: str | None = os.getenv("QDRANT_API_KEY") or None
    TALENT_INDEX_ENABLED: bool = _flag("TALENT_INDEX_ENABLED")
    EMBEDDING_DIM: int = int(os.getenv("EMBEDDING_DIM", "1536"))

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL or f"sqlite:///{self.SQLITE_PATH}"


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
