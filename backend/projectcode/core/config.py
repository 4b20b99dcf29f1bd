from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Project Code"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    SQLALCHEMY_DATABASE_URI: str = "sqlite:///./projectcode.db"

    # Gemini exposes an OpenAI-compatible surface; any compatible provider works.
    LLM_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    # Server-side fallback credential. Flows never read it directly.
    GEMINI_API_KEY: str | None = None
    MODEL_DEFAULT: str = "gemini-2.5-flash"
    MODEL_TTS: str = "gemini-2.5-flash-preview-tts"
    MODEL_IMAGE: str = "imagen-3.0-generate-002"
    TTS_VOICE: str = "Algenib"

    RAZORPAY_KEY_ID: str | None = None
    RAZORPAY_KEY_SECRET: str | None = None
    RAZORPAY_WEBHOOK_SECRET: str | None = None
    RAZORPAY_API_BASE: str = "https://api.razorpay.com/v1"

    FIREBASE_PROJECT_ID: str | None = None
    FIREBASE_SERVICE_ACCOUNT_PATH: str | None = None

    PRACTICE_HISTORY_LIMIT: int = 50
    ANALYSIS_HISTORY_LIMIT: int = 20
    TRIAL_DAYS: int = 30


settings = Settings()  # type: ignore
