from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow"
    )

    # Application
    app_name: str = "SmartLesson"
    app_version: str = "1.0.0"
    environment: str = "development"  # development, staging, production
    debug: bool = True

    # API
    api_v1_prefix: str = "/api/v1"

    # Database
    database_url: str = "sqlite:///./smartlesson.db"

    # Logging
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: str = "/tmp/smartlesson.log"

    # LLM Configuration
    llm_provider: str = "mock"  # mock, google, openai
    llm_model: str = "gemini-1.5-flash"
    llm_temperature: float = 0.7
    max_tokens: int = 2000

    # API Keys
    google_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    # Lesson editing
    max_section_chars: int = 200

    # Quiz generation
    min_quiz_questions: int = 3
    max_quiz_questions: int = 10

    # CORS
    allowed_origins: list = ["*"]

    # Server
    host: str = "0.0.0.0"
    port: int = 8000


# Create single instance to be imported throughout the app
settings = Settings()
