"""Application settings and configuration."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file if present
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # AWS CONFIG (credentials themselves are resolved by boto3)
    aws_default_region: str | None = Field(
        default=None,
        description="AWS region for Bedrock",
        validation_alias="AWS_DEFAULT_REGION",
    )

    # Model Configuration
    model_name: str = Field(
        default="anthropic.claude-3-7-sonnet-20250219-v1:0",
        description="Model to use (AWS Bedrock model ID)",
        validation_alias="MODEL_NAME",
    )

    # Generation Settings
    default_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Temperature for study aid and quiz generation",
        validation_alias="DEFAULT_TEMPERATURE",
    )

    max_generation_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Total attempts per generation request",
        validation_alias="MAX_GENERATION_ATTEMPTS",
    )

    backoff_base_seconds: float = Field(
        default=2.0,
        gt=0.0,
        description="Base of the exponential backoff between attempts",
        validation_alias="BACKOFF_BASE_SECONDS",
    )

    quiz_question_count: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Number of questions requested per quiz batch",
        validation_alias="QUIZ_QUESTION_COUNT",
    )

    # Content Settings
    max_content_chars: int = Field(
        default=50_000,
        ge=1,
        description="Extracted text is truncated to this many characters",
        validation_alias="MAX_CONTENT_CHARS",
    )

    # Profile Settings
    initial_confidence: int = Field(
        default=85,
        ge=0,
        le=100,
        description="Profile confidence at the start of a session",
        validation_alias="INITIAL_CONFIDENCE",
    )

    profile_path: str = Field(
        default="~/.learnmate/profile.json",
        description="Where the learning style preference is stored",
        validation_alias="LEARNMATE_PROFILE_PATH",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the CLI",
        validation_alias="LOG_LEVEL",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Loaded the first time and then cached for the rest of the process
@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with loaded configuration
    """
    return Settings()
