"""Configuration management for the companion reading engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.schemas_reading import ReadingMode

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required)
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")

    # Environment
    READER_ENV: str = Field(default="dev", description="Environment: dev, staging, prod, test")

    # Book storage
    BOOKS_TABLE: str = Field(default="books", description="Table holding book metadata")
    BOOKS_BUCKET: str = Field(default="books", description="Storage bucket holding book files")

    # Pagination and search
    WORDS_PER_PAGE: int = Field(
        default=500, ge=1, description="Words per page for navigation and search"
    )
    SEARCH_CONTEXT_CHARS: int = Field(
        default=50, ge=0, description="Characters of context on each side of a search hit"
    )

    # Reading settings defaults (used when a user has no settings row)
    DEFAULT_READING_MODE: ReadingMode = Field(
        default=ReadingMode.PARAGRAPHS, description="Reading mode: fullpage, paragraphs, sentences"
    )
    DEFAULT_READING_AMOUNT: int = Field(
        default=3, ge=1, description="Paragraphs or sentences shown per page"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings instance loaded from the environment
    """
    return Settings()
