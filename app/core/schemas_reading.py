"""Pydantic schemas for book reading: content, search, history and settings."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ReadingMode(str, Enum):
    """How much of a page is shown per navigation."""

    FULLPAGE = "fullpage"
    PARAGRAPHS = "paragraphs"
    SENTENCES = "sentences"


class ReadingContent(BaseModel):
    """Reduced page content plus navigation flags."""

    content: str = Field(..., description="Page text reduced per the user's reading settings")
    current_page: int = Field(..., ge=1, description="1-based page number")
    total_pages: int = Field(..., ge=1, description="Page count of the freshly computed split")
    has_next: bool = Field(..., description="True when current_page < total_pages")
    has_previous: bool = Field(..., description="True when current_page > 1")


class SearchHit(BaseModel):
    """One keyword occurrence inside a page."""

    page: int = Field(..., ge=1, description="1-based page containing the match")
    context: str = Field(..., description="Page text surrounding the match")
    position: int = Field(..., ge=0, description="Character offset of the match within the page")


class SearchResults(BaseModel):
    """Search response envelope."""

    results: list[SearchHit] = Field(default_factory=list)


class ReadingPosition(BaseModel):
    """Persisted reading position for a (user, book) pair."""

    history_id: str | None = None
    user_id: str
    book_name: str
    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    last_read_at: datetime | None = None
    created_at: datetime | None = None
    reading_progress: int = Field(default=0, description="Percent read, 0-100")


class ReadingHistoryList(BaseModel):
    """All reading positions of a user, most recent first."""

    history: list[ReadingPosition] = Field(default_factory=list)
    total: int = 0


class ReadingSettings(BaseModel):
    """Per-user reading preferences."""

    settings_id: str = Field(default="", description="Empty when no row has been persisted")
    user_id: str
    reading_mode: ReadingMode = ReadingMode.PARAGRAPHS
    reading_amount: int = Field(default=3, ge=1)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReadingSettingsUpdate(BaseModel):
    """Request body for updating reading settings."""

    reading_mode: ReadingMode = Field(..., description="fullpage, paragraphs or sentences")
    reading_amount: int = Field(..., ge=1, description="Paragraph or sentence count")
