"""Reading session entry point.

Every reader interaction is expressed as a command object and handled by
``handle_reading_command``:

- StartReading / ContinueReading / GoToPage serve one reduced page and save
  the reader's position before returning it.
- FindInBook searches the whole book and does not touch per-user state.
- CheckHistory / ListHistory read saved positions.
- GetSettings / SetSettings read and write the reading mode preference.

Domain failures (missing book, page out of range, bad settings) come back as
a ReadingOutcome carrying an error kind. Storage failures are raised.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.core.book_search import search_book_content
from app.core.config import get_settings
from app.core.content_reducer import reduce_page_content
from app.core.logging import get_logger, log_with_context
from app.core.pagination import split_into_pages
from app.core.schemas_reading import (
    ReadingContent,
    ReadingMode,
    ReadingPosition,
    ReadingSettings,
    SearchResults,
)
from app.db.books import get_book_content
from app.db.reading_history import (
    get_reading_history,
    list_reading_history,
    update_reading_progress,
)
from app.db.reading_settings import get_reading_settings, set_reading_settings

logger = get_logger(__name__)


# ============================================================================
# Commands
# ============================================================================


@dataclass(frozen=True)
class StartReading:
    book_name: str


@dataclass(frozen=True)
class ContinueReading:
    book_name: str


@dataclass(frozen=True)
class GoToPage:
    book_name: str
    page_number: int


@dataclass(frozen=True)
class FindInBook:
    book_name: str
    keyword: str


@dataclass(frozen=True)
class CheckHistory:
    book_name: str


@dataclass(frozen=True)
class ListHistory:
    pass


@dataclass(frozen=True)
class GetSettings:
    pass


@dataclass(frozen=True)
class SetSettings:
    reading_mode: ReadingMode | str
    reading_amount: int


ReadingCommand = (
    StartReading
    | ContinueReading
    | GoToPage
    | FindInBook
    | CheckHistory
    | ListHistory
    | GetSettings
    | SetSettings
)


# ============================================================================
# Outcome
# ============================================================================


class ReadingErrorKind(str, Enum):
    """Domain failures reported through ReadingOutcome."""

    BOOK_NOT_FOUND = "book_not_found"
    INVALID_PAGE = "invalid_page"
    INVALID_SETTINGS = "invalid_settings"


@dataclass
class ReadingOutcome:
    """Result of a reading command: a value, or an error kind with detail."""

    value: Any = None
    error: ReadingErrorKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "ReadingOutcome":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ReadingErrorKind, detail: str) -> "ReadingOutcome":
        return cls(error=error, detail=detail)


# ============================================================================
# Dispatch
# ============================================================================


def handle_reading_command(user_id: str, command: ReadingCommand) -> ReadingOutcome:
    """
    Run one reading command for a user.

    Args:
        user_id: User identifier
        command: One of the command dataclasses above

    Returns:
        ReadingOutcome with the command's value or a domain error

    Raises:
        TypeError: If the command type is not recognised
        Exception: If reading history or settings storage fails
    """
    logger.debug(
        f"Handling {type(command).__name__}",
        extra={"user_id": user_id, "command": type(command).__name__},
    )

    if isinstance(command, StartReading):
        return start_reading(user_id, command.book_name)
    if isinstance(command, ContinueReading):
        return continue_reading(user_id, command.book_name)
    if isinstance(command, GoToPage):
        return go_to_page(user_id, command.book_name, command.page_number)
    if isinstance(command, FindInBook):
        return find_in_book(command.book_name, command.keyword)
    if isinstance(command, CheckHistory):
        return check_history(user_id, command.book_name)
    if isinstance(command, ListHistory):
        return list_history(user_id)
    if isinstance(command, GetSettings):
        return get_settings_for_user(user_id)
    if isinstance(command, SetSettings):
        return update_settings(user_id, command.reading_mode, command.reading_amount)

    raise TypeError(f"Unsupported reading command: {type(command).__name__}")


# ============================================================================
# Read operations
# ============================================================================


def _read_page(user_id: str, book_name: str, page_number: int) -> ReadingOutcome:
    """Fetch, split, validate, reduce and persist one page."""
    book = get_book_content(book_name)
    if book is None:
        return ReadingOutcome.failure(
            ReadingErrorKind.BOOK_NOT_FOUND, f"Book not found: {book_name}"
        )

    pages = split_into_pages(book.content, get_settings().WORDS_PER_PAGE)
    total_pages = len(pages)

    if book.declared_total_pages is not None and book.declared_total_pages != total_pages:
        logger.debug(
            f"Declared page count {book.declared_total_pages} differs from computed {total_pages}",
            extra={"book_name": book_name},
        )

    if page_number < 1 or page_number > total_pages:
        return ReadingOutcome.failure(
            ReadingErrorKind.INVALID_PAGE,
            f"Invalid page number: {page_number} (book has {total_pages} pages)",
        )

    settings = get_reading_settings(user_id)
    content = reduce_page_content(
        pages[page_number - 1],
        settings["reading_mode"],
        settings["reading_amount"],
    )

    update_reading_progress(user_id, book_name, page_number, total_pages)

    logger.info(
        f"Served page {page_number}/{total_pages}",
        extra={"user_id": user_id, "book_name": book_name, "page": page_number},
    )

    return ReadingOutcome.success(
        ReadingContent(
            content=content,
            current_page=page_number,
            total_pages=total_pages,
            has_next=page_number < total_pages,
            has_previous=page_number > 1,
        )
    )


def start_reading(user_id: str, book_name: str) -> ReadingOutcome:
    """Open a book at page 1."""
    return _read_page(user_id, book_name, 1)


def continue_reading(user_id: str, book_name: str) -> ReadingOutcome:
    """Open a book at the saved position, or page 1 if there is none."""
    history = get_reading_history(user_id, book_name)
    page = history["current_page"] if history else 1
    return _read_page(user_id, book_name, page)


def go_to_page(user_id: str, book_name: str, page_number: int) -> ReadingOutcome:
    """Open a book at a given page. Out-of-range pages are rejected, not clamped."""
    return _read_page(user_id, book_name, page_number)


def find_in_book(book_name: str, keyword: str) -> ReadingOutcome:
    """Search a book for a keyword. An empty keyword yields no results."""
    if not keyword:
        return ReadingOutcome.success(SearchResults(results=[]))

    book = get_book_content(book_name)
    if book is None:
        return ReadingOutcome.failure(
            ReadingErrorKind.BOOK_NOT_FOUND, f"Book not found: {book_name}"
        )

    settings = get_settings()
    hits = search_book_content(
        book.content,
        keyword,
        words_per_page=settings.WORDS_PER_PAGE,
        context_chars=settings.SEARCH_CONTEXT_CHARS,
    )

    log_with_context(
        logger,
        logging.INFO,
        f"Found {len(hits)} hits",
        book_name=book_name,
        keyword=keyword,
        hits=len(hits),
    )
    return ReadingOutcome.success(SearchResults(results=hits))


# ============================================================================
# History and settings
# ============================================================================


def check_history(user_id: str, book_name: str) -> ReadingOutcome:
    """Saved position for one book; the value is None if never opened."""
    history = get_reading_history(user_id, book_name)
    return ReadingOutcome.success(ReadingPosition(**history) if history else None)


def list_history(user_id: str) -> ReadingOutcome:
    """All saved positions, most recently read first."""
    return ReadingOutcome.success(
        [ReadingPosition(**row) for row in list_reading_history(user_id)]
    )


def get_settings_for_user(user_id: str) -> ReadingOutcome:
    return ReadingOutcome.success(ReadingSettings(**get_reading_settings(user_id)))


def update_settings(user_id: str, reading_mode: ReadingMode | str, reading_amount: int) -> ReadingOutcome:
    """
    Save reading settings.

    Content already served is not refreshed; the reader has to navigate
    again to see the new mode.
    """
    try:
        mode = ReadingMode(reading_mode)
    except ValueError:
        return ReadingOutcome.failure(
            ReadingErrorKind.INVALID_SETTINGS, f"Unknown reading mode: {reading_mode}"
        )

    if reading_amount < 1:
        return ReadingOutcome.failure(
            ReadingErrorKind.INVALID_SETTINGS,
            f"Reading amount must be at least 1, got {reading_amount}",
        )

    saved = set_reading_settings(user_id, mode, reading_amount)
    return ReadingOutcome.success(ReadingSettings(**saved))
