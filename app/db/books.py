"""Book metadata lookup and content download."""

from dataclasses import dataclass
from typing import Any

from app.core.book_text import decode_book_bytes, is_text_book
from app.core.config import get_settings
from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)


@dataclass
class BookContent:
    """Raw text of a book plus its declared page count from metadata."""

    content: str
    declared_total_pages: int | None


def get_book(book_name: str) -> dict[str, Any] | None:
    """
    Get book metadata by name.

    Args:
        book_name: Unique book name

    Returns:
        Book record or None
    """
    settings = get_settings()
    supabase = get_supabase()

    response = (
        supabase.table(settings.BOOKS_TABLE)
        .select("*")
        .eq("book_name", book_name)
        .limit(1)
        .execute()
    )

    return response.data[0] if response.data else None


def get_book_content(book_name: str) -> BookContent | None:
    """
    Fetch the full text of a book.

    Looks up the metadata row, downloads its file from storage and decodes it.
    Any failure along the way means the book cannot be displayed, so it is
    logged and reported as None.

    Args:
        book_name: Unique book name

    Returns:
        BookContent, or None if the book is missing or unreadable
    """
    settings = get_settings()

    try:
        book = get_book(book_name)
    except Exception as e:
        logger.error(f"Failed to fetch book metadata: {e}", extra={"book_name": book_name})
        return None

    if not book:
        logger.warning(f"Book not found: {book_name}", extra={"book_name": book_name})
        return None

    if not is_text_book(book.get("file_type")):
        logger.warning(
            f"Book {book_name} has unsupported file type {book.get('file_type')}",
            extra={"book_name": book_name},
        )
        return None

    try:
        raw_bytes = get_supabase().storage.from_(settings.BOOKS_BUCKET).download(book["file_path"])
    except Exception as e:
        logger.error(f"Download failed: {e}", extra={"book_name": book_name})
        return None

    if raw_bytes is None:
        logger.warning(f"No download payload for book {book_name}", extra={"book_name": book_name})
        return None

    try:
        decoded = decode_book_bytes(raw_bytes)
    except ValueError as e:
        logger.error(str(e), extra={"book_name": book_name})
        return None

    logger.debug(
        f"Loaded {len(decoded.text)} chars ({decoded.detected_encoding}) for {book_name}",
        extra={"book_name": book_name},
    )

    return BookContent(content=decoded.text, declared_total_pages=book.get("total_pages"))
