"""Reading position persistence, one row per (user, book)."""

import math
from datetime import datetime, timezone
from typing import Any

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

TABLE = "reading_history"


def _utc_now_iso() -> str:
    """Get current UTC time as ISO string."""
    return datetime.now(timezone.utc).isoformat()


def compute_reading_progress(current_page: int | None, total_pages: int | None) -> int:
    """
    Percent of the book read, rounded half up.

    Returns 0 when total_pages is missing or 0.
    """
    if not total_pages or not current_page:
        return 0
    return math.floor(current_page / total_pages * 100 + 0.5)


def _with_progress(row: dict[str, Any]) -> dict[str, Any]:
    return {
        **row,
        "reading_progress": compute_reading_progress(row.get("current_page"), row.get("total_pages")),
    }


def get_reading_history(user_id: str, book_name: str) -> dict[str, Any] | None:
    """
    Get the reading position of a user in a book.

    Args:
        user_id: User identifier
        book_name: Book name

    Returns:
        Position record annotated with reading_progress, or None

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("book_name", book_name)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.error(
            f"Failed to fetch reading history: {e}",
            extra={"user_id": user_id, "book_name": book_name},
        )
        raise

    if not response.data:
        return None

    return _with_progress(response.data[0])


def list_reading_history(user_id: str) -> list[dict[str, Any]]:
    """
    List every reading position of a user, most recently read first.

    Args:
        user_id: User identifier

    Returns:
        Position records annotated with reading_progress

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("last_read_at", desc=True)
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to list reading history: {e}", extra={"user_id": user_id})
        raise

    return [_with_progress(row) for row in response.data or []]


def update_reading_progress(
    user_id: str,
    book_name: str,
    current_page: int,
    total_pages: int,
) -> None:
    """
    Create or overwrite the reading position of a user in a book.

    Upserts on (user_id, book_name); the last write wins. Page bounds are
    not checked here.

    Args:
        user_id: User identifier
        book_name: Book name
        current_page: 1-based page the user is on
        total_pages: Page count of the current split

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        supabase.table(TABLE).upsert(
            {
                "user_id": user_id,
                "book_name": book_name,
                "current_page": current_page,
                "total_pages": total_pages,
                "last_read_at": _utc_now_iso(),
            },
            on_conflict="user_id,book_name",
        ).execute()
    except Exception as e:
        logger.error(
            f"Failed to update reading progress: {e}",
            extra={"user_id": user_id, "book_name": book_name, "page": current_page},
        )
        raise

    logger.debug(
        f"Saved position {current_page}/{total_pages}",
        extra={"user_id": user_id, "book_name": book_name, "page": current_page},
    )
