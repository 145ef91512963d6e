"""Fake in-memory reading store for facade behavioral testing."""

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple
from unittest.mock import patch

from app.core.schemas_reading import ReadingMode
from app.db.books import BookContent
from app.db.reading_history import compute_reading_progress
from app.db.reading_settings import default_reading_settings


class FakeReadingDB:
    """In-memory books, reading history and settings."""

    def __init__(self):
        self.reset()

    def reset(self):
        """Reset all stores to initial state."""
        self.books: Dict[str, BookContent] = {}
        self.history: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self.settings: Dict[str, Dict[str, Any]] = {}
        self.history_writes: List[Tuple[str, str, int, int]] = []
        self.fail_history_writes = False

    def add_book(self, book_name: str, content: str, declared_total_pages: int | None = None):
        self.books[book_name] = BookContent(content=content, declared_total_pages=declared_total_pages)

    # Book operations
    def get_book_content(self, book_name: str) -> BookContent | None:
        return self.books.get(book_name)

    # Reading history operations
    def get_reading_history(self, user_id: str, book_name: str) -> Dict[str, Any] | None:
        row = self.history.get((user_id, book_name))
        if row is None:
            return None
        return {
            **row,
            "reading_progress": compute_reading_progress(row["current_page"], row["total_pages"]),
        }

    def list_reading_history(self, user_id: str) -> List[Dict[str, Any]]:
        rows = [row for (uid, _), row in self.history.items() if uid == user_id]
        rows.sort(key=lambda row: row["last_read_at"], reverse=True)
        return [self.get_reading_history(user_id, row["book_name"]) for row in rows]

    def update_reading_progress(self, user_id: str, book_name: str, current_page: int, total_pages: int) -> None:
        if self.fail_history_writes:
            raise RuntimeError("reading_history write failed")
        self.history_writes.append((user_id, book_name, current_page, total_pages))
        self.history[(user_id, book_name)] = {
            "history_id": f"h-{len(self.history_writes)}",
            "user_id": user_id,
            "book_name": book_name,
            "current_page": current_page,
            "total_pages": total_pages,
            # Monotonic so ordering is stable within one test
            "last_read_at": datetime.fromtimestamp(len(self.history_writes), tz=timezone.utc),
        }

    # Settings operations
    def get_reading_settings(self, user_id: str) -> Dict[str, Any]:
        return self.settings.get(user_id) or default_reading_settings(user_id)

    def set_reading_settings(self, user_id: str, reading_mode: ReadingMode | str, reading_amount: int) -> Dict[str, Any]:
        row = {
            "settings_id": f"s-{user_id}",
            "user_id": user_id,
            "reading_mode": ReadingMode(reading_mode).value,
            "reading_amount": reading_amount,
        }
        self.settings[user_id] = row
        return row

    @contextmanager
    def patched(self):
        """Route the reading manager's storage calls to this fake."""
        target = "app.core.reading_manager"
        with patch(f"{target}.get_book_content", self.get_book_content), \
                patch(f"{target}.get_reading_history", self.get_reading_history), \
                patch(f"{target}.list_reading_history", self.list_reading_history), \
                patch(f"{target}.update_reading_progress", self.update_reading_progress), \
                patch(f"{target}.get_reading_settings", self.get_reading_settings), \
                patch(f"{target}.set_reading_settings", self.set_reading_settings):
            yield self
