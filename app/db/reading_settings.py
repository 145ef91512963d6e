"""Per-user reading settings (mode and amount)."""

from datetime import datetime, timezone
from typing import Any

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.schemas_reading import ReadingMode
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

TABLE = "reading_settings"


def _utc_now_iso() -> str:
    """Get current UTC time as ISO string."""
    return datetime.now(timezone.utc).isoformat()


def default_reading_settings(user_id: str) -> dict[str, Any]:
    """Settings returned for a user who never saved any. Not persisted."""
    settings = get_settings()
    now = _utc_now_iso()
    return {
        "settings_id": "",
        "user_id": user_id,
        "reading_mode": settings.DEFAULT_READING_MODE.value,
        "reading_amount": settings.DEFAULT_READING_AMOUNT,
        "created_at": now,
        "updated_at": now,
    }


def get_reading_settings(user_id: str) -> dict[str, Any]:
    """
    Get reading settings for a user.

    Never reports "not found": a user without a row gets the defaults.

    Args:
        user_id: User identifier

    Returns:
        Settings record

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to fetch reading settings: {e}", extra={"user_id": user_id})
        raise

    if response.data:
        return response.data[0]
    return default_reading_settings(user_id)


def set_reading_settings(user_id: str, reading_mode: ReadingMode | str, reading_amount: int) -> dict[str, Any]:
    """
    Save reading settings for a user.

    Upserts on user_id, so a user has at most one settings row.

    Args:
        user_id: User identifier
        reading_mode: fullpage, paragraphs or sentences
        reading_amount: Paragraphs or sentences per page, at least 1

    Returns:
        The persisted settings record

    Raises:
        ValueError: If mode is unknown or amount < 1
        Exception: If database operation fails
    """
    mode = ReadingMode(reading_mode)
    if reading_amount < 1:
        raise ValueError(f"reading_amount ({reading_amount}) must be at least 1")

    supabase = get_supabase()

    try:
        response = (
            supabase.table(TABLE)
            .upsert(
                {
                    "user_id": user_id,
                    "reading_mode": mode.value,
                    "reading_amount": reading_amount,
                    "updated_at": _utc_now_iso(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to save reading settings: {e}", extra={"user_id": user_id})
        raise

    if not response.data:
        raise ValueError("No data returned from set_reading_settings")

    logger.info(
        f"Reading settings set to {mode.value}/{reading_amount}",
        extra={"user_id": user_id},
    )
    return response.data[0]
