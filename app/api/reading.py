"""API endpoints for reading books: navigation, search, history and settings."""

from fastapi import APIRouter, HTTPException, Path, Query

from app.core.logging import get_logger
from app.core.reading_manager import (
    CheckHistory,
    ContinueReading,
    FindInBook,
    GetSettings,
    GoToPage,
    ListHistory,
    ReadingCommand,
    ReadingErrorKind,
    ReadingOutcome,
    SetSettings,
    StartReading,
    handle_reading_command,
)
from app.core.schemas_reading import (
    ReadingContent,
    ReadingHistoryList,
    ReadingPosition,
    ReadingSettings,
    ReadingSettingsUpdate,
    SearchResults,
)

logger = get_logger(__name__)

router = APIRouter()

ERROR_STATUS = {
    ReadingErrorKind.BOOK_NOT_FOUND: 404,
    ReadingErrorKind.INVALID_PAGE: 422,
    ReadingErrorKind.INVALID_SETTINGS: 422,
}


def _run(user_id: str, command: ReadingCommand, failure_message: str) -> ReadingOutcome:
    """
    Run a command and translate its outcome into HTTP semantics.

    Raises:
        HTTPException 404/422: For domain errors
        HTTPException 500: If storage fails
    """
    try:
        outcome = handle_reading_command(user_id, command)
    except Exception as e:
        logger.exception(failure_message, extra={"user_id": user_id})
        raise HTTPException(status_code=500, detail=failure_message) from e

    if not outcome.ok:
        raise HTTPException(status_code=ERROR_STATUS[outcome.error], detail=outcome.detail)

    return outcome


@router.post("/reading/{user_id}/books/{book_name}/start", response_model=ReadingContent)
async def start_book(
    user_id: str = Path(..., description="User identifier"),
    book_name: str = Path(..., description="Book name"),
) -> ReadingContent:
    """
    Open a book at page 1 and save the position.

    Raises:
        HTTPException 404: If the book cannot be loaded
        HTTPException 500: If the position cannot be saved
    """
    return _run(user_id, StartReading(book_name), "Failed to start reading").value


@router.post("/reading/{user_id}/books/{book_name}/continue", response_model=ReadingContent)
async def continue_book(
    user_id: str = Path(..., description="User identifier"),
    book_name: str = Path(..., description="Book name"),
) -> ReadingContent:
    """
    Open a book at the saved position (page 1 if never opened).

    Raises:
        HTTPException 404: If the book cannot be loaded
        HTTPException 422: If the saved page no longer exists
        HTTPException 500: If history storage fails
    """
    return _run(user_id, ContinueReading(book_name), "Failed to continue reading").value


@router.post("/reading/{user_id}/books/{book_name}/pages/{page_number}", response_model=ReadingContent)
async def go_to_page(
    user_id: str = Path(..., description="User identifier"),
    book_name: str = Path(..., description="Book name"),
    page_number: int = Path(..., description="1-based page number"),
) -> ReadingContent:
    """
    Open a book at a given page.

    Raises:
        HTTPException 404: If the book cannot be loaded
        HTTPException 422: If the page is out of range
        HTTPException 500: If the position cannot be saved
    """
    return _run(user_id, GoToPage(book_name, page_number), "Failed to go to page").value


@router.get("/reading/{user_id}/books/{book_name}/search", response_model=SearchResults)
async def search_book(
    user_id: str = Path(..., description="User identifier"),
    book_name: str = Path(..., description="Book name"),
    keyword: str = Query("", description="Case-insensitive search term"),
) -> SearchResults:
    """Search a book for a keyword. An empty keyword returns no results."""
    return _run(user_id, FindInBook(book_name, keyword), "Failed to search book").value


@router.get("/reading/{user_id}/books/{book_name}/history", response_model=ReadingPosition | None)
async def get_book_history(
    user_id: str = Path(..., description="User identifier"),
    book_name: str = Path(..., description="Book name"),
) -> ReadingPosition | None:
    """Saved position in one book, or null if the book was never opened."""
    return _run(user_id, CheckHistory(book_name), "Failed to get reading history").value


@router.get("/reading/{user_id}/history", response_model=ReadingHistoryList)
async def list_user_history(
    user_id: str = Path(..., description="User identifier"),
) -> ReadingHistoryList:
    """All saved positions of a user, most recently read first."""
    history = _run(user_id, ListHistory(), "Failed to list reading history").value
    return ReadingHistoryList(history=history, total=len(history))


@router.get("/reading/{user_id}/settings", response_model=ReadingSettings)
async def get_user_settings(
    user_id: str = Path(..., description="User identifier"),
) -> ReadingSettings:
    """Reading settings of a user, defaults if none were saved."""
    return _run(user_id, GetSettings(), "Failed to get reading settings").value


@router.put("/reading/{user_id}/settings", response_model=ReadingSettings)
async def update_user_settings(
    body: ReadingSettingsUpdate,
    user_id: str = Path(..., description="User identifier"),
) -> ReadingSettings:
    """
    Save reading settings. Already served pages are not refreshed.

    Raises:
        HTTPException 422: If mode or amount is invalid
        HTTPException 500: If settings storage fails
    """
    command = SetSettings(reading_mode=body.reading_mode, reading_amount=body.reading_amount)
    return _run(user_id, command, "Failed to update reading settings").value
