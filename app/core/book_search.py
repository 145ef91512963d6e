"""Keyword search across the paginated representation of a book."""

import re

from app.core.pagination import DEFAULT_WORDS_PER_PAGE, split_into_pages
from app.core.schemas_reading import SearchHit

DEFAULT_CONTEXT_CHARS = 50


def find_in_page(page_text: str, keyword: str) -> list[tuple[int, int]]:
    """
    Find non-overlapping, case-insensitive occurrences of keyword in a page.

    Offsets refer to page_text itself, so they stay valid for pages whose
    lowercase form has a different length (e.g. "İ").

    Args:
        page_text: Text of one page
        keyword: Non-empty search term

    Returns:
        (start, end) spans of the matches, ascending
    """
    pattern = re.compile(re.escape(keyword), re.IGNORECASE)
    return [match.span() for match in pattern.finditer(page_text)]


def search_book_content(
    content: str,
    keyword: str,
    words_per_page: int = DEFAULT_WORDS_PER_PAGE,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
) -> list[SearchHit]:
    """
    Search every page of a book for a keyword.

    Pages are produced by the same splitter as navigation, so the page numbers
    in the hits line up with the pages served by the reader as long as the
    same words_per_page is used.

    Args:
        content: Raw book text
        keyword: Search term. Empty keyword returns no hits.
        words_per_page: Page size used for splitting
        context_chars: Characters of context on each side of a match

    Returns:
        Hits in ascending page order, then ascending position
    """
    if not keyword or not content:
        return []

    hits = []
    for page_index, page_text in enumerate(split_into_pages(content, words_per_page)):
        for match_start, match_end in find_in_page(page_text, keyword):
            start = max(0, match_start - context_chars)
            end = min(len(page_text), match_end + context_chars)
            hits.append(
                SearchHit(
                    page=page_index + 1,
                    context=page_text[start:end],
                    position=match_start,
                )
            )

    return hits
