"""Word-count pagination for book text."""

DEFAULT_WORDS_PER_PAGE = 500


def split_into_pages(content: str, words_per_page: int = DEFAULT_WORDS_PER_PAGE) -> list[str]:
    """
    Split text into fixed-size word-count pages.

    Tokens are runs of non-whitespace characters; each page is its tokens
    joined by a single space, so original line breaks are not preserved.

    Args:
        content: Raw book text
        words_per_page: Number of tokens per page

    Returns:
        List of page strings. Always at least one element: text without
        tokens yields [""] so page 1 can always be indexed.

    Raises:
        ValueError: If words_per_page < 1
    """
    if words_per_page < 1:
        raise ValueError(f"words_per_page ({words_per_page}) must be at least 1")

    words = content.split()
    pages = [
        " ".join(words[start : start + words_per_page])
        for start in range(0, len(words), words_per_page)
    ]

    return pages or [""]


def count_pages(content: str, words_per_page: int = DEFAULT_WORDS_PER_PAGE) -> int:
    """Number of pages split_into_pages produces for the given content."""
    return len(split_into_pages(content, words_per_page))
