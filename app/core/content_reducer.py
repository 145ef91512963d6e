"""Reduce a page to a paragraph- or sentence-limited excerpt."""

import re

from app.core.schemas_reading import ReadingMode

PARAGRAPH_SEPARATOR = "\n\n"
SENTENCE_SEPARATOR = ". "
SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
TERMINAL_PUNCTUATION = (".", "!", "?")


def reduce_page_content(page_text: str, mode: ReadingMode | str, amount: int) -> str:
    """
    Reduce page text according to the reading mode.

    Args:
        page_text: Text of one page
        mode: fullpage, paragraphs or sentences
        amount: Paragraphs or sentences to keep (ignored for fullpage).
            Values below 1 are treated as 1.

    Returns:
        The reduced text

    Raises:
        ValueError: If mode is not a known reading mode
    """
    mode = ReadingMode(mode)
    amount = max(1, amount)

    if mode == ReadingMode.FULLPAGE:
        return page_text

    if mode == ReadingMode.PARAGRAPHS:
        paragraphs = page_text.split(PARAGRAPH_SEPARATOR)[:amount]
        return PARAGRAPH_SEPARATOR.join(paragraphs)

    sentences = SENTENCE_BOUNDARY.split(page_text)[:amount]
    reduced = SENTENCE_SEPARATOR.join(sentences).strip()
    if reduced and not reduced.endswith(TERMINAL_PUNCTUATION):
        reduced += "."
    return reduced
