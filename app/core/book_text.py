"""Decoding of downloaded book files into plain text."""

from dataclasses import dataclass

# Book file types that need extraction before they can be read as text
REJECTED_FILE_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument",
    "application/epub",
    "image/",
)


@dataclass
class BookText:
    """Decoded book text."""

    text: str
    detected_encoding: str


def is_text_book(file_type: str | None) -> bool:
    """
    Check whether a stored book file can be read as plain text.

    Books without a recorded file type are assumed to be text/plain.
    """
    if not file_type:
        return True
    file_type_lower = file_type.lower()
    return not any(file_type_lower.startswith(rejected) for rejected in REJECTED_FILE_TYPES)


def decode_book_bytes(raw_bytes: bytes) -> BookText:
    """
    Decode a downloaded book file using a fallback chain.

    Args:
        raw_bytes: File content from storage

    Returns:
        BookText with the decoded text and the encoding that worked

    Raises:
        ValueError: If no encoding works
    """
    # Check for UTF-8 BOM first
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        try:
            return BookText(text=raw_bytes.decode("utf-8-sig"), detected_encoding="utf-8-sig")
        except UnicodeDecodeError:
            pass

    for encoding in ("utf-8", "latin-1"):
        try:
            return BookText(text=raw_bytes.decode(encoding), detected_encoding=encoding)
        except UnicodeDecodeError:
            continue

    raise ValueError("Unable to decode book content. Supported encodings: UTF-8, UTF-8-BOM, Latin-1.")
