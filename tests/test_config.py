"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.core.schemas_reading import ReadingMode


def test_default_reading_mode():
    settings = Settings()

    assert settings.DEFAULT_READING_MODE == ReadingMode.PARAGRAPHS
    assert settings.DEFAULT_READING_AMOUNT == 3
    assert settings.WORDS_PER_PAGE == 500


def test_reading_mode_from_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_READING_MODE", "sentences")

    assert Settings().DEFAULT_READING_MODE == ReadingMode.SENTENCES


def test_unknown_reading_mode_rejected_at_startup(monkeypatch):
    monkeypatch.setenv("DEFAULT_READING_MODE", "paragraph")

    with pytest.raises(ValidationError):
        Settings()


def test_reading_amount_below_one_rejected(monkeypatch):
    monkeypatch.setenv("DEFAULT_READING_AMOUNT", "0")

    with pytest.raises(ValidationError):
        Settings()
