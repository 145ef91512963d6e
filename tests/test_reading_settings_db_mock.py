"""Tests for reading settings storage with mocked Supabase."""

from unittest.mock import MagicMock, patch

import pytest

from app.core.schemas_reading import ReadingMode
from app.db.reading_settings import get_reading_settings, set_reading_settings


@pytest.fixture
def mock_supabase():
    """Mock Supabase client."""
    with patch("app.db.reading_settings.get_supabase") as mock:
        yield mock.return_value


class TestGetReadingSettings:
    def test_returns_saved_row(self, mock_supabase):
        row = {
            "settings_id": "s-1",
            "user_id": "user-1",
            "reading_mode": "sentences",
            "reading_amount": 5,
        }
        mock_response = MagicMock()
        mock_response.data = [row]
        (
            mock_supabase.table.return_value.select.return_value.eq.return_value
            .limit.return_value.execute.return_value
        ) = mock_response

        assert get_reading_settings("user-1") == row

    def test_defaults_without_creating_row(self, mock_supabase):
        mock_response = MagicMock()
        mock_response.data = []
        (
            mock_supabase.table.return_value.select.return_value.eq.return_value
            .limit.return_value.execute.return_value
        ) = mock_response

        result = get_reading_settings("user-unset")

        assert result["settings_id"] == ""
        assert result["user_id"] == "user-unset"
        assert result["reading_mode"] == "paragraphs"
        assert result["reading_amount"] == 3
        mock_supabase.table.return_value.upsert.assert_not_called()
        mock_supabase.table.return_value.insert.assert_not_called()


class TestSetReadingSettings:
    def test_upsert_on_user(self, mock_supabase):
        saved = {
            "settings_id": "s-1",
            "user_id": "user-1",
            "reading_mode": "fullpage",
            "reading_amount": 1,
        }
        mock_response = MagicMock()
        mock_response.data = [saved]
        mock_supabase.table.return_value.upsert.return_value.execute.return_value = mock_response

        result = set_reading_settings("user-1", ReadingMode.FULLPAGE, 1)

        assert result == saved
        upsert = mock_supabase.table.return_value.upsert
        payload = upsert.call_args.args[0]
        assert payload["reading_mode"] == "fullpage"
        assert payload["reading_amount"] == 1
        assert upsert.call_args.kwargs["on_conflict"] == "user_id"
        mock_supabase.table.assert_called_once_with("reading_settings")

    def test_rejects_amount_below_one(self, mock_supabase):
        with pytest.raises(ValueError, match="at least 1"):
            set_reading_settings("user-1", "sentences", 0)
        mock_supabase.table.assert_not_called()

    def test_rejects_unknown_mode(self, mock_supabase):
        with pytest.raises(ValueError):
            set_reading_settings("user-1", "chapters", 2)
        mock_supabase.table.assert_not_called()

    def test_empty_response_raises(self, mock_supabase):
        mock_response = MagicMock()
        mock_response.data = []
        mock_supabase.table.return_value.upsert.return_value.execute.return_value = mock_response

        with pytest.raises(ValueError, match="No data returned"):
            set_reading_settings("user-1", "paragraphs", 2)
