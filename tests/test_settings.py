"""Tests for settings loading."""

import pytest
from datetime import timezone

from src.config import AppSettings, get_settings, validate_all_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("EXPENSE_TIMEZONE", "STORAGE_BACKEND", "RECENT_EXPENSES_LIMIT", "EXPENSE_CATEGORIES"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestAppSettings:

    def test_defaults(self):
        settings = AppSettings()
        assert settings.storage_backend == "google_sheets"
        assert settings.recent_expenses_limit == 20
        assert settings.default_category == "Food"
        assert settings.categories_list == [
            "Food", "Transport", "Bills", "Entertainment", "Shopping", "Other",
        ]
        assert settings.tzinfo is None

    def test_timezone_from_env(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_TIMEZONE", "UTC")
        settings = AppSettings()
        assert settings.expense_timezone == "UTC"
        assert settings.tzinfo.utcoffset(None) == timezone.utc.utcoffset(None)

    def test_blank_timezone_means_local(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_TIMEZONE", "  ")
        assert AppSettings().tzinfo is None

    def test_unknown_timezone_rejected(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_TIMEZONE", "Mars/Olympus_Mons")
        with pytest.raises(ValueError, match="Unknown timezone"):
            AppSettings()

    def test_invalid_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "postgres")
        with pytest.raises(ValueError):
            AppSettings()

    def test_categories_from_env(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_CATEGORIES", "Rent, Food ,,Travel")
        assert AppSettings().categories_list == ["Rent", "Food", "Travel"]

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert AppSettings().log_level == "DEBUG"


class TestValidateAllSettings:

    def test_reports_missing_google_sheets(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_SHEETS_CREDENTIALS_PATH", raising=False)
        monkeypatch.delenv("GOOGLE_SHEETS_SPREADSHEET_ID", raising=False)

        results = validate_all_settings()

        assert results["app"] is True
        assert results["google_sheets"] is False
        assert "google_sheets_error" in results
