"""Tests for formatting.locale_context: Babel-backed argument formatting."""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime

import pytest

from localizer.diagnostics import FormattingError
from localizer.formatting.locale_context import LocaleContext, normalize_locale


class TestCreate:
    """LocaleContext.create() and fallback."""

    def test_normalize_locale(self) -> None:
        """BCP-47 separators become POSIX separators."""
        assert normalize_locale("de-AT") == "de_AT"

    def test_create_is_cached(self) -> None:
        """One instance per locale code."""
        assert LocaleContext.create("fr_FR") is LocaleContext.create("fr_FR")

    def test_known_locale(self) -> None:
        """Known locales are not fallbacks."""
        ctx = LocaleContext.create("de-DE")

        assert not ctx.is_fallback
        assert ctx.babel_locale.language == "de"

    def test_unknown_locale_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown locales use en_US rules and log a warning."""
        with caplog.at_level(logging.WARNING, logger="localizer.formatting.locale_context"):
            ctx = LocaleContext.create("xx-NOWHERE-fallback-test")

        assert ctx.is_fallback
        assert ctx.locale_code == "xx-NOWHERE-fallback-test"
        assert ctx.babel_locale.language == "en"
        assert "Falling back" in caplog.text


class TestNumbers:
    """Number formatting."""

    def test_format_number_rejects_bool(self) -> None:
        """Booleans are not numbers here."""
        with pytest.raises(FormattingError) as exc_info:
            LocaleContext.create("en_US").format_number(True)

        assert exc_info.value.fallback_value == "True"

    def test_currency_follows_territory(self) -> None:
        """The locale territory picks the currency."""
        assert LocaleContext.create("en_US").currency == "USD"
        assert LocaleContext.create("de_DE").currency == "EUR"

    def test_currency_without_territory(self) -> None:
        """A bare language has no currency."""
        assert LocaleContext.create("en").currency == "XXX"

    def test_format_percent(self) -> None:
        """Percent multiplies by 100."""
        assert LocaleContext.create("en_US").format_percent(0.5) == "50%"


class TestDates:
    """Date and time formatting."""

    def test_date_object_is_midnight(self) -> None:
        """Plain dates format like midnight datetimes."""
        ctx = LocaleContext.create("en_US")

        assert ctx.format_date(date(2024, 1, 2), "yyyy-MM-dd") == "2024-01-02"

    def test_epoch_millis(self) -> None:
        """Numbers are milliseconds since the epoch in UTC."""
        ctx = LocaleContext.create("en_US")

        assert ctx.format_time(3_600_000, "HH:mm") == "01:00"

    def test_datetime_passthrough(self) -> None:
        """datetime values are used as given."""
        ctx = LocaleContext.create("en_US")
        moment = datetime(2020, 12, 31, 23, 59, tzinfo=UTC)

        assert ctx.format_date(moment, "yyyy") == "2020"

    def test_rejects_text(self) -> None:
        """Non-date values raise FormattingError."""
        with pytest.raises(FormattingError):
            LocaleContext.create("en_US").format_date("today")

    def test_out_of_range_timestamp(self) -> None:
        """Timestamps beyond datetime's range raise FormattingError."""
        with pytest.raises(FormattingError):
            LocaleContext.create("en_US").format_date(10**30)
