"""Tests for runtime/locale_context.py and locale_utils.py.

Date and time output is compared against Babel directly: CLDR data uses
narrow no-break spaces whose exact placement changes between releases.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from icumessage.diagnostics import DiagnosticCode, MessageFormatError
from icumessage.locale_utils import get_babel_locale, get_system_locale, normalize_locale
from icumessage.runtime import LocaleContext


@pytest.fixture(autouse=True)
def _clean_cache():
    LocaleContext.clear_cache()
    yield
    LocaleContext.clear_cache()


class TestCreate:
    def test_cached_by_normalized_code(self) -> None:
        first = LocaleContext.create("en-US")
        assert LocaleContext.create("en_US") is first
        assert LocaleContext.cache_size() == 1
        assert LocaleContext.cache_info()["locales"] == ("en_US",)

    def test_unknown_locale_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            ctx = LocaleContext.create("xx-YY")
        assert ctx.is_fallback
        assert ctx.locale_code == "xx-YY"
        assert str(ctx.babel_locale) == "en_US"
        assert "Falling back to en_US" in caplog.text

    def test_invalid_format_falls_back(self) -> None:
        assert LocaleContext.create("not a locale").is_fallback

    def test_create_or_raise(self) -> None:
        assert not LocaleContext.create_or_raise("de").is_fallback
        with pytest.raises(ValueError, match="Unknown locale identifier"):
            LocaleContext.create_or_raise("xx-YY")
        with pytest.raises(ValueError, match="Invalid locale format"):
            LocaleContext.create_or_raise("not a locale")

    def test_cache_is_bounded(self) -> None:
        for code in ("en", "de", "fr", "lv", "pl"):
            LocaleContext.create(code)
        assert LocaleContext.cache_info()["max_size"] == 128
        assert LocaleContext.cache_size() == 5


class TestFormatNumber:
    def test_currency_uses_territory(self) -> None:
        assert LocaleContext.create("en-US").format_number(1234.5, "currency") == "$1,234.50"

    def test_currency_likely_territory(self) -> None:
        ctx = LocaleContext.create("de")
        assert ctx.format_number(3, "currency") == babel_numbers.format_currency(
            3, "EUR", locale="de", currency_digits=True
        )

    def test_scientific(self) -> None:
        assert LocaleContext.create("en").format_number(12345, "scientific") == (
            babel_numbers.format_scientific(12345, locale="en")
        )

    def test_negative_pattern(self) -> None:
        ctx = LocaleContext.create("en-US")
        assert ctx.format_number(-1234.56, "#,##0.00;(#,##0.00)") == "(1,234.56)"

    def test_decimal_precision_kept(self) -> None:
        assert LocaleContext.create("en").format_number(Decimal("0.125")) == "0.125"

    def test_type_error(self) -> None:
        with pytest.raises(MessageFormatError) as exc_info:
            LocaleContext.create("en").format_number(None)  # type: ignore[arg-type]
        assert exc_info.value.code is DiagnosticCode.FORMATTING_FAILED
        assert exc_info.value.kind == "number"


class TestFormatDateTime:
    @pytest.mark.parametrize("style", ["short", "medium", "long", "full"])
    def test_date_styles(self, style: str) -> None:
        value = date(2025, 10, 27)
        assert LocaleContext.create("de-DE").format_date(value, style) == (
            babel_dates.format_date(value, format=style, locale="de_DE")
        )

    def test_date_default_is_medium(self) -> None:
        value = date(2025, 1, 2)
        assert LocaleContext.create("en").format_date(value) == babel_dates.format_date(
            value, format="medium", locale="en"
        )

    def test_datetime_pattern_may_mix_time_fields(self) -> None:
        value = datetime(2025, 10, 27, 14, 30)
        assert LocaleContext.create("en").format_date(value, "yyyy-MM-dd HH:mm") == (
            "2025-10-27 14:30"
        )

    def test_time_from_iso_string(self) -> None:
        assert LocaleContext.create("en").format_time("14:30", "HH:mm") == "14:30"

    def test_time_default(self) -> None:
        value = time(9, 5)
        assert LocaleContext.create("en").format_time(value) == babel_dates.format_time(
            value, format="medium", locale="en"
        )

    def test_time_rejects_date(self) -> None:
        with pytest.raises(MessageFormatError, match="expected a time"):
            LocaleContext.create("en").format_time(date(2025, 1, 1))  # type: ignore[arg-type]

    def test_invalid_iso_time(self) -> None:
        with pytest.raises(MessageFormatError):
            LocaleContext.create("en").format_time("25:99")


class TestFormatDuration:
    @pytest.mark.parametrize("style", ["long", "short", "narrow"])
    def test_styles_match_babel(self, style: str) -> None:
        value = timedelta(minutes=90)
        assert LocaleContext.create("lv").format_duration(value, style) == (
            babel_dates.format_timedelta(value, format=style, locale="lv")
        )

    def test_decimal_seconds(self) -> None:
        assert LocaleContext.create("en").format_duration(Decimal(60)) == "1 minute"


class TestLocaleUtils:
    @pytest.mark.parametrize(
        ("code", "expected"), [("en-US", "en_US"), ("pt-BR", "pt_BR"), ("fr", "fr")]
    )
    def test_normalize(self, code: str, expected: str) -> None:
        assert normalize_locale(code) == expected

    def test_get_babel_locale_cached(self) -> None:
        assert get_babel_locale("de-DE") is get_babel_locale("de-DE")
        assert get_babel_locale("de-DE").territory == "DE"

    def test_system_locale_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("locale.getlocale", lambda: (None, None))
        monkeypatch.setenv("LC_ALL", "lv_LV.UTF-8")
        assert get_system_locale() == "lv_LV"

    def test_system_locale_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("locale.getlocale", lambda: ("C", None))
        for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
            monkeypatch.delenv(var, raising=False)
        assert get_system_locale() == "en_US"
        with pytest.raises(RuntimeError, match="Could not determine system locale"):
            get_system_locale(raise_on_failure=True)
