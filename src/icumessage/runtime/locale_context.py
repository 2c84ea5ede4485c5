"""Locale context for thread-safe, formatter-scoped formatting.

This module provides locale-aware formatting without global state mutation.
Uses Babel for CLDR-compliant number, date, time and duration formatting.

Architecture:
    - LocaleContext: Immutable locale configuration container
    - Formatters use Babel (thread-safe, CLDR-based)
    - No dependency on Python's locale module (avoids global state)
    - Each MessageFormatter resolves its LocaleContext once (locale isolation)

Design Principles:
    - Explicit over implicit (locale always visible)
    - Immutable by default (frozen dataclass)
    - Thread-safe (no shared mutable state)
    - CLDR-compliant
    - Explicit error handling: failures raise MessageFormatError, never a
      placeholder string

Python 3.13+. Uses Babel for i18n.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from threading import RLock
from typing import ClassVar

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers
from babel.core import get_global

from icumessage.constants import MAX_LOCALE_CACHE_SIZE
from icumessage.diagnostics import ErrorTemplate, MessageFormatError
from icumessage.enums import FormatKind
from icumessage.locale_utils import normalize_locale

__all__ = ["LocaleContext"]

logger = logging.getLogger(__name__)

# CLDR named widths shared by date and time formats.
_DATETIME_STYLES: frozenset[str] = frozenset({"short", "medium", "long", "full"})

# Babel format_timedelta widths.
_DURATION_STYLES: frozenset[str] = frozenset({"long", "short", "narrow"})

_FORMAT_ERRORS = (ValueError, TypeError, InvalidOperation, AttributeError, KeyError, OverflowError)


def _format_error(kind: FormatKind, value: object, error: Exception) -> MessageFormatError:
    diagnostic = ErrorTemplate.formatting_failed(kind, value, str(error))
    return MessageFormatError(diagnostic, kind=kind, value=value)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting operations.

    Provides thread-safe, locale-specific formatting for numbers, dates,
    times and durations without mutating global state.

    Use LocaleContext.create() factory to construct instances with proper validation.
    Direct construction via __init__ is not recommended (bypasses validation).

    Cache Management:
        LocaleContext uses an internal LRU cache for instance reuse:
        - LocaleContext.clear_cache(): Clear all cached instances
        - LocaleContext.cache_size(): Get current cache size
        - LocaleContext.cache_info(): Get detailed cache statistics

    Examples:
        >>> ctx = LocaleContext.create('en-US')
        >>> ctx.format_number(1234.5)
        '1,234.5'

        >>> ctx = LocaleContext.create('de-DE')
        >>> ctx.format_number(1234.5)
        '1.234,5'

        >>> # Invalid locales fall back to en_US with warning logged
        >>> ctx = LocaleContext.create('invalid-locale')
        >>> ctx.is_fallback
        True

    Thread Safety:
        LocaleContext is immutable and thread-safe. Cache operations are
        protected by RLock.
    """

    # Class-level cache for LocaleContext instances (identity caching)
    # OrderedDict provides LRU semantics with O(1) operations
    _cache: ClassVar[OrderedDict[str, "LocaleContext"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the locale context cache.

        Use this method to free memory or reset state in tests.
        """
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached LocaleContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def cache_info(cls) -> dict[str, int | tuple[str, ...]]:
        """Get detailed cache statistics.

        Returns:
            Dictionary with size, max_size and locales (LRU order)

        Example:
            >>> LocaleContext.clear_cache()
            >>> LocaleContext.create('en-US')
            >>> LocaleContext.cache_info()
            {'size': 1, 'max_size': 128, 'locales': ('en_US',)}
        """
        with cls._cache_lock:
            return {
                "size": len(cls._cache),
                "max_size": MAX_LOCALE_CACHE_SIZE,
                "locales": tuple(cls._cache.keys()),
            }

    @classmethod
    def create(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext with graceful fallback for invalid locales.

        For unknown or invalid locales, logs a warning and falls back to en_US.
        This method always succeeds - use create_or_raise() for strict validation.

        Args:
            locale_code: BCP 47 locale identifier (e.g., 'en-US', 'pl', 'de_DE')

        Returns:
            LocaleContext instance. For unknown/invalid locales, uses en_US
            rules while preserving the original locale_code for debugging.
        """
        # "en-US" and "en_US" map to the same cache entry
        cache_key = normalize_locale(locale_code)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        used_fallback = False
        try:
            babel_locale = Locale.parse(cache_key)
        except UnknownLocaleError as e:
            logger.warning("Unknown locale '%s': %s. Falling back to en_US", locale_code, e)
            babel_locale = Locale.parse("en_US")
            used_fallback = True
        except ValueError as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to en_US", locale_code, e
            )
            babel_locale = Locale.parse("en_US")
            used_fallback = True

        ctx = cls(locale_code=locale_code, _babel_locale=babel_locale, is_fallback=used_fallback)

        # Double-check pattern for thread safety
        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]

            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)

            cls._cache[cache_key] = ctx
            return ctx

    @classmethod
    def create_or_raise(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext or raise on validation failure.

        Args:
            locale_code: BCP 47 locale identifier

        Returns:
            LocaleContext instance with valid locale

        Raises:
            ValueError: If locale code is invalid or unknown
        """
        try:
            babel_locale = Locale.parse(normalize_locale(locale_code))
        except UnknownLocaleError as e:
            msg = f"Unknown locale identifier '{locale_code}': {e}"
            raise ValueError(msg) from None
        except ValueError as e:
            msg = f"Invalid locale format '{locale_code}': {e}"
            raise ValueError(msg) from None
        return cls(locale_code=locale_code, _babel_locale=babel_locale)

    @property
    def babel_locale(self) -> Locale:
        """Get pre-validated Babel Locale object for this context."""
        return self._babel_locale

    def _default_currency(self) -> str:
        """ISO 4217 code of the locale's territory currency.

        Locales without a territory ("en", "pl") use the territory of their
        CLDR likely subtags ("en" -> "en_Latn_US" -> US).
        """
        territory = self.babel_locale.territory
        if territory is None:
            likely = get_global("likely_subtags").get(self.babel_locale.language)
            if likely:
                territory = Locale.parse(likely).territory
        currencies = babel_numbers.get_territory_currencies(territory) if territory else []
        if not currencies:
            msg = f"No currency is known for locale '{self.locale_code}'"
            raise ValueError(msg)
        return str(currencies[0])

    def format_number(self, value: int | float | Decimal, style: str | None = None) -> str:
        """Format number with locale-specific separators.

        Args:
            value: Number to format (int, float, or Decimal)
            style: None or "decimal" (default), "integer", "percent",
                "currency" (the locale's currency), "scientific", or a
                CLDR number pattern such as "#,##0.00"

        Returns:
            Formatted number string according to locale rules

        Raises:
            MessageFormatError: If value is not a number or formatting fails

        Examples:
            >>> ctx = LocaleContext.create('en-US')
            >>> ctx.format_number(1234.5)
            '1,234.5'
            >>> ctx.format_number(0.15, 'percent')
            '15%'
            >>> ctx.format_number(2.6, 'integer')
            '3'
            >>> ctx.format_number(-1234.56, '#,##0.00;(#,##0.00)')
            '(1,234.56)'
        """
        if not _is_number(value):
            raise self._type_error(FormatKind.NUMBER, value, "a number")

        try:
            match style:
                case None | "decimal":
                    result = babel_numbers.format_decimal(value, locale=self.babel_locale)
                case "integer":
                    result = babel_numbers.format_decimal(
                        value, format="#,##0", locale=self.babel_locale
                    )
                case "percent":
                    result = babel_numbers.format_percent(value, locale=self.babel_locale)
                case "currency":
                    result = babel_numbers.format_currency(
                        value,
                        self._default_currency(),
                        locale=self.babel_locale,
                        currency_digits=True,
                    )
                case "scientific":
                    result = babel_numbers.format_scientific(value, locale=self.babel_locale)
                case _:
                    result = babel_numbers.format_decimal(
                        value, format=style, locale=self.babel_locale
                    )
        except _FORMAT_ERRORS as e:
            raise _format_error(FormatKind.NUMBER, value, e) from e
        return str(result)

    def format_date(self, value: date | datetime | str, style: str | None = None) -> str:
        """Format date with locale-specific formatting.

        Args:
            value: date, datetime, or ISO 8601 string ("2025-10-27",
                "2025-10-27T14:30:00")
            style: "short", "medium" (default), "long", "full", or a CLDR
                date pattern such as "yyyy-MM-dd"

        Returns:
            Formatted date string according to locale rules

        Raises:
            MessageFormatError: If value is not a date or formatting fails

        Examples:
            >>> ctx = LocaleContext.create('en-US')
            >>> ctx.format_date(date(2025, 10, 27), 'short')
            '10/27/25'
            >>> ctx.format_date("2025-10-27", 'yyyy-MM-dd')
            '2025-10-27'
        """
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value)
            except ValueError as e:
                raise _format_error(FormatKind.DATE, value, e) from e
        elif not isinstance(value, date):
            raise self._type_error(FormatKind.DATE, value, "a date")

        fmt = style or "medium"
        try:
            if fmt not in _DATETIME_STYLES and isinstance(value, datetime):
                # Patterns may mix date and time fields
                result = babel_dates.format_datetime(value, format=fmt, locale=self.babel_locale)
            else:
                result = babel_dates.format_date(value, format=fmt, locale=self.babel_locale)
        except _FORMAT_ERRORS as e:
            raise _format_error(FormatKind.DATE, value, e) from e
        return str(result)

    def format_time(self, value: time | datetime | str, style: str | None = None) -> str:
        """Format time of day with locale-specific formatting.

        Args:
            value: time, datetime, or ISO 8601 string ("14:30",
                "2025-10-27T14:30:00")
            style: "short", "medium" (default), "long", "full", or a CLDR
                time pattern such as "HH:mm"

        Returns:
            Formatted time string according to locale rules

        Raises:
            MessageFormatError: If value is not a time or formatting fails

        Examples:
            >>> ctx = LocaleContext.create('de-DE')
            >>> ctx.format_time(time(14, 30), 'short')
            '14:30'
            >>> ctx.format_time("2025-10-27T09:05:00", 'HH:mm')
            '09:05'
        """
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value) if "T" in value else time.fromisoformat(value)
            except ValueError as e:
                raise _format_error(FormatKind.TIME, value, e) from e
        elif not isinstance(value, (time, datetime)):
            raise self._type_error(FormatKind.TIME, value, "a time")

        try:
            result = babel_dates.format_time(
                value, format=style or "medium", locale=self.babel_locale
            )
        except _FORMAT_ERRORS as e:
            raise _format_error(FormatKind.TIME, value, e) from e
        return str(result)

    def format_duration(
        self, value: timedelta | int | float | Decimal, style: str | None = None
    ) -> str:
        """Format elapsed time with locale-specific units.

        Args:
            value: timedelta or number of seconds
            style: "long" (default), "short" or "narrow"

        Returns:
            Formatted duration, rounded to the largest sensible unit

        Raises:
            MessageFormatError: If value is not a duration or style is unknown

        Examples:
            >>> ctx = LocaleContext.create('en-US')
            >>> ctx.format_duration(timedelta(hours=3))
            '3 hours'
            >>> ctx.format_duration(120, 'short')
            '2 min'
        """
        if _is_number(value):
            value = timedelta(seconds=float(value))
        elif not isinstance(value, timedelta):
            raise self._type_error(FormatKind.DURATION, value, "a timedelta or number of seconds")

        fmt = style or "long"
        try:
            if fmt not in _DURATION_STYLES:
                msg = f"Unknown duration style '{fmt}' (expected long, short or narrow)"
                raise ValueError(msg)
            result = babel_dates.format_timedelta(value, format=fmt, locale=self.babel_locale)
        except _FORMAT_ERRORS as e:
            raise _format_error(FormatKind.DURATION, value, e) from e
        return str(result)

    @staticmethod
    def _type_error(kind: FormatKind, value: object, expected: str) -> MessageFormatError:
        msg = f"expected {expected}, got {type(value).__name__}"
        return _format_error(kind, value, TypeError(msg))
