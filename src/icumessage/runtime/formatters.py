"""Argument formatting services.

Implements the number, date, time and duration formatters behind
{x, number}, {x, date}, {x, time} and {x, duration} arguments, plus the
registry that maps argument types to formatter callables.

Architecture:
    - Formatter callables share one calling convention:
      (value, locale_code, style) -> str
    - FormatterRegistry maps argument type names to callables
    - Built-in formatters delegate to LocaleContext (thread-safe, CLDR-based)
    - spellout and ordinal have no built-in formatter; register one to use them

Example:
    >>> registry = create_default_registry()
    >>> registry.format("number", 0.15, "en-US", "percent")
    '15%'

Python 3.13+. Uses Babel for i18n.
"""

from collections.abc import Callable, Iterator
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from icumessage.diagnostics import ErrorTemplate, MessageFormatError
from icumessage.enums import FormatKind

from .locale_context import LocaleContext

__all__ = [
    "Formatter",
    "FormatterRegistry",
    "create_default_registry",
    "date_format",
    "duration_format",
    "get_shared_registry",
    "number_format",
    "time_format",
]

type Formatter = Callable[[object, str, str | None], str]
"""Formatter calling convention: (value, locale_code, style) -> text."""


def number_format(
    value: int | float | Decimal,
    locale_code: str = "en-US",
    style: str | None = None,
) -> str:
    """Format number with locale-specific separators.

    Args:
        value: Number to format (int, float, or Decimal)
        locale_code: BCP 47 locale identifier (e.g., 'en-US', 'de-DE')
        style: None/"decimal", "integer", "percent", "currency",
            "scientific", or a CLDR number pattern

    Returns:
        Formatted number string

    Examples:
        >>> number_format(1234.5, "en-US")
        '1,234.5'
        >>> number_format(1234.5, "de-DE")
        '1.234,5'
        >>> number_format(0.15, "en-US", "percent")
        '15%'

    Template Usage:
        {rate, number, percent}
        {amount, number, #,##0.00}
    """
    return LocaleContext.create(locale_code).format_number(value, style)


def date_format(
    value: date | datetime | str,
    locale_code: str = "en-US",
    style: str | None = None,
) -> str:
    """Format date with locale-specific formatting.

    Args:
        value: date, datetime, or ISO 8601 string
        locale_code: BCP 47 locale identifier
        style: "short", "medium" (default), "long", "full", or a CLDR pattern

    Returns:
        Formatted date string

    Examples:
        >>> date_format(date(2025, 10, 27), "de-DE", "short")
        '27.10.25'

    Template Usage:
        {due, date, long}
    """
    return LocaleContext.create(locale_code).format_date(value, style)


def time_format(
    value: time | datetime | str,
    locale_code: str = "en-US",
    style: str | None = None,
) -> str:
    """Format time of day with locale-specific formatting.

    Args:
        value: time, datetime, or ISO 8601 string
        locale_code: BCP 47 locale identifier
        style: "short", "medium" (default), "long", "full", or a CLDR pattern

    Returns:
        Formatted time string

    Template Usage:
        {start, time, short}
    """
    return LocaleContext.create(locale_code).format_time(value, style)


def duration_format(
    value: timedelta | int | float | Decimal,
    locale_code: str = "en-US",
    style: str | None = None,
) -> str:
    """Format elapsed time with locale-specific units.

    Args:
        value: timedelta or number of seconds
        locale_code: BCP 47 locale identifier
        style: "long" (default), "short" or "narrow"

    Returns:
        Formatted duration string

    Template Usage:
        {elapsed, duration, short}
    """
    return LocaleContext.create(locale_code).format_duration(value, style)


class FormatterRegistry:
    """Maps argument types to formatter callables.

    Supports dict-like introspection:
        - list_kinds(): List all registered argument types
        - __iter__: Iterate over argument types
        - __len__: Count registered formatters
        - __contains__: Check if a formatter exists (supports 'in' operator)

    Memory Optimization:
        Uses __slots__ for memory efficiency (avoids per-instance __dict__).

    Example:
        >>> registry = FormatterRegistry()
        >>> registry.register("spellout", lambda value, locale, style: "forty-two")
        >>> "spellout" in registry
        True
        >>> registry.format("spellout", 42, "en", None)
        'forty-two'
    """

    __slots__ = ("_formatters", "_frozen", "_styles")

    def __init__(self) -> None:
        """Initialize empty formatter registry."""
        self._formatters: dict[str, Formatter] = {}
        self._styles: dict[tuple[str, str], str] = {}
        self._frozen = False

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = (
                "Cannot register on a frozen registry. "
                "Use copy() or create_default_registry() for a mutable registry."
            )
            raise TypeError(msg)

    def register(self, kind: FormatKind | str, formatter: Formatter) -> None:
        """Register a formatter for an argument type.

        Replaces any formatter previously registered for the same type.

        Args:
            kind: Argument type (number, date, time, spellout, ordinal, duration)
            formatter: Callable (value, locale_code, style) -> str

        Raises:
            TypeError: If the registry is frozen
            ValueError: If kind names a clause argument (plural, selectordinal, select)
        """
        self._check_mutable()
        key = str(kind)
        if key in {k.value for k in FormatKind if k.takes_clauses}:
            msg = f"'{key}' arguments select clauses and cannot have a formatter"
            raise ValueError(msg)
        self._formatters[key] = formatter

    def register_style(self, kind: FormatKind | str, name: str, style: str) -> None:
        """Register a named style for an argument type.

        A template style equal to name is replaced by style before the
        formatter runs, so "{total, number, money}" can stand for a
        pattern defined once by the application.

        Args:
            kind: Argument type the name applies to
            name: Style text as written in templates
            style: Style passed to the formatter instead

        Raises:
            TypeError: If the registry is frozen

        Example:
            >>> registry = create_default_registry()
            >>> registry.register_style("number", "money", "#,##0.00")
            >>> registry.format("number", 1234.5, "en", "money")
            '1,234.50'
        """
        self._check_mutable()
        self._styles[(str(kind), name)] = style

    def get_style(self, kind: FormatKind | str, name: str) -> str | None:
        """Get the style registered under name for kind, or None."""
        return self._styles.get((str(kind), name))

    @property
    def styles(self) -> dict[tuple[str, str], str]:
        """Named styles keyed by (argument type, name)."""
        return dict(self._styles)

    def format(
        self,
        kind: FormatKind | str,
        value: object,
        locale_code: str,
        style: str | None = None,
    ) -> str:
        """Format a value with the formatter registered for kind.

        Args:
            kind: Argument type
            value: Bound argument value
            locale_code: Locale code
            style: Raw style text, a registered style name, or None

        Returns:
            Formatted text

        Raises:
            MessageFormatError: If no formatter is registered for kind, or
                the formatter fails
        """
        key = str(kind)
        formatter = self._formatters.get(key)
        if formatter is None:
            raise MessageFormatError(ErrorTemplate.formatter_not_found(key), kind=key, value=value)
        if style is not None:
            style = self._styles.get((key, style), style)

        # Only TypeError and ValueError are treated as formatting failures;
        # other exceptions indicate bugs in the formatter and propagate as-is.
        try:
            return str(formatter(value, locale_code, style))
        except MessageFormatError:
            raise
        except (TypeError, ValueError) as e:
            diagnostic = ErrorTemplate.formatting_failed(key, value, str(e))
            raise MessageFormatError(diagnostic, kind=key, value=value) from e

    def has_formatter(self, kind: FormatKind | str) -> bool:
        """Check if a formatter is registered for kind."""
        return str(kind) in self._formatters

    def get_formatter(self, kind: FormatKind | str) -> Formatter | None:
        """Get the formatter registered for kind, or None."""
        return self._formatters.get(str(kind))

    def list_kinds(self) -> list[str]:
        """List all registered argument types.

        Example:
            >>> create_default_registry().list_kinds()
            ['number', 'date', 'time', 'duration']
        """
        return list(self._formatters.keys())

    @property
    def frozen(self) -> bool:
        """True once freeze() has been called."""
        return self._frozen

    def freeze(self) -> None:
        """Make the registry read-only; register() and register_style() raise TypeError."""
        self._frozen = True

    def copy(self) -> "FormatterRegistry":
        """Create an unfrozen shallow copy of this registry."""
        new_registry = FormatterRegistry()
        new_registry._formatters = self._formatters.copy()
        new_registry._styles = self._styles.copy()
        return new_registry

    def __iter__(self) -> Iterator[str]:
        """Iterate over registered argument types."""
        return iter(self._formatters)

    def __len__(self) -> int:
        """Count of registered formatters."""
        return len(self._formatters)

    def __contains__(self, kind: object) -> bool:
        """Check if a formatter is registered using 'in' operator."""
        return str(kind) in self._formatters

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(FormatterRegistry())
            'FormatterRegistry(formatters=0)'
        """
        return f"FormatterRegistry(formatters={len(self._formatters)})"


def create_default_registry() -> FormatterRegistry:
    """Create a new FormatterRegistry with the built-in formatters registered.

    Each call returns a new, unfrozen instance.

    Returns:
        FormatterRegistry with number, date, time and duration formatters.

    Example:
        >>> registry = create_default_registry()
        >>> "number" in registry
        True
        >>> "spellout" in registry
        False
    """
    registry = FormatterRegistry()
    registry.register(FormatKind.NUMBER, number_format)
    registry.register(FormatKind.DATE, date_format)
    registry.register(FormatKind.TIME, time_format)
    registry.register(FormatKind.DURATION, duration_format)
    return registry


# Module-level cached default registry shared across formatters.
# Initialized lazily on first access to avoid import-time side effects.
_SHARED_REGISTRY: FormatterRegistry | None = None


def get_shared_registry() -> FormatterRegistry:
    """Get a shared, frozen FormatterRegistry with the built-in formatters.

    Immutability:
        The returned registry is FROZEN. Calling register() on it raises
        TypeError. To add formatters, use copy() or create_default_registry().

    Returns:
        Frozen shared FormatterRegistry.

    Example:
        >>> shared = get_shared_registry()
        >>> custom = shared.copy()
        >>> custom.register("spellout", my_spellout)
    """
    global _SHARED_REGISTRY  # noqa: PLW0603
    if _SHARED_REGISTRY is None:
        registry = create_default_registry()
        registry.freeze()
        _SHARED_REGISTRY = registry
    return _SHARED_REGISTRY
