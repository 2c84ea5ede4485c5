"""MessageFormatter - Main API for message formatting.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

import logging

from icumessage.constants import DEFAULT_LOCALE, MAX_DEPTH, MAX_SOURCE_SIZE
from icumessage.diagnostics import MessageError
from icumessage.enums import ParseRule
from icumessage.locale_utils import get_system_locale
from icumessage.syntax.ast import Pattern
from icumessage.syntax.parser import MessageParser
from icumessage.validation.bindings import validate_bindings as _validate_bindings_impl

from .bindings import as_bindings
from .formatters import FormatterRegistry, get_shared_registry
from .plural_rules import Pluralizer, create_pluralizer
from .resolver import MessageResolver

__all__ = ["MessageFormatter"]

logger = logging.getLogger(__name__)

# Debug messages are high-volume; keep logged output short.
_LOG_TRUNCATE_DEBUG: int = 50


class MessageFormatter:
    """Formats message templates for one locale.

    Combines the parser, the optional binding validator and the resolver.
    Templates are parsed on every call; pass an already parsed Pattern to
    skip parsing.

    Thread Safety:
        A MessageFormatter holds no mutable state after construction.
        format() and format_list() are safe to call concurrently.

    Parser Security:
        Configurable limits prevent DoS attacks:
        - max_source_size: Maximum template size in characters (default: 10 MB)
        - max_nesting_depth: Maximum argument nesting depth (default: 100)

    Examples:
        >>> formatter = MessageFormatter("en")
        >>> formatter.format("{name} has {n, plural, one {# file} other {# files}}",
        ...                  {"name": "Ann", "n": 3})
        'Ann has 3 files'
        >>> formatter.format_list("{0} and {1}", ["A", "B"])
        ('A', ' and ', 'B')
    """

    __slots__ = (
        "_formatters",
        "_locale",
        "_max_nesting_depth",
        "_max_source_size",
        "_parser",
        "_resolver",
    )

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        /,
        *,
        formatters: FormatterRegistry | None = None,
        pluralizer: Pluralizer | None = None,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize formatter for locale.

        Args:
            locale: Locale code (en, en_US, de-DE, pl) [positional-only]
            formatters: FormatterRegistry to use (default: shared frozen registry
                        with number, date, time, duration). Pass a custom registry
                        to add spellout/ordinal or override built-in behaviour.
            pluralizer: (number, plural_type) -> category callable
                        (default: Babel CLDR rules for locale)
            max_source_size: Maximum template size in characters (default: 10 MB).
            max_nesting_depth: Maximum argument nesting depth (default: 100).

        Raises:
            ValueError: If locale code is empty

        Example:
            >>> registry = create_default_registry()
            >>> registry.register("spellout", my_spellout)
            >>> formatter = MessageFormatter("en", formatters=registry)
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)

        self._locale = locale
        self._max_source_size = max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        self._max_nesting_depth = max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        self._parser = MessageParser(
            max_source_size=self._max_source_size,
            max_nesting_depth=self._max_nesting_depth,
        )
        self._formatters = formatters if formatters is not None else get_shared_registry()
        self._resolver = MessageResolver(
            locale,
            formatters=self._formatters,
            pluralizer=pluralizer if pluralizer is not None else create_pluralizer(locale),
            max_depth=self._max_nesting_depth,
        )

        logger.info(
            "MessageFormatter initialized for locale: %s (formatters=%d, custom_pluralizer=%s)",
            locale,
            len(self._formatters),
            pluralizer is not None,
        )

    @property
    def locale(self) -> str:
        """Locale code for this formatter (read-only).

        Example:
            >>> MessageFormatter("lv_LV").locale
            'lv_LV'
        """
        return self._locale

    @property
    def formatters(self) -> FormatterRegistry:
        """Formatter registry in use (read-only)."""
        return self._formatters

    @property
    def max_source_size(self) -> int:
        """Maximum template size in characters (read-only)."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum argument nesting depth (read-only)."""
        return self._max_nesting_depth

    @classmethod
    def for_system_locale(
        cls,
        *,
        formatters: FormatterRegistry | None = None,
        pluralizer: Pluralizer | None = None,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> "MessageFormatter":
        """Factory method to create a MessageFormatter using the system locale.

        Detects the current system locale (from locale.getlocale(), LC_ALL,
        LC_MESSAGES, or LANG environment variables).

        Returns:
            Configured MessageFormatter instance for system locale

        Raises:
            RuntimeError: If system locale cannot be determined
        """
        system_locale = get_system_locale(raise_on_failure=True)
        return cls(
            system_locale,
            formatters=formatters,
            pluralizer=pluralizer,
            max_source_size=max_source_size,
            max_nesting_depth=max_nesting_depth,
        )

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(MessageFormatter("de"))
            "MessageFormatter(locale='de', formatters=4)"
        """
        return f"MessageFormatter(locale={self._locale!r}, formatters={len(self._formatters)})"

    def parse(self, template: str | Pattern, rule: ParseRule = ParseRule.MESSAGE) -> Pattern:
        """Parse template text with this formatter's limits.

        Patterns are returned unchanged.

        Raises:
            MessageParseError: On any grammar violation
            ValueError: If the template exceeds max_source_size
        """
        if Pattern.guard(template):
            return template
        return self._parser.parse(template, rule)

    def validate_bindings(self, template: str | Pattern, bindings: object) -> None:
        """Check every argument of template is bound, without formatting.

        Raises:
            MessageParseError: If template text does not parse
            MessageBindingError: On the first unbound argument
        """
        _validate_bindings_impl(self.parse(template), bindings)

    def format_list(
        self,
        template: str | Pattern,
        bindings: object = None,
        *,
        validate: bool = False,
    ) -> tuple[str, ...]:
        """Format template to ordered text fragments.

        Args:
            template: Template text or parsed Pattern
            bindings: Sequence (positional), mapping (named), None, or a
                binding set (ArgumentBindings, DynamicBindings)
            validate: Check all bindings before evaluating

        Returns:
            One fragment per top-level template element

        Raises:
            MessageParseError: Template does not parse
            MessageBindingError: A referenced argument is not bound
            MessageTypeError: Plural/selectordinal value is not a number
            MessageFormatError: Formatter missing or failed
        """
        try:
            pattern = self.parse(template)
            binding_set = as_bindings(bindings)
            if validate:
                _validate_bindings_impl(pattern, binding_set)
            fragments = self._resolver.resolve(pattern, binding_set)
        except MessageError as e:
            logger.warning("Formatting failed (%s): %s", type(e).__name__, e)
            raise

        logger.debug("Formatted message: %s", "".join(fragments)[:_LOG_TRUNCATE_DEBUG])
        return fragments

    def format(
        self,
        template: str | Pattern,
        bindings: object = None,
        *,
        validate: bool = False,
    ) -> str:
        """Format template to a single string.

        Same as format_list() with the fragments joined.

        Examples:
            >>> MessageFormatter("en").format("Hello {0}!", ["world"])
            'Hello world!'
        """
        return "".join(self.format_list(template, bindings, validate=validate))
