"""Core message template parser implementation.

This module provides the MessageParser class that orchestrates parsing of
message templates into AST structures defined in :mod:`icumessage.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~icumessage.syntax.cursor.Cursor`)
    to traverse template text. Each grammar rule (in :mod:`~icumessage.syntax.parser.rules`
    and :mod:`~icumessage.syntax.parser.primitives`) returns either a
    :class:`~icumessage.syntax.cursor.ParseResult` containing the parsed node and
    updated cursor position, or a :class:`~icumessage.syntax.cursor.ParseError`
    that is converted into :class:`~icumessage.diagnostics.MessageParseError`
    here, at the single public boundary.

Entry Rules:
    - :attr:`ParseRule.MESSAGE` - full message grammar
    - :attr:`ParseRule.PLURAL_MESSAGE` - plural clause body grammar ('#' is a placeholder)

Security:
    Includes configurable input size and nesting depth limits to prevent
    DoS via unbounded memory allocation or stack exhaustion.

See Also:
    - :mod:`icumessage.syntax.ast` - All AST node type definitions
    - :mod:`icumessage.syntax.parser.rules` - Grammar rules
"""

import logging

from icumessage.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from icumessage.diagnostics import ErrorTemplate, MessageParseError
from icumessage.enums import ParseRule
from icumessage.syntax.ast import Pattern
from icumessage.syntax.cursor import Cursor, ParseError
from icumessage.syntax.parser.rules import ParseContext, parse_pattern

__all__ = ["MessageParser"]

logger = logging.getLogger(__name__)


class MessageParser:
    """Message template parser using immutable cursor pattern.

    Design:
    - Immutable cursor prevents infinite loops (no manual guards needed)
    - All parser state is local to the call (thread-safe, reentrant)
    - Deterministic errors: reason, unconsumed remainder, 1-based position

    Security:
    - Configurable max_source_size prevents DoS via large inputs
    - Configurable max_nesting_depth prevents DoS via deeply nested arguments

    Attributes:
        max_source_size: Maximum allowed template size in characters (default: 10 MB)
        max_nesting_depth: Maximum allowed argument nesting depth (default: 100)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum template size in characters (default: 10 MB).
                            Set to 0 to disable size limit (not recommended).
            max_nesting_depth: Maximum argument nesting depth (default: 100).
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed template size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed argument nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str, rule: ParseRule = ParseRule.MESSAGE) -> Pattern:
        """Parse a complete template into a Pattern.

        The entire input must be consumed; an unmatched '}' is an error.

        Args:
            source: Template text
            rule: Entry rule (MESSAGE or PLURAL_MESSAGE)

        Returns:
            Parsed Pattern

        Raises:
            MessageParseError: On any grammar violation, a plural/select
                argument without 'other', or a duplicate selector
            ValueError: If source exceeds max_source_size (DoS prevention)

        Example:
            >>> parser = MessageParser()
            >>> parser.parse("Hello {name}!").elements[1]
            ArgRef(arg=NamedArg(name='name'))
        """
        pattern, cursor = self._parse(source, rule)
        if not cursor.is_eof:
            raise self._to_exception(
                ParseError("Unexpected '}' without a matching '{'", cursor, expected=("{",))
            )
        logger.debug("Parsed template (%d elements)", len(pattern.elements))
        return pattern

    def parse_partial(
        self, source: str, rule: ParseRule = ParseRule.PLURAL_MESSAGE
    ) -> tuple[Pattern, str]:
        """Parse a template prefix, stopping at an unmatched '}'.

        Used for clause bodies: the body ends at the first '}' that closes
        no argument, and the remaining text is returned untouched.

        Args:
            source: Template text
            rule: Entry rule (MESSAGE or PLURAL_MESSAGE)

        Returns:
            Tuple of (Pattern, remainder); remainder is "" when all input
            was consumed

        Raises:
            MessageParseError: On any grammar violation before the stop point
            ValueError: If source exceeds max_source_size

        Example:
            >>> MessageParser().parse_partial("# items} tail")
            (Pattern(elements=(NumberPlaceholder(), Literal(value=' items'))), '} tail')
        """
        pattern, cursor = self._parse(source, rule)
        return pattern, cursor.remainder

    def _parse(self, source: str, rule: ParseRule) -> tuple[Pattern, Cursor]:
        # Validate input size (DoS prevention)
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in MessageParser constructor to increase limit."
            )
            raise ValueError(msg)

        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        result = parse_pattern(
            Cursor(source, 0),
            context,
            in_plural=rule is ParseRule.PLURAL_MESSAGE,
        )
        if isinstance(result, ParseError):
            raise self._to_exception(result)
        return result.value, result.cursor

    @staticmethod
    def _to_exception(error: ParseError) -> MessageParseError:
        diagnostic = ErrorTemplate.parse_failure(
            error.code,
            error.message,
            error.remainder,
            error.position,
            error.span,
        )
        logger.debug("Template rejected: %s", diagnostic.message)
        return MessageParseError(
            diagnostic,
            reason=error.message,
            remainder=error.remainder,
            position=error.position,
        )
