"""Primitive parsing utilities for the message parser.

This module provides low-level parsers for argument names, identifiers,
integers and clause selectors.

Every parser returns ``ParseResult[T]`` on success and ``ParseError``
(carrying the cursor at the failure point) otherwise.
"""

from icumessage.syntax.ast import ArgName, ExactSelector, KeywordSelector, NamedArg, PositionalArg
from icumessage.syntax.cursor import Cursor, ParseError, ParseResult

__all__ = [
    "is_identifier_char",
    "is_identifier_start",
    "parse_argument_name",
    "parse_identifier",
    "parse_integer",
    "parse_selector",
]

# ASCII digits only - str.isdigit() accepts Unicode digits like ² or ³
# for which int() fails.
_ASCII_DIGITS: str = "0123456789"


def is_identifier_start(ch: str) -> bool:
    """Check if character can start an identifier (letter or underscore)."""
    return ch.isalpha() or ch == "_"


def is_identifier_char(ch: str) -> bool:
    """Check if character can continue an identifier."""
    return ch.isalnum() or ch in ("_", "-")


def parse_identifier(cursor: Cursor) -> ParseResult[str] | ParseError:
    """Parse identifier: [a-zA-Z_][a-zA-Z0-9_-]*

    Examples:
        name -> "name"
        num_guests -> "num_guests"
        gender-of-host -> "gender-of-host"

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(identifier, new_cursor) on success
        ParseError if no identifier starts here
    """
    if cursor.is_eof or not is_identifier_start(cursor.current):
        return ParseError(
            "Expected identifier (must start with letter or '_')",
            cursor,
            expected=("a-z", "A-Z", "_"),
        )

    start_cursor = cursor
    cursor = cursor.advance()
    while not cursor.is_eof and is_identifier_char(cursor.current):
        cursor = cursor.advance()

    return ParseResult(start_cursor.slice_to(cursor.pos), cursor)


def parse_integer(cursor: Cursor) -> ParseResult[int] | ParseError:
    """Parse non-negative integer: [0-9]+

    Examples:
        0 -> 0
        12 -> 12

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(value, new_cursor) on success
        ParseError if no digit starts here
    """
    if cursor.is_eof or cursor.current not in _ASCII_DIGITS:
        return ParseError("Expected integer", cursor, expected=("0-9",))

    start_cursor = cursor
    while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
        cursor = cursor.advance()

    return ParseResult(int(start_cursor.slice_to(cursor.pos)), cursor)


def parse_argument_name(cursor: Cursor) -> ParseResult[ArgName] | ParseError:
    """Parse argument name: positional index or identifier.

    A name made only of ASCII digits is a zero-based positional index;
    anything else must be an identifier.

    Examples:
        0 -> PositionalArg(0)
        item_count -> NamedArg("item_count")

    Args:
        cursor: Current position in source (after '{' and whitespace)

    Returns:
        ParseResult(ArgName, new_cursor) on success
        ParseError if neither form starts here
    """
    if not cursor.is_eof and cursor.current in _ASCII_DIGITS:
        number = parse_integer(cursor)
        if isinstance(number, ParseError):
            return number
        return ParseResult(PositionalArg(number.value), number.cursor)

    identifier = parse_identifier(cursor)
    if isinstance(identifier, ParseError):
        return ParseError("Expected argument name", cursor, expected=("0-9", "a-z", "_"))
    return ParseResult(NamedArg(identifier.value), identifier.cursor)


def parse_selector(cursor: Cursor) -> ParseResult[ExactSelector | KeywordSelector] | ParseError:
    """Parse clause selector: '=' integer | keyword

    '=' must be directly followed by digits. Keywords consist of letters,
    digits, '_' and '-'; no whitespace inside the token.

    Examples:
        =0 -> ExactSelector(0)
        few -> KeywordSelector("few")

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(selector, new_cursor) on success
        ParseError if no selector starts here
    """
    if not cursor.is_eof and cursor.current == "=":
        number = parse_integer(cursor.advance())
        if isinstance(number, ParseError):
            return ParseError("Expected integer after '='", number.cursor, expected=("0-9",))
        return ParseResult(ExactSelector(number.value), number.cursor)

    start_cursor = cursor
    while not cursor.is_eof and is_identifier_char(cursor.current):
        cursor = cursor.advance()

    if cursor.pos == start_cursor.pos:
        return ParseError("Expected clause selector", cursor, expected=("=", "a-z"))

    return ParseResult(KeywordSelector(start_cursor.slice_to(cursor.pos)), cursor)
