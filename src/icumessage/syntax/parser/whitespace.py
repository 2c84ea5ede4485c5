"""Whitespace handling utilities for the message parser.

Whitespace is insignificant between structural tokens (around commas,
braces and ``offset:``) and preserved verbatim inside literal text, with
one exception: layout whitespace that opens or closes a clause body and
contains a line break is dropped, so multi-line templates render without
their indentation.
"""

from icumessage.syntax.ast import Literal, PatternElement
from icumessage.syntax.cursor import WHITESPACE, Cursor

__all__ = ["is_layout", "skip_whitespace", "trim_layout"]

_LINE_BREAKS: frozenset[str] = frozenset("\n\r")


def skip_whitespace(cursor: Cursor) -> Cursor:
    """Skip whitespace between structural tokens.

    Accepts space, tab, LF, CR, FF and VT.

    Args:
        cursor: Current position in source

    Returns:
        New cursor at first non-whitespace character (or EOF)

    Design:
        Immutable cursor ensures termination.
    """
    return cursor.skip_whitespace()


def is_layout(text: str) -> bool:
    """Check if text is whitespace-only and contains a line break.

    Example:
        >>> is_layout("\\n    ")
        True
        >>> is_layout("  ")
        False
    """
    return bool(text) and all(ch in WHITESPACE for ch in text) and not _LINE_BREAKS.isdisjoint(text)


def _leading_whitespace(text: str) -> int:
    count = 0
    for ch in text:
        if ch not in WHITESPACE:
            break
        count += 1
    return count


def _trailing_whitespace(text: str) -> int:
    count = 0
    for ch in reversed(text):
        if ch not in WHITESPACE:
            break
        count += 1
    return count


def trim_layout(elements: list[PatternElement]) -> list[PatternElement]:
    """Drop layout whitespace at the very start and end of a clause body.

    Only whitespace runs containing a line break are dropped; "{ a }"
    keeps its spaces, "{\\n    a\\n}" becomes "a".

    Args:
        elements: Clause body elements with adjacent literals merged

    Returns:
        Elements with layout whitespace removed (empty literals dropped)
    """
    if not elements:
        return elements

    result = list(elements)

    first = result[0]
    if Literal.guard(first):
        lead = _leading_whitespace(first.value)
        if is_layout(first.value[:lead]):
            trimmed = first.value[lead:]
            if trimmed:
                result[0] = Literal(trimmed)
            else:
                result.pop(0)

    if not result:
        return result

    last = result[-1]
    if Literal.guard(last):
        trail = _trailing_whitespace(last.value)
        if trail and is_layout(last.value[-trail:]):
            trimmed = last.value[:-trail]
            if trimmed:
                result[-1] = Literal(trimmed)
            else:
                result.pop()

    return result
