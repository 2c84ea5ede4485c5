"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern for zero-`None` parsing.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - No `str | None` anywhere - type safety by design
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (O(n) only for errors)

Result Convention:
    Every grammar rule returns ``ParseResult[T] | ParseError``. A
    ParseError carries the cursor at the failure point, so the unconsumed
    remainder and the 1-based position are always derivable from it.

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
    - F# FParsec
"""

from dataclasses import dataclass, field
from typing import TypeIs

from icumessage.diagnostics import DiagnosticCode, ErrorTemplate, SourceSpan

__all__ = ["WHITESPACE", "Cursor", "ParseError", "ParseResult"]

# Insignificant between structural tokens; preserved verbatim inside literals.
WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency
        3. Simple position - Just an integer offset
        4. EOF is a property - Not a return value
        5. current raises - No None handling needed!

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current  # Type: str (not str | None!)
        'h'
        >>> new_cursor = cursor.advance()
        >>> new_cursor.current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input.

        Note: This is the preferred way to check for EOF.
              Use this in while loops: `while not cursor.is_eof:`
        """
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    @property
    def remainder(self) -> str:
        """Unconsumed input from the current position."""
        return self.source[self.pos :]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns None ONLY when peeking beyond EOF.
        Use for lookahead: `if cursor.peek(1) == "'":`
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions.

        Example:
            >>> cursor = Cursor("hello", 0)
            >>> cursor2 = cursor.advance()
            >>> cursor.pos  # Original unchanged
            0
            >>> cursor2.pos  # New cursor advanced
            1
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos.

        Example:
            >>> cursor = Cursor("hello world", 0)
            >>> start_cursor = cursor
            >>> while not cursor.is_eof and cursor.current != " ":
            ...     cursor = cursor.advance()
            >>> start_cursor.slice_to(cursor.pos)
            'hello'
        """
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Get next n characters without advancing cursor.

        Example:
            >>> cursor = Cursor("offset: 1", 0)
            >>> cursor.slice_ahead(7)
            'offset:'
        """
        return self.source[self.pos : self.pos + n]

    def skip_whitespace(self) -> "Cursor":
        """Skip whitespace (space, tab, LF, CR, FF, VT).

        Example:
            >>> cursor = Cursor("  \\n\\t  hello", 0)
            >>> cursor.skip_whitespace().current
            'h'
        """
        c = self
        while not c.is_eof and c.current in WHITESPACE:
            c = c.advance()
        return c

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise.

        Example:
            >>> Cursor("{a}", 0).expect("{").pos
            1
            >>> Cursor("{a}", 0).expect("}") is None
            True
        """
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position.
            Only call for error reporting, not during normal parsing!

        Example:
            >>> source = "line1\\nline2"
            >>> Cursor(source, 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Type Parameters:
        T: The type of the parsed value

    Pattern:
        Every rule has signature:
            def parse_foo(cursor: Cursor, ...) -> ParseResult[Foo] | ParseError:
                ...
                return ParseResult(parsed_value, new_cursor)

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = ParseResult("h", cursor.advance())
        >>> result.value
        'h'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseError:
    """Parse error with location and context.

    Design:
        - Stores cursor at error point (remainder, position, line:column)
        - Reason phrased as a capitalized sentence without trailing period
        - Expected tokens tuple (immutable for better errors)
        - Diagnostic code classifying the failure

    Example:
        >>> cursor = Cursor("{a b}", 3)
        >>> error = ParseError("Expected '}'", cursor, expected=("}",))
        >>> error.position
        4
        >>> error.remainder
        'b}'
    """

    message: str
    cursor: Cursor
    expected: tuple[str, ...] = field(default_factory=tuple)
    code: DiagnosticCode = DiagnosticCode.UNEXPECTED_CHARACTER

    @property
    def remainder(self) -> str:
        """Exact unconsumed input at the failure point."""
        return self.cursor.remainder

    @property
    def position(self) -> int:
        """1-based character offset of the failure point."""
        return self.cursor.pos + 1

    @property
    def span(self) -> SourceSpan:
        """Zero-width source span at the failure point."""
        line, col = self.cursor.compute_line_col()
        return SourceSpan(start=self.cursor.pos, end=self.cursor.pos, line=line, column=col)

    @staticmethod
    def guard(result: object) -> TypeIs["ParseError"]:
        """True if a rule result is a failure."""
        return isinstance(result, ParseError)

    def format_error(self) -> str:
        """Format error with line:column.

        Example:
            >>> cursor = Cursor("hello\\n{world", 12)
            >>> ParseError("Expected '}'", cursor).format_error()
            "2:7: Expected '}'"
        """
        line, col = self.cursor.compute_line_col()
        error_msg = f"{line}:{col}: {self.message}"
        if self.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.expected)
            error_msg += f" (expected: {expected_str})"
        return error_msg

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format error with source context and pointer.

        Shows the problematic line and a caret pointing to the error location.

        Example:
            >>> source = "Hi\\n{n, plural,\\none {x}}"
            >>> error = ParseError("Expected 'other'", Cursor(source, 23))
            >>> print(error.format_with_context())
            3:9: Expected 'other'
            <BLANKLINE>
               1 | Hi
               2 | {n, plural,
               3 | one {x}}
                           ^
        """
        line, col = self.cursor.compute_line_col()
        lines = self.cursor.source.split("\n")
        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])
            if i == line:
                pointer = " " * (len(line_num_str) + col - 1) + "^"
                result_lines.append(pointer)

        return "\n".join(result_lines)
