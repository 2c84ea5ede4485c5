"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
    "SourceSpan",
]


class ErrorCategory(StrEnum):
    """Error categorization matching the exception hierarchy.

    Categories:
        PARSE: Template grammar violation or clause validation failure
        BINDING: Referenced argument has no binding
        TYPE: Bound value has the wrong type for its argument
        FORMATTING: Formatting service missing or failed
    """

    PARSE = "parse"
    BINDING = "binding"
    TYPE = "type"
    FORMATTING = "formatting"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Binding errors (unresolved argument references)
        2000-2999: Resolution errors (runtime evaluation failures)
        3000-3999: Syntax errors (parser failures)
    """

    # Binding errors (1000-1999)
    ARGUMENT_NOT_BOUND = 1001

    # Resolution errors (2000-2999)
    TYPE_MISMATCH = 2001
    FORMATTER_NOT_FOUND = 2002
    FORMATTING_FAILED = 2003
    MAX_DEPTH_EXCEEDED = 2004
    UNKNOWN_NODE = 2005

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    UNEXPECTED_CHARACTER = 3002
    MISSING_OTHER_CLAUSE = 3003
    DUPLICATE_SELECTOR = 3004
    UNKNOWN_ARGUMENT_TYPE = 3005
    PARSE_NESTING_DEPTH_EXCEEDED = 3006

    @property
    def category(self) -> ErrorCategory:
        """Category derived from the code range."""
        if self.value < 2000:
            return ErrorCategory.BINDING
        if self.value >= 3000:
            return ErrorCategory.PARSE
        if self is DiagnosticCode.TYPE_MISMATCH:
            return ErrorCategory.TYPE
        return ErrorCategory.FORMATTING


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Template location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line /
                column is less than 1.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Template location (None for runtime errors)
        hint: Suggestion for fixing the error
        argument_name: Argument reference that caused the error
        format_kind: Argument type involved (number, plural, ...)
        expected_type: Expected value type (type errors)
        received_type: Actual value type (type errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    argument_name: str | None = None
    format_kind: str | None = None
    expected_type: str | None = None
    received_type: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like the Rust compiler.

        Example output:
            error[ARGUMENT_NOT_BOUND]: No argument binding was found for 'name' in {}
              = argument: name
              = help: Pass a value for 'name' in the bindings

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
