"""Message template syntax package.

Provides parser, AST definitions, visitor pattern, and serialization.
Separate from runtime so tooling can inspect templates without formatting them.

Python 3.13+.
"""

from icumessage.enums import ParseRule

from .ast import (
    ArgName,
    ArgRef,
    Argument,
    ASTNode,
    Clause,
    ExactSelector,
    FormattedArg,
    KeywordSelector,
    Literal,
    NamedArg,
    NumberPlaceholder,
    Pattern,
    PatternElement,
    PluralArgument,
    PositionalArg,
    SelectArgument,
    Selector,
)
from .cursor import Cursor, ParseError, ParseResult
from .parser import MessageParser
from .serializer import MessageSerializer, SerializationValidationError, serialize
from .visitor import ASTVisitor

__all__ = [
    "ASTNode",
    "ASTVisitor",
    "ArgName",
    "ArgRef",
    "Argument",
    "Clause",
    "Cursor",
    "ExactSelector",
    "FormattedArg",
    "KeywordSelector",
    "Literal",
    "MessageParser",
    "MessageSerializer",
    "NamedArg",
    "NumberPlaceholder",
    "ParseError",
    "ParseResult",
    "Pattern",
    "PatternElement",
    "PluralArgument",
    "PositionalArg",
    "SelectArgument",
    "SerializationValidationError",
    "Selector",
    "parse",
    "serialize",
]


def parse(source: str, rule: ParseRule = ParseRule.MESSAGE) -> Pattern:
    """Parse template text into a Pattern.

    Convenience function for MessageParser.parse().

    Args:
        source: Template text
        rule: Entry rule (MESSAGE or PLURAL_MESSAGE)

    Returns:
        Parsed Pattern

    Raises:
        MessageParseError: On any grammar violation

    Example:
        >>> from icumessage.syntax import parse
        >>> parse("{0} {1}").elements[1]
        Literal(value=' ')
    """
    parser = MessageParser()
    return parser.parse(source, rule)
