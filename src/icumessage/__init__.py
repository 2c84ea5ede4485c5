"""icumessage - ICU message format parsing and locale-aware formatting.

Parses message templates with positional and named arguments, nested
plural / selectordinal / select sub-messages, offsets and the '#'
placeholder, and formats them with CLDR plural rules and Babel number,
date and time formatting.

Public API:
    MessageFormatter - Single-locale message formatting
    parse_message - Parse template text to a Pattern tree
    serialize_message - Serialize a Pattern tree to template text
    format_message - Format a template to a string
    format_list - Format a template to text fragments
    validate_bindings - Check a template's arguments are all bound

Exceptions:
    MessageError - Base exception class
    MessageParseError - Template grammar violations
    MessageBindingError - Unbound argument references
    MessageTypeError - Non-numeric plural/selectordinal values
    MessageFormatError - Missing or failing formatters

Submodules:
    icumessage.syntax.ast - Tree node types (Pattern, Literal, PluralArgument, etc.)
    icumessage.runtime - Binding sets, formatter registry, resolver
    icumessage.validation - Binding validation and argument extraction
    icumessage.diagnostics - Error codes, templates and formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .constants import DEFAULT_LOCALE
from .diagnostics import (
    MessageBindingError,
    MessageError,
    MessageFormatError,
    MessageParseError,
    MessageTypeError,
)
from .enums import FormatKind, ParseRule, PluralType

# Runtime is imported before validation: validation depends on runtime.bindings
from .runtime import (
    ArgumentBindings,
    DynamicBindings,
    FormatterRegistry,
    MessageFormatter,
    create_default_registry,
)
from .syntax import Pattern
from .syntax import parse as _parse
from .syntax import serialize as _serialize
from .validation import extract_arguments
from .validation import validate_bindings as _validate_bindings

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("icumessage")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"


def parse_message(text: str, rule: ParseRule = ParseRule.MESSAGE) -> Pattern:
    """Parse template text into a Pattern tree.

    Args:
        text: Template text
        rule: MESSAGE (default) or PLURAL_MESSAGE ('#' is a placeholder)

    Raises:
        MessageParseError: On any grammar violation

    Example:
        >>> parse_message("Hi {name}").elements
        (Literal(value='Hi '), ArgRef(arg=NamedArg(name='name')))
    """
    return _parse(text, rule)


def serialize_message(pattern: Pattern) -> str:
    """Serialize a Pattern tree to canonical template text.

    Example:
        >>> serialize_message(parse_message("{n,plural,other{# x}}"))
        '{n, plural, other {# x}}'
    """
    return _serialize(pattern)


def format_list(
    text: str | Pattern,
    bindings: object = None,
    *,
    locale: str = DEFAULT_LOCALE,
) -> tuple[str, ...]:
    """Format a template to ordered text fragments.

    Example:
        >>> format_list("{0} and {1}", ["A", "B"])
        ('A', ' and ', 'B')
    """
    return MessageFormatter(locale).format_list(text, bindings)


def format_message(
    text: str | Pattern,
    bindings: object = None,
    *,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Format a template to a string.

    Example:
        >>> format_message("{n, plural, one {# item} other {# items}}", {"n": 1})
        '1 item'
    """
    return MessageFormatter(locale).format(text, bindings)


def validate_bindings(text: str | Pattern, bindings: object) -> None:
    """Check that every argument referenced by a template is bound.

    Raises:
        MessageParseError: If text does not parse
        MessageBindingError: On the first unbound argument
    """
    pattern = text if Pattern.guard(text) else _parse(text)
    _validate_bindings(pattern, bindings)


__all__ = [
    "ArgumentBindings",
    "DynamicBindings",
    "FormatKind",
    "FormatterRegistry",
    "MessageBindingError",
    "MessageError",
    "MessageFormatError",
    "MessageFormatter",
    "MessageParseError",
    "MessageTypeError",
    "ParseRule",
    "PluralType",
    "__version__",
    "create_default_registry",
    "extract_arguments",
    "format_list",
    "format_message",
    "parse_message",
    "serialize_message",
    "validate_bindings",
]
