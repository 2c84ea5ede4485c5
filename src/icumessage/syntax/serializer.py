"""Serialize message trees back to template syntax.

Converts AST nodes to canonical template text. Useful for:
- Diagnostics (showing the template a tree came from)
- Tooling that rewrites templates
- Property-based testing (roundtrip: parse -> serialize -> parse)

Canonical form:
    - Arguments as {name}, {name, kind}, {name, kind, style}
    - Clause arguments as {name, plural, offset: 1 =0 {...} other {...}}
    - Apostrophes doubled; a literal containing '{', '}' (or '#' in plural
      bodies) is quoted from its first special character to its end

Python 3.13+.
"""

from icumessage.syntax.ast import (
    ArgName,
    ArgRef,
    Clause,
    ExactSelector,
    FormattedArg,
    KeywordSelector,
    Literal,
    NamedArg,
    NumberPlaceholder,
    Pattern,
    PluralArgument,
    PositionalArg,
    SelectArgument,
)
from icumessage.syntax.parser.primitives import is_identifier_char, is_identifier_start

from .visitor import ASTVisitor

__all__ = ["MessageSerializer", "SerializationValidationError", "serialize"]


class SerializationValidationError(ValueError):
    """Raised when a tree cannot be written as template text that re-parses.

    Common causes (trees built by hand):
    - Plural/select argument without an 'other' clause, or with duplicate selectors
    - '#' placeholder outside a plural or selectordinal body
    - Argument name that is not an identifier, or a style containing braces
    """


def _validate_name(arg: ArgName) -> None:
    if PositionalArg.guard(arg):
        return
    name = arg.name
    if not name or not is_identifier_start(name[0]) or not all(is_identifier_char(c) for c in name):
        msg = f"Argument name {name!r} is not a valid identifier"
        raise SerializationValidationError(msg)


def _validate_clauses(clauses: tuple[Clause, ...], kind: str) -> None:
    selectors = [c.selector for c in clauses]
    if len(set(selectors)) != len(selectors):
        msg = f"'{kind}' argument has duplicate selectors"
        raise SerializationValidationError(msg)
    if not any(KeywordSelector.guard(s) and s.is_other for s in selectors):
        msg = f"'{kind}' argument has no 'other' clause"
        raise SerializationValidationError(msg)
    for selector in selectors:
        if KeywordSelector.guard(selector) and not (
            selector.name and all(is_identifier_char(c) for c in selector.name)
        ):
            msg = f"Selector {selector.name!r} is not a valid keyword"
            raise SerializationValidationError(msg)


def _validate_pattern(pattern: Pattern, *, in_plural: bool) -> None:
    """Validate a Pattern recursively."""
    for element in pattern.elements:
        match element:
            case NumberPlaceholder():
                if not in_plural:
                    msg = "'#' placeholder outside a plural or selectordinal body"
                    raise SerializationValidationError(msg)
            case ArgRef():
                _validate_name(element.arg)
            case FormattedArg():
                _validate_name(element.arg)
                style = element.style
                if style is not None and (
                    not style or style != style.strip() or "{" in style or "}" in style
                ):
                    msg = f"Style {style!r} cannot be written as template text"
                    raise SerializationValidationError(msg)
            case PluralArgument():
                _validate_name(element.arg)
                _validate_clauses(element.clauses, element.kind)
                for clause in element.clauses:
                    _validate_pattern(clause.body, in_plural=True)
            case SelectArgument():
                _validate_name(element.arg)
                _validate_clauses(element.clauses, element.kind)
                for clause in element.clauses:
                    _validate_pattern(clause.body, in_plural=False)
            case _:
                pass  # Literals are always representable


def _escape_literal(text: str, *, in_plural: bool) -> str:
    """Quote special characters so the text re-parses as one literal.

    Apostrophes before the first special character are doubled; from the
    first special character on, the rest of the text is one quoted span.
    The span is closed before the next element, which never starts with
    an apostrophe because adjacent literals are merged.
    """
    specials = "{}#" if in_plural else "{}"
    first = next((i for i, ch in enumerate(text) if ch in specials), None)
    if first is None:
        return text.replace("'", "''")
    head = text[:first].replace("'", "''")
    quoted = text[first:].replace("'", "''")
    return f"{head}'{quoted}'"


class MessageSerializer(ASTVisitor):
    """Converts a message tree back to template text.

    Thread-safe serializer; all output state is local to the serialize()
    call except the depth guard, which is balanced on every return path.

    Usage:
        >>> pattern = parse_message("{n, plural, one {# item} other {# items}}")
        >>> MessageSerializer().serialize(pattern)
        '{n, plural, one {# item} other {# items}}'
    """

    def serialize(self, pattern: Pattern, *, validate: bool = False, in_plural: bool = False) -> str:
        """Serialize Pattern to template text.

        Args:
            pattern: Pattern to serialize
            validate: If True, validate the tree before serialization
            in_plural: Serialize as a plural clause body ('#' is a placeholder)

        Returns:
            Template text

        Raises:
            SerializationValidationError: If validate=True and the tree is invalid
            DepthLimitExceededError: If the tree nests deeper than max_depth
        """
        if validate:
            _validate_pattern(pattern, in_plural=in_plural)

        output: list[str] = []
        self._serialize_pattern(pattern, output, in_plural=in_plural)
        return "".join(output)

    def _serialize_pattern(self, pattern: Pattern, output: list[str], *, in_plural: bool) -> None:
        for element in pattern.elements:
            match element:
                case Literal():
                    output.append(_escape_literal(element.value, in_plural=in_plural))
                case NumberPlaceholder():
                    output.append("#")
                case ArgRef():
                    output.append(f"{{{self._name(element.arg)}}}")
                case FormattedArg():
                    output.append(f"{{{self._name(element.arg)}, {element.kind}")
                    if element.style is not None:
                        output.append(f", {element.style}")
                    output.append("}")
                case PluralArgument():
                    output.append(f"{{{self._name(element.arg)}, {element.kind},")
                    if element.offset:
                        output.append(f" offset: {element.offset}")
                    self._serialize_clauses(element.clauses, output, in_plural=True)
                    output.append("}")
                case SelectArgument():
                    output.append(f"{{{self._name(element.arg)}, {element.kind},")
                    self._serialize_clauses(element.clauses, output, in_plural=False)
                    output.append("}")

    def _serialize_clauses(
        self, clauses: tuple[Clause, ...], output: list[str], *, in_plural: bool
    ) -> None:
        with self._depth_guard:
            for clause in clauses:
                output.append(" ")
                output.append(self._selector(clause.selector))
                output.append(" {")
                self._serialize_pattern(clause.body, output, in_plural=in_plural)
                output.append("}")

    @staticmethod
    def _name(arg: ArgName) -> str:
        if NamedArg.guard(arg):
            return arg.name
        return str(arg.index)

    @staticmethod
    def _selector(selector: ExactSelector | KeywordSelector) -> str:
        if ExactSelector.guard(selector):
            return f"={selector.value}"
        return selector.name


def serialize(pattern: Pattern, *, validate: bool = False, in_plural: bool = False) -> str:
    """Serialize Pattern to template text.

    Convenience function for MessageSerializer.serialize(). Trees produced by
    the parser always re-parse to an equal tree.

    Args:
        pattern: Pattern to serialize
        validate: If True, validate the tree before serialization
        in_plural: Serialize as a plural clause body ('#' is a placeholder)

    Returns:
        Template text

    Raises:
        SerializationValidationError: If validate=True and the tree is invalid

    Example:
        >>> serialize(parse_message("Don't {verb}: '{'x'}'"))
        "Don''t {verb}: '{x}'"
    """
    serializer = MessageSerializer()
    return serializer.serialize(pattern, validate=validate, in_plural=in_plural)
