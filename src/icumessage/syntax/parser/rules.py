"""Grammar rules for the message parser.

This module provides all parsing rules for message grammar constructs:
- Pattern parsing (literals with apostrophe quoting, '#' placeholders)
- Argument parsing (simple, formatted, plural, selectordinal, select)
- Clause parsing (selectors, bodies, mandatory 'other' validation)

All grammar rules are co-located in a single module because patterns and
arguments are mutually recursive.

Grammar:
    message    := (literal | argument)*
    argument   := '{' ws name ws (',' ws kind ws (',' argStyle)?)? '}'
    argStyle   := plainStyle | pluralStyle
    pluralStyle:= ws ('offset:' ws integer ws)? (clause ws)+
    clause     := selector ws '{' message '}'
    selector   := '=' integer | keyword

Lookahead Patterns:
    - `{` starts an argument
    - `}` ends the enclosing clause body
    - `#` is a placeholder inside plural/selectordinal bodies
    - `'` followed by a special character opens a quoted span

Security:
    Includes configurable nesting depth limit to prevent stack exhaustion
    via deeply nested arguments (e.g., {a, select, other {{b, select, ...}}}).
"""

from dataclasses import dataclass

from icumessage.constants import MAX_DEPTH
from icumessage.diagnostics import DiagnosticCode, ErrorTemplate
from icumessage.enums import FormatKind, PluralType
from icumessage.syntax.ast import (
    ArgName,
    ArgRef,
    Argument,
    Clause,
    ExactSelector,
    FormattedArg,
    KeywordSelector,
    Literal,
    NumberPlaceholder,
    Pattern,
    PatternElement,
    PluralArgument,
    SelectArgument,
)
from icumessage.syntax.cursor import Cursor, ParseError, ParseResult
from icumessage.syntax.parser.primitives import (
    parse_argument_name,
    parse_identifier,
    parse_integer,
    parse_selector,
)
from icumessage.syntax.parser.whitespace import skip_whitespace, trim_layout

__all__ = ["ParseContext", "parse_argument", "parse_literal", "parse_pattern"]

_OFFSET_KEYWORD = "offset:"

# Characters that open a quoted span when they directly follow an apostrophe.
_QUOTABLE: frozenset[str] = frozenset("{}|")


@dataclass(slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Replaces thread-local state with explicit parameter passing for:
    - Thread safety without global state
    - Easier testing (no state reset needed)
    - Clear dependency flow

    Attributes:
        max_nesting_depth: Maximum allowed argument nesting depth
        current_depth: Current nesting depth (0 = top level)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been exceeded."""
        return self.current_depth >= self.max_nesting_depth

    def enter_argument(self) -> "ParseContext":
        """Create new context with incremented depth for entering clause bodies."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
        )


# =============================================================================
# Pattern Parsing
# =============================================================================


def _opens_quote(ch: str | None, *, in_plural: bool) -> bool:
    if ch is None:
        return False
    return ch in _QUOTABLE or (in_plural and ch == "#")


def parse_literal(cursor: Cursor, *, in_plural: bool) -> ParseResult[str]:
    """Parse a run of literal text with apostrophe quoting resolved.

    Stops before '{', '}' or (in plural bodies) '#', or at EOF.

    Quoting:
        ''      -> one literal apostrophe, anywhere
        '{...'  -> quoted span: '{', '}', '|' and '#' lose their meaning
                   until the next single apostrophe or EOF; '' inside the
                   span is one literal apostrophe
        it's    -> any other apostrophe is literal

    Examples:
        "it's" -> "it's"
        "'{'literal'}'" -> "{literal}"
        "don''t" -> "don't"

    Args:
        cursor: Current position in source
        in_plural: True inside plural/selectordinal bodies ('#' is special)

    Returns:
        ParseResult(text, new_cursor); text may be empty
    """
    chars: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current

        if ch in ("{", "}") or (in_plural and ch == "#"):
            break

        if ch != "'":
            chars.append(ch)
            cursor = cursor.advance()
            continue

        following = cursor.peek(1)
        if following == "'":
            chars.append("'")
            cursor = cursor.advance(2)
        elif _opens_quote(following, in_plural=in_plural):
            cursor = cursor.advance()
            while not cursor.is_eof:
                if cursor.current == "'":
                    if cursor.peek(1) == "'":
                        chars.append("'")
                        cursor = cursor.advance(2)
                        continue
                    cursor = cursor.advance()
                    break
                chars.append(cursor.current)
                cursor = cursor.advance()
        else:
            chars.append("'")
            cursor = cursor.advance()

    return ParseResult("".join(chars), cursor)


def parse_pattern(
    cursor: Cursor,
    context: ParseContext | None = None,
    *,
    in_plural: bool = False,
) -> ParseResult[Pattern] | ParseError:
    """Parse a message or clause body up to an unmatched '}' or EOF.

    Adjacent literal pieces are merged into one Literal node. The closing
    '}' is NOT consumed; callers decide whether it is legal.

    Args:
        cursor: Current position in source
        context: Parse context for nesting depth tracking
        in_plural: True inside plural/selectordinal bodies ('#' is a placeholder)

    Returns:
        ParseResult(Pattern, cursor at '}' or EOF) on success
        ParseError from the first malformed argument
    """
    if context is None:
        context = ParseContext()

    elements: list[PatternElement] = []
    text_buffer: list[str] = []

    def flush_text() -> None:
        if text_buffer:
            elements.append(Literal("".join(text_buffer)))
            text_buffer.clear()

    while not cursor.is_eof:
        ch = cursor.current

        if ch == "}":
            break

        if ch == "{":
            flush_text()
            argument = parse_argument(cursor, context)
            if isinstance(argument, ParseError):
                return argument
            elements.append(argument.value)
            cursor = argument.cursor
            continue

        if in_plural and ch == "#":
            flush_text()
            elements.append(NumberPlaceholder())
            cursor = cursor.advance()
            continue

        text = parse_literal(cursor, in_plural=in_plural)
        text_buffer.append(text.value)
        cursor = text.cursor

    flush_text()
    return ParseResult(Pattern(tuple(elements)), cursor)


# =============================================================================
# Argument Parsing
# =============================================================================


def _render_clause_map(clauses: list[Clause]) -> str:
    """Render clauses as {selector: [nodes]} for the missing-'other' message."""
    found: dict[int | str, list[PatternElement]] = {}
    for clause in clauses:
        key = clause.selector.value if ExactSelector.guard(clause.selector) else clause.selector.name
        found[key] = list(clause.body.elements)
    return repr(found)


def parse_clause(
    cursor: Cursor,
    context: ParseContext,
    *,
    in_plural: bool,
) -> ParseResult[Clause] | ParseError:
    """Parse one clause: selector ws '{' message '}'

    Examples:
        =0 {no items}
        other {{n} items}

    Args:
        cursor: Current position in source (at the selector)
        context: Parse context of the enclosing argument's bodies
        in_plural: True for plural/selectordinal clauses

    Returns:
        ParseResult(Clause, cursor after '}') on success
        ParseError otherwise
    """
    selector = parse_selector(cursor)
    if isinstance(selector, ParseError):
        return selector

    cursor = skip_whitespace(selector.cursor)
    if cursor.is_eof or cursor.current != "{":
        return ParseError("Expected '{' to open the clause body", cursor, expected=("{",))

    body = parse_pattern(cursor.advance(), context, in_plural=in_plural)
    if isinstance(body, ParseError):
        return body

    cursor = body.cursor
    if cursor.is_eof:
        return ParseError(
            "Expected '}' to close the clause body",
            cursor,
            expected=("}",),
            code=DiagnosticCode.UNEXPECTED_EOF,
        )

    elements = trim_layout(list(body.value.elements))
    return ParseResult(Clause(selector.value, Pattern(tuple(elements))), cursor.advance())


def parse_clauses(
    cursor: Cursor,
    context: ParseContext,
    *,
    in_plural: bool,
) -> ParseResult[tuple[Clause, ...]] | ParseError:
    """Parse one or more clauses up to the argument's closing '}'.

    Duplicate selectors are rejected at the duplicate's position.

    Args:
        cursor: Current position in source (first selector)
        context: Parse context of the enclosing argument's bodies
        in_plural: True for plural/selectordinal clauses

    Returns:
        ParseResult(clauses, cursor at the closing '}' or EOF) on success
        ParseError otherwise
    """
    clauses: list[Clause] = []
    seen: set[ExactSelector | KeywordSelector] = set()

    cursor = skip_whitespace(cursor)
    while not cursor.is_eof and cursor.current != "}":
        selector_cursor = cursor
        clause = parse_clause(cursor, context, in_plural=in_plural)
        if isinstance(clause, ParseError):
            return clause

        if clause.value.selector in seen:
            return ParseError(
                ErrorTemplate.duplicate_selector(str(clause.value.selector)),
                selector_cursor,
                code=DiagnosticCode.DUPLICATE_SELECTOR,
            )
        seen.add(clause.value.selector)
        clauses.append(clause.value)
        cursor = skip_whitespace(clause.cursor)

    if not clauses:
        return ParseError("Expected clause selector", cursor, expected=("=", "a-z"))

    return ParseResult(tuple(clauses), cursor)


def _parse_clause_argument(
    cursor: Cursor,
    start_cursor: Cursor,
    context: ParseContext,
    arg: ArgName,
    kind: FormatKind,
) -> ParseResult[Argument] | ParseError:
    """Parse the style of a plural, selectordinal or select argument.

    Args:
        cursor: Position after the kind keyword and whitespace
        start_cursor: Position of the argument's opening '{'
        context: Parse context of the argument
        arg: Parsed argument name
        kind: PLURAL, SELECTORDINAL or SELECT

    Returns:
        ParseResult(argument node, cursor after '}') on success
        ParseError otherwise
    """
    if cursor.is_eof or cursor.current != ",":
        return ParseError(f"Expected ',' after '{kind}'", cursor, expected=(",",))
    cursor = skip_whitespace(cursor.advance())

    in_plural = kind is not FormatKind.SELECT
    offset = 0
    if in_plural and cursor.slice_ahead(len(_OFFSET_KEYWORD)) == _OFFSET_KEYWORD:
        number = parse_integer(skip_whitespace(cursor.advance(len(_OFFSET_KEYWORD))))
        if isinstance(number, ParseError):
            return ParseError("Expected integer offset", number.cursor, expected=("0-9",))
        offset = number.value
        cursor = number.cursor

    clauses = parse_clauses(cursor, context.enter_argument(), in_plural=in_plural)
    if isinstance(clauses, ParseError):
        return clauses

    cursor = clauses.cursor
    if cursor.is_eof:
        return ParseError(
            f"Expected '}}' to close the '{kind}' argument",
            cursor,
            expected=("}",),
            code=DiagnosticCode.UNEXPECTED_EOF,
        )

    if not any(KeywordSelector.guard(c.selector) and c.selector.is_other for c in clauses.value):
        return ParseError(
            ErrorTemplate.missing_other_clause(_render_clause_map(list(clauses.value))),
            start_cursor,
            code=DiagnosticCode.MISSING_OTHER_CLAUSE,
        )

    node: Argument
    if kind is FormatKind.SELECT:
        node = SelectArgument(arg=arg, clauses=clauses.value)
    else:
        plural_type = PluralType.ORDINAL if kind is FormatKind.SELECTORDINAL else PluralType.CARDINAL
        node = PluralArgument(arg=arg, plural_type=plural_type, offset=offset, clauses=clauses.value)

    return ParseResult(node, cursor.advance())


def _parse_plain_style(cursor: Cursor) -> ParseResult[str] | ParseError:
    """Parse a plain style: raw text up to the closing '}', stripped."""
    start_cursor = cursor
    while not cursor.is_eof and cursor.current not in ("{", "}"):
        cursor = cursor.advance()

    if cursor.is_eof:
        return ParseError(
            "Expected '}' to close the argument",
            cursor,
            expected=("}",),
            code=DiagnosticCode.UNEXPECTED_EOF,
        )
    if cursor.current == "{":
        return ParseError("Unexpected '{' in argument style", cursor, expected=("}",))

    style = start_cursor.slice_to(cursor.pos).strip()
    if not style:
        return ParseError("Expected argument style", start_cursor.skip_whitespace())

    return ParseResult(style, cursor)


def parse_argument(
    cursor: Cursor,
    context: ParseContext | None = None,
) -> ParseResult[Argument] | ParseError:
    """Parse argument: '{' ws name ws (',' ws kind ws (',' argStyle)?)? '}'

    Examples:
        {name} -> ArgRef(NamedArg("name"))
        {0, number, percent} -> FormattedArg(PositionalArg(0), NUMBER, "percent")
        {n, plural, one {#} other {#}} -> PluralArgument(...)

    Args:
        cursor: Current position in source (at '{')
        context: Parse context for nesting depth tracking

    Returns:
        ParseResult(argument node, cursor after '}') on success
        ParseError otherwise
    """
    if context is None:
        context = ParseContext()

    if context.is_depth_exceeded():
        return ParseError(
            f"Maximum nesting depth ({context.max_nesting_depth}) exceeded",
            cursor,
            code=DiagnosticCode.PARSE_NESTING_DEPTH_EXCEEDED,
        )

    start_cursor = cursor
    cursor = skip_whitespace(cursor.advance())

    name = parse_argument_name(cursor)
    if isinstance(name, ParseError):
        return name
    arg = name.value
    cursor = skip_whitespace(name.cursor)

    if cursor.is_eof:
        return ParseError(
            "Expected ',' or '}' after argument name",
            cursor,
            expected=(",", "}"),
            code=DiagnosticCode.UNEXPECTED_EOF,
        )
    if cursor.current == "}":
        return ParseResult(ArgRef(arg), cursor.advance())
    if cursor.current != ",":
        return ParseError("Expected ',' or '}' after argument name", cursor, expected=(",", "}"))

    cursor = skip_whitespace(cursor.advance())
    kind_cursor = cursor
    kind_token = parse_identifier(cursor)
    if isinstance(kind_token, ParseError):
        return ParseError("Expected argument type", cursor, expected=tuple(FormatKind))
    try:
        kind = FormatKind(kind_token.value)
    except ValueError:
        return ParseError(
            f"Unknown argument type '{kind_token.value}'",
            kind_cursor,
            expected=tuple(FormatKind),
            code=DiagnosticCode.UNKNOWN_ARGUMENT_TYPE,
        )
    cursor = skip_whitespace(kind_token.cursor)

    if kind.takes_clauses:
        return _parse_clause_argument(cursor, start_cursor, context, arg, kind)

    if cursor.is_eof:
        return ParseError(
            "Expected ',' or '}' after argument type",
            cursor,
            expected=(",", "}"),
            code=DiagnosticCode.UNEXPECTED_EOF,
        )
    if cursor.current == "}":
        return ParseResult(FormattedArg(arg, kind), cursor.advance())
    if cursor.current != ",":
        return ParseError("Expected ',' or '}' after argument type", cursor, expected=(",", "}"))

    style = _parse_plain_style(cursor.advance())
    if isinstance(style, ParseError):
        return style
    return ParseResult(FormattedArg(arg, kind, style.value), style.cursor.advance())
