"""Template and tree strategies.

Generated trees are in parser normal form: adjacent literals merged, no
empty literals, '#' only in plural/selectordinal bodies, every clause
argument carrying a unique set of selectors including 'other'. Literal
text never contains line breaks, so clause-body layout trimming never
applies.
"""

from __future__ import annotations

import string

from hypothesis import strategies as st
from hypothesis.strategies import composite

from icumessage.enums import FormatKind, PluralType
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
    PatternElement,
    PluralArgument,
    PositionalArg,
    SelectArgument,
)

# Literal alphabet includes every character with a quoting meaning
LITERAL_ALPHABET = string.ascii_letters + string.digits + " .,!?-'{}#|"

SIMPLE_KINDS = [kind for kind in FormatKind if not kind.takes_clauses]

STYLES = ["percent", "integer", "short", "long", "#,##0.00", "yyyy-MM-dd"]

PLURAL_KEYWORDS = ["zero", "one", "two", "few", "many"]

SELECT_KEYWORDS = ["female", "male", "yes", "no", "x-1", "_a"]


@composite
def identifiers(draw: st.DrawFn) -> str:
    """Generate valid argument identifiers.

    Identifiers start with a letter or underscore and continue with
    letters, digits, hyphens and underscores.
    """
    first = draw(st.sampled_from(string.ascii_lowercase + "_"))
    rest = draw(st.text(alphabet=string.ascii_lowercase + string.digits + "-_", max_size=10))
    return first + rest


@composite
def arg_names(draw: st.DrawFn) -> ArgName:
    """Generate positional or named argument references."""
    if draw(st.booleans()):
        return PositionalArg(draw(st.integers(min_value=0, max_value=9)))
    return NamedArg(draw(identifiers()))


literal_values = st.text(alphabet=LITERAL_ALPHABET, min_size=1, max_size=12)


@composite
def formatted_args(draw: st.DrawFn) -> FormattedArg:
    """Generate {arg, kind} and {arg, kind, style} arguments."""
    style = draw(st.one_of(st.none(), st.sampled_from(STYLES)))
    return FormattedArg(draw(arg_names()), draw(st.sampled_from(SIMPLE_KINDS)), style)


@composite
def clause_lists(
    draw: st.DrawFn, keywords: list[str], *, in_plural: bool, depth: int
) -> tuple[Clause, ...]:
    """Generate clauses with unique selectors, always including 'other'."""
    chosen_keywords = draw(st.lists(st.sampled_from(keywords), unique=True, max_size=3))
    exact_values = draw(
        st.lists(st.integers(min_value=0, max_value=5), unique=True, max_size=2)
    )
    selectors: list[ExactSelector | KeywordSelector] = [
        *(ExactSelector(v) for v in exact_values),
        *(KeywordSelector(k) for k in chosen_keywords),
        KeywordSelector("other"),
    ]
    ordered = draw(st.permutations(selectors))
    return tuple(
        Clause(selector, draw(patterns(in_plural=in_plural, depth=depth - 1)))
        for selector in ordered
    )


@composite
def plural_arguments(draw: st.DrawFn, depth: int = 1) -> PluralArgument:
    """Generate plural and selectordinal arguments."""
    return PluralArgument(
        arg=draw(arg_names()),
        plural_type=draw(st.sampled_from(list(PluralType))),
        offset=draw(st.integers(min_value=0, max_value=3)),
        clauses=draw(clause_lists(PLURAL_KEYWORDS, in_plural=True, depth=depth)),
    )


@composite
def select_arguments(draw: st.DrawFn, depth: int = 1) -> SelectArgument:
    """Generate select arguments."""
    return SelectArgument(
        arg=draw(arg_names()),
        clauses=draw(clause_lists(SELECT_KEYWORDS, in_plural=False, depth=depth)),
    )


@composite
def patterns(draw: st.DrawFn, *, in_plural: bool = False, depth: int = 2) -> Pattern:
    """Generate patterns in parser normal form.

    Args:
        in_plural: Generate a plural/selectordinal body ('#' allowed)
        depth: Remaining clause-argument nesting levels
    """
    choices = ["literal", "ref", "formatted"]
    if in_plural:
        choices.append("hash")
    if depth > 0:
        choices.extend(["plural", "select"])

    elements: list[PatternElement] = []
    for _ in range(draw(st.integers(min_value=0, max_value=4))):
        match draw(st.sampled_from(choices)):
            case "literal":
                text = draw(literal_values)
                if elements and Literal.guard(elements[-1]):
                    elements[-1] = Literal(elements[-1].value + text)
                else:
                    elements.append(Literal(text))
            case "ref":
                elements.append(ArgRef(draw(arg_names())))
            case "formatted":
                elements.append(draw(formatted_args()))
            case "hash":
                elements.append(NumberPlaceholder())
            case "plural":
                elements.append(draw(plural_arguments(depth=depth)))
            case "select":
                elements.append(draw(select_arguments(depth=depth)))
    return Pattern(tuple(elements))


@composite
def plain_templates(draw: st.DrawFn) -> str:
    """Generate template text made only of literals and simple arguments."""
    parts: list[str] = []
    for _ in range(draw(st.integers(min_value=0, max_value=5))):
        if draw(st.booleans()):
            parts.append(draw(st.text(alphabet=string.ascii_letters + " .,!", max_size=8)))
        else:
            parts.append("{" + str(draw(arg_names())) + "}")
    return "".join(parts)
