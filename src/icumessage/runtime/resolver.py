"""Message resolver - evaluates message trees to text fragments.

Resolves patterns by walking the tree, substituting bound arguments and
selecting plural/select clauses.
Python 3.13+. Indirect dependency: Babel (via plural_rules and formatters).

Thread Safety:
    Resolution state (the depth guard) is created per resolve() call and
    passed explicitly, making the resolver fully reentrant. Trees are
    immutable and never modified during evaluation.

Error Handling:
    Unlike a best-effort renderer, every error aborts the whole call and
    propagates unchanged. No partial output is ever returned.
"""

import math
from collections.abc import Sequence
from decimal import Decimal

from icumessage.constants import MAX_DEPTH
from icumessage.core.depth_guard import DepthGuard
from icumessage.diagnostics import (
    ErrorTemplate,
    MessageError,
    MessageFormatError,
    MessageTypeError,
)
from icumessage.enums import FormatKind
from icumessage.syntax.ast import (
    ArgName,
    ArgRef,
    Clause,
    ExactSelector,
    FormattedArg,
    KeywordSelector,
    Literal,
    NumberPlaceholder,
    Pattern,
    PluralArgument,
    PositionalArg,
    SelectArgument,
)

from .bindings import Bindings
from .formatters import FormatterRegistry, get_shared_registry
from .plural_rules import Pluralizer, create_pluralizer

__all__ = ["MessageResolver"]

type Number = int | float | Decimal


def _is_number(value: object) -> bool:
    # bool is a subclass of int but never counts as a number here
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _is_finite(value: Number) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    return True


def _text_of(value: object) -> str:
    """Plain text of a bound value, as used for select keyword matching."""
    if isinstance(value, str):
        return value
    # Check bool BEFORE anything numeric (bool is subclass of int in Python)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def _arg_key(arg: ArgName) -> int | str:
    return arg.index if PositionalArg.guard(arg) else arg.name


class MessageResolver:
    """Resolves message trees to ordered text fragments.

    Every top-level element of the pattern yields one fragment; a selected
    clause body is resolved and joined into the single fragment of its
    argument.

    Example:
        >>> resolver = MessageResolver("en")
        >>> pattern = parse_message("{n, plural, one {# file} other {# files}}")
        >>> resolver.resolve(pattern, as_bindings({"n": 3}))
        ('3 files',)
    """

    __slots__ = ("formatters", "locale", "max_depth", "pluralizer")

    def __init__(
        self,
        locale: str,
        *,
        formatters: FormatterRegistry | None = None,
        pluralizer: Pluralizer | None = None,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize resolver.

        Args:
            locale: Locale code passed to formatters and the default pluralizer
            formatters: Formatter registry (default: shared frozen registry)
            pluralizer: (number, plural_type) -> category (default: Babel CLDR rules)
            max_depth: Maximum clause nesting depth during evaluation
        """
        self.locale = locale
        self.formatters = formatters if formatters is not None else get_shared_registry()
        self.pluralizer = pluralizer if pluralizer is not None else create_pluralizer(locale)
        self.max_depth = max_depth

    def resolve(self, pattern: Pattern, bindings: Bindings) -> tuple[str, ...]:
        """Evaluate pattern against bindings.

        Args:
            pattern: Parsed message tree
            bindings: Binding set (see as_bindings)

        Returns:
            One text fragment per top-level element

        Raises:
            MessageBindingError: A referenced argument has no binding
            MessageTypeError: A plural/selectordinal value is not a finite number
            MessageFormatError: A formatter or the pluralizer is missing or failed
            DepthLimitExceededError: Clause nesting exceeds max_depth
        """
        guard = DepthGuard(max_depth=self.max_depth)
        return tuple(
            self._resolve_element(element, bindings, guard, None)
            for element in pattern.elements
        )

    def _resolve_pattern(
        self,
        pattern: Pattern,
        bindings: Bindings,
        guard: DepthGuard,
        number: Number | None,
    ) -> str:
        """Resolve a clause body to one joined string."""
        with guard:
            return "".join(
                self._resolve_element(element, bindings, guard, number)
                for element in pattern.elements
            )

    def _resolve_element(
        self,
        element: object,
        bindings: Bindings,
        guard: DepthGuard,
        number: Number | None,
    ) -> str:
        """Resolve one pattern element.

        Args:
            number: Offset value of the innermost enclosing plural argument,
                rendered for '#'; None outside plural clause bodies
        """
        match element:
            case Literal():
                return element.value
            case ArgRef():
                return self._format_value(bindings.resolve(element.arg))
            case FormattedArg():
                value = bindings.resolve(element.arg)
                return self.formatters.format(element.kind, value, self.locale, element.style)
            case NumberPlaceholder():
                if number is None:
                    # Hand-built trees only; the parser never emits '#' here
                    return "#"
                return self.formatters.format(FormatKind.NUMBER, number, self.locale, None)
            case PluralArgument():
                return self._resolve_plural(element, bindings, guard)
            case SelectArgument():
                return self._resolve_select(element, bindings, guard)
            case _:
                raise MessageError(ErrorTemplate.unknown_node(type(element).__name__))

    def _format_value(self, value: object) -> str:
        """Format a bare {arg} substitution.

        - str: returned as-is
        - bool: "true"/"false"
        - int/float/Decimal: locale number formatting (default style)
        - None: empty string
        - anything else: str()
        """
        if _is_number(value):
            return self.formatters.format(FormatKind.NUMBER, value, self.locale, None)
        return _text_of(value)

    def _resolve_plural(
        self, arg: PluralArgument, bindings: Bindings, guard: DepthGuard
    ) -> str:
        """Resolve plural or selectordinal argument.

        Matching priority:
            1. Exact '=N' clause equal to the bound value (before offset)
            2. Clause named after the CLDR category of value - offset
            3. 'other'
        """
        value = bindings.resolve(arg.arg)
        if not _is_number(value):
            key = _arg_key(arg.arg)
            raise MessageTypeError(
                ErrorTemplate.plural_value_not_numeric(key, value, arg.kind),
                argument=key,
                value=value,
            )
        if not _is_finite(value):  # type: ignore[arg-type]
            key = _arg_key(arg.arg)
            raise MessageTypeError(
                ErrorTemplate.plural_value_not_finite(key, value, arg.kind),
                argument=key,
                value=value,
            )
        offset_value: Number = value - arg.offset  # type: ignore[operator]

        clause = self._find_exact_clause(arg.clauses, value)  # type: ignore[arg-type]
        if clause is None:
            category = self._select_category(arg, offset_value)
            clause = self._find_keyword_clause(arg.clauses, category) or arg.other

        return self._resolve_pattern(clause.body, bindings, guard, offset_value)

    def _select_category(self, arg: PluralArgument, number: Number) -> str:
        # Babel raises OverflowError or ValueError for numbers it cannot
        # categorize; other exceptions propagate as-is.
        kind = str(arg.kind)
        try:
            return self.pluralizer(number, arg.plural_type)
        except (TypeError, ValueError, ArithmeticError) as e:
            diagnostic = ErrorTemplate.formatting_failed(kind, number, str(e))
            raise MessageFormatError(diagnostic, kind=kind, value=number) from e

    def _resolve_select(
        self, arg: SelectArgument, bindings: Bindings, guard: DepthGuard
    ) -> str:
        """Resolve select argument.

        Matching priority:
            1. Exact '=N' clause whose text equals the value's text
            2. Keyword clause equal to the value's text
            3. 'other'

        Select bodies have no '#' number, even inside a plural argument.
        """
        text = _text_of(bindings.resolve(arg.arg))
        clause = next(
            (
                c
                for c in arg.clauses
                if ExactSelector.guard(c.selector) and str(c.selector.value) == text
            ),
            None,
        )
        if clause is None:
            clause = self._find_keyword_clause(arg.clauses, text) or arg.other
        return self._resolve_pattern(clause.body, bindings, guard, None)

    @staticmethod
    def _find_exact_clause(clauses: Sequence[Clause], value: Number) -> Clause | None:
        for clause in clauses:
            if ExactSelector.guard(clause.selector) and clause.selector.value == value:
                return clause
        return None

    @staticmethod
    def _find_keyword_clause(clauses: Sequence[Clause], name: str) -> Clause | None:
        for clause in clauses:
            if KeywordSelector.guard(clause.selector) and clause.selector.name == name:
                return clause
        return None
