"""Message template AST (Abstract Syntax Tree) node definitions.

Immutable tree produced by the parser and consumed by the resolver,
validator, visitor and serializer. Includes type guards as static methods
(eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from icumessage.constants import OTHER_SELECTOR
from icumessage.enums import FormatKind, PluralType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Argument names
    "PositionalArg",
    "NamedArg",
    # Pattern structure
    "Pattern",
    "Literal",
    "NumberPlaceholder",
    # Arguments
    "ArgRef",
    "FormattedArg",
    "PluralArgument",
    "SelectArgument",
    # Clauses
    "Clause",
    "ExactSelector",
    "KeywordSelector",
    # Type aliases
    "ArgName",
    "Selector",
    "PatternElement",
    "Argument",
    "ASTNode",
]

# ============================================================================
# ARGUMENT NAMES
# ============================================================================


@dataclass(frozen=True, slots=True)
class PositionalArg:
    """Zero-based positional argument reference: {0}, {1, number}"""

    index: int

    def __post_init__(self) -> None:
        """Validate index is non-negative."""
        if self.index < 0:
            msg = f"PositionalArg index must be >= 0, got {self.index}"
            raise ValueError(msg)

    @staticmethod
    def guard(arg: object) -> TypeIs["PositionalArg"]:
        """Type guard for PositionalArg."""
        return isinstance(arg, PositionalArg)

    def __str__(self) -> str:
        return str(self.index)


@dataclass(frozen=True, slots=True)
class NamedArg:
    """Named argument reference: {name}, {count, plural, ...}

    Names start with a letter or underscore and continue with letters,
    digits, underscores or hyphens.
    """

    name: str

    @staticmethod
    def guard(arg: object) -> TypeIs["NamedArg"]:
        """Type guard for NamedArg."""
        return isinstance(arg, NamedArg)

    def __str__(self) -> str:
        return self.name


# ============================================================================
# PATTERN STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Pattern:
    """Ordered node sequence of a message or clause body.

    Example:
        "Hello {name}!" ->
        Pattern(elements=(
            Literal("Hello "),
            ArgRef(NamedArg("name")),
            Literal("!"),
        ))
    """

    elements: tuple["PatternElement", ...]

    @staticmethod
    def guard(node: object) -> TypeIs["Pattern"]:
        """Type guard for Pattern."""
        return isinstance(node, Pattern)


@dataclass(frozen=True, slots=True)
class Literal:
    """Verbatim text, emitted unchanged.

    Quoting has already been removed: "'{'" parses to Literal("{").
    """

    value: str

    @staticmethod
    def guard(elem: object) -> TypeIs["Literal"]:
        """Type guard for Literal."""
        return isinstance(elem, Literal)


@dataclass(frozen=True, slots=True)
class NumberPlaceholder:
    """The '#' placeholder inside a plural or selectordinal clause body.

    Renders the offset-adjusted plural value through the number formatter.
    Never produced in select bodies or at the top level of a message.
    """

    @staticmethod
    def guard(elem: object) -> TypeIs["NumberPlaceholder"]:
        """Type guard for NumberPlaceholder."""
        return isinstance(elem, NumberPlaceholder)


# ============================================================================
# ARGUMENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class ArgRef:
    """Bare substitution: {name} or {0}"""

    arg: "ArgName"

    @staticmethod
    def guard(elem: object) -> TypeIs["ArgRef"]:
        """Type guard for ArgRef."""
        return isinstance(elem, ArgRef)


@dataclass(frozen=True, slots=True)
class FormattedArg:
    """Argument delegated to a formatter: {rate, number, percent}

    Attributes:
        arg: Referenced argument
        kind: Simple argument type (number, date, time, spellout, ordinal, duration)
        style: Raw style text with surrounding whitespace stripped, or None
    """

    arg: "ArgName"
    kind: FormatKind
    style: str | None = None

    def __post_init__(self) -> None:
        """Reject clause-taking kinds (those have dedicated nodes)."""
        if self.kind.takes_clauses:
            msg = f"FormattedArg cannot carry '{self.kind}'; use PluralArgument or SelectArgument"
            raise ValueError(msg)

    @staticmethod
    def guard(elem: object) -> TypeIs["FormattedArg"]:
        """Type guard for FormattedArg."""
        return isinstance(elem, FormattedArg)


@dataclass(frozen=True, slots=True)
class ExactSelector:
    """Exact-value selector: =0, =12"""

    value: int

    @staticmethod
    def guard(selector: object) -> TypeIs["ExactSelector"]:
        """Type guard for ExactSelector."""
        return isinstance(selector, ExactSelector)

    def __str__(self) -> str:
        return f"={self.value}"


@dataclass(frozen=True, slots=True)
class KeywordSelector:
    """Keyword selector: a plural category (one, few, other) or a select keyword."""

    name: str

    @staticmethod
    def guard(selector: object) -> TypeIs["KeywordSelector"]:
        """Type guard for KeywordSelector."""
        return isinstance(selector, KeywordSelector)

    @property
    def is_other(self) -> bool:
        """True for the mandatory 'other' selector."""
        return self.name == OTHER_SELECTOR

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Clause:
    """One (selector, body) pair of a plural, selectordinal or select argument.

    Example:
        "=0 {no items}" ->
        Clause(ExactSelector(0), Pattern((Literal("no items"),)))
    """

    selector: "Selector"
    body: Pattern

    @staticmethod
    def guard(node: object) -> TypeIs["Clause"]:
        """Type guard for Clause."""
        return isinstance(node, Clause)


def _other_clause(clauses: tuple[Clause, ...]) -> Clause:
    for clause in clauses:
        if KeywordSelector.guard(clause.selector) and clause.selector.is_other:
            return clause
    msg = "Argument has no 'other' clause"
    raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PluralArgument:
    """Plural (cardinal) or selectordinal (ordinal) sub-message.

    Example:
        "{n, plural, offset: 1 =0 {none} other {# more}}" ->
        PluralArgument(
            arg=NamedArg("n"),
            plural_type=PluralType.CARDINAL,
            offset=1,
            clauses=(
                Clause(ExactSelector(0), Pattern((Literal("none"),))),
                Clause(KeywordSelector("other"),
                       Pattern((NumberPlaceholder(), Literal(" more")))),
            ),
        )

    Attributes:
        arg: Referenced argument (must be bound to a number)
        plural_type: CARDINAL for plural, ORDINAL for selectordinal
        offset: Subtracted from the value before category selection and '#'
        clauses: Clauses in declared order
    """

    arg: "ArgName"
    plural_type: PluralType
    offset: int
    clauses: tuple[Clause, ...]

    def __post_init__(self) -> None:
        """Validate offset is non-negative."""
        if self.offset < 0:
            msg = f"PluralArgument offset must be >= 0, got {self.offset}"
            raise ValueError(msg)

    @staticmethod
    def guard(elem: object) -> TypeIs["PluralArgument"]:
        """Type guard for PluralArgument."""
        return isinstance(elem, PluralArgument)

    @property
    def kind(self) -> FormatKind:
        """Argument type as written in the template."""
        if self.plural_type is PluralType.ORDINAL:
            return FormatKind.SELECTORDINAL
        return FormatKind.PLURAL

    @property
    def other(self) -> Clause:
        """The mandatory 'other' clause."""
        return _other_clause(self.clauses)


@dataclass(frozen=True, slots=True)
class SelectArgument:
    """Keyword sub-message: {gender, select, female {she} other {they}}"""

    arg: "ArgName"
    clauses: tuple[Clause, ...]

    @staticmethod
    def guard(elem: object) -> TypeIs["SelectArgument"]:
        """Type guard for SelectArgument."""
        return isinstance(elem, SelectArgument)

    @property
    def kind(self) -> FormatKind:
        """Argument type as written in the template."""
        return FormatKind.SELECT

    @property
    def other(self) -> Clause:
        """The mandatory 'other' clause."""
        return _other_clause(self.clauses)


# ============================================================================
# TYPE ALIASES (using Python 3.13 type keyword)
# ============================================================================

type ArgName = PositionalArg | NamedArg
type Selector = ExactSelector | KeywordSelector
type Argument = ArgRef | FormattedArg | PluralArgument | SelectArgument
type PatternElement = Literal | NumberPlaceholder | Argument

type ASTNode = (
    Pattern
    | Literal
    | NumberPlaceholder
    | ArgRef
    | FormattedArg
    | PluralArgument
    | SelectArgument
    | Clause
    | ExactSelector
    | KeywordSelector
    | PositionalArg
    | NamedArg
)
