"""Binding validation for parsed templates.

Checks that every argument a template references has an entry in the
supplied bindings, without evaluating the template. Useful for failing
fast before formatting, or for linting translations against a known
argument set.

Python 3.13+.
"""

from collections.abc import Iterator

from icumessage.diagnostics import ErrorTemplate, MessageBindingError
from icumessage.runtime.bindings import Bindings, as_bindings
from icumessage.syntax.ast import ArgName, NamedArg, Pattern, PositionalArg
from icumessage.syntax.visitor import ASTVisitor

__all__ = [
    "ArgumentReferenceCollector",
    "extract_arguments",
    "iter_argument_references",
    "validate_bindings",
]


class ArgumentReferenceCollector(ASTVisitor):
    """Collect argument references in depth-first pre-order.

    A plural/select argument's own reference is collected before the
    references inside its clause bodies. Repeated references are kept.

    Memory Optimization:
        Uses __slots__ to restrict attribute creation and reduce memory overhead.
    """

    __slots__ = ("references",)

    def __init__(self) -> None:
        """Initialize reference collector."""
        super().__init__()
        self.references: list[ArgName] = []

    def visit_PositionalArg(self, node: PositionalArg) -> PositionalArg:
        """Collect positional reference."""
        self.references.append(node)
        return node

    def visit_NamedArg(self, node: NamedArg) -> NamedArg:
        """Collect named reference."""
        self.references.append(node)
        return node


def iter_argument_references(pattern: Pattern) -> Iterator[ArgName]:
    """Yield every argument reference of pattern, once per occurrence.

    Example:
        >>> pattern = parse_message("{n, plural, one {{who}} other {{who} x{n}}}")
        >>> [str(ref) for ref in iter_argument_references(pattern)]
        ['n', 'who', 'who', 'n']
    """
    collector = ArgumentReferenceCollector()
    collector.visit(pattern)
    yield from collector.references


def extract_arguments(pattern: Pattern) -> tuple[ArgName, ...]:
    """Unique argument references in first-seen order.

    Example:
        >>> [str(ref) for ref in extract_arguments(parse_message("{0} {name} {0}"))]
        ['0', 'name']
    """
    return tuple(dict.fromkeys(iter_argument_references(pattern)))


def validate_bindings(pattern: Pattern, bindings: object) -> None:
    """Check that every argument referenced by pattern is bound.

    Never evaluates the template: no formatter or plural rule runs.
    Bindings that cannot be inspected without side effects
    (DynamicBindings) are accepted as-is.

    Args:
        pattern: Parsed template
        bindings: Sequence, mapping, None or a binding set

    Raises:
        MessageBindingError: On the first reference without a binding,
            carrying the reference and the full binding set
    """
    binding_set: Bindings = as_bindings(bindings)
    if not binding_set.introspectable:
        return
    for ref in iter_argument_references(pattern):
        if not binding_set.contains(ref):
            key: int | str = ref.index if PositionalArg.guard(ref) else ref.name
            raise MessageBindingError(
                ErrorTemplate.argument_not_bound(key, binding_set),
                argument=key,
                bindings=binding_set,
            )
