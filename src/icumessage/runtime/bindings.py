"""Argument binding sets.

Bindings supply the runtime values for a template's argument references.
Positional references ({0}) and named references ({name}) are resolved
against one binding set.

Two implementations:
    - ArgumentBindings: introspectable positional sequence + named mapping
    - DynamicBindings: opaque lookup callable (e.g. backed by a database)

Python 3.13+.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from icumessage.diagnostics import ErrorTemplate, MessageBindingError
from icumessage.syntax.ast import ArgName, PositionalArg

__all__ = [
    "ArgumentBindings",
    "Bindings",
    "DynamicBindings",
    "as_bindings",
]

_MISSING = object()


@runtime_checkable
class Bindings(Protocol):
    """Binding set consulted by the resolver and the validator."""

    @property
    def introspectable(self) -> bool:
        """True if contains() answers without side effects."""
        ...

    def resolve(self, arg: ArgName) -> object:
        """Return the bound value or raise MessageBindingError."""
        ...

    def contains(self, arg: ArgName) -> bool:
        """Check whether arg has a binding."""
        ...


def _not_bound(argument: int | str, bindings: object) -> MessageBindingError:
    return MessageBindingError(
        ErrorTemplate.argument_not_bound(argument, bindings),
        argument=argument,
        bindings=bindings,
    )


@dataclass(frozen=True, slots=True)
class ArgumentBindings:
    """Positional values plus named values.

    Positional lookups consult the named mapping first (under the integer
    key ``i`` or the string key ``"i"``), so a merged view lets named
    entries override positional ones.

    Examples:
        >>> bindings = ArgumentBindings(("Ann",), {"count": 3})
        >>> bindings.resolve_positional(0)
        'Ann'
        >>> bindings.resolve_named("count")
        3
        >>> ArgumentBindings(("Ann",), {0: "Bob"}).resolve_positional(0)
        'Bob'
    """

    positional: tuple[object, ...] = ()
    named: Mapping[int | str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Snapshot caller containers so later mutation cannot leak in
        object.__setattr__(self, "positional", tuple(self.positional))
        object.__setattr__(self, "named", MappingProxyType(dict(self.named)))

    @property
    def introspectable(self) -> bool:
        return True

    def _lookup_positional(self, index: int) -> object:
        if index in self.named:
            return self.named[index]
        if str(index) in self.named:
            return self.named[str(index)]
        if 0 <= index < len(self.positional):
            return self.positional[index]
        return _MISSING

    def has_positional(self, index: int) -> bool:
        return self._lookup_positional(index) is not _MISSING

    def has_named(self, name: str) -> bool:
        return name in self.named

    def resolve_positional(self, index: int) -> object:
        """Value bound to a zero-based index.

        Raises:
            MessageBindingError: If nothing is bound to index
        """
        value = self._lookup_positional(index)
        if value is _MISSING:
            raise _not_bound(index, self)
        return value

    def resolve_named(self, name: str) -> object:
        """Value bound to a name.

        Raises:
            MessageBindingError: If nothing is bound to name
        """
        if name not in self.named:
            raise _not_bound(name, self)
        return self.named[name]

    def resolve(self, arg: ArgName) -> object:
        if PositionalArg.guard(arg):
            return self.resolve_positional(arg.index)
        return self.resolve_named(arg.name)

    def contains(self, arg: ArgName) -> bool:
        if PositionalArg.guard(arg):
            return self.has_positional(arg.index)
        return self.has_named(arg.name)

    def __repr__(self) -> str:
        """Render the binding set the way the caller supplied it.

        Example:
            >>> ArgumentBindings(named={"name": "Ann"})
            {'name': 'Ann'}
        """
        if not self.named:
            return repr(list(self.positional))
        if not self.positional:
            return repr(dict(self.named))
        return f"{list(self.positional)!r} + {dict(self.named)!r}"


@dataclass(frozen=True, slots=True)
class DynamicBindings:
    """Bindings backed by an opaque lookup callable.

    The callable receives the positional index (int) or the name (str) and
    returns the value, raising LookupError (KeyError, IndexError) when
    nothing is bound. Because a lookup may be expensive or have side
    effects, these bindings are not introspectable and the binding
    validator accepts them without checking.

    Example:
        >>> env = {"user": "Ann"}
        >>> DynamicBindings(env.__getitem__).resolve(NamedArg("user"))
        'Ann'
    """

    lookup: Callable[[int | str], object]

    @property
    def introspectable(self) -> bool:
        return False

    def resolve(self, arg: ArgName) -> object:
        key: int | str = arg.index if PositionalArg.guard(arg) else arg.name
        try:
            return self.lookup(key)
        except LookupError as e:
            raise _not_bound(key, self) from e

    def contains(self, arg: ArgName) -> bool:
        try:
            self.resolve(arg)
        except MessageBindingError:
            return False
        return True

    def __repr__(self) -> str:
        return f"DynamicBindings({self.lookup!r})"


def as_bindings(value: object) -> Bindings:
    """Coerce caller-supplied bindings into a binding set.

    Accepts:
        - None: empty bindings
        - ArgumentBindings / DynamicBindings (or any Bindings): returned as-is
        - Mapping: named bindings (int keys also serve positional references)
        - Sequence other than str/bytes: positional bindings

    Raises:
        TypeError: For any other value

    Examples:
        >>> as_bindings(["Ann", 3]).resolve_positional(1)
        3
        >>> as_bindings({"name": "Ann"}).has_named("name")
        True
    """
    match value:
        case None:
            return ArgumentBindings()
        case ArgumentBindings() | DynamicBindings():
            return value
        case Mapping():
            return ArgumentBindings(named=value)
        case str() | bytes():
            pass
        case Sequence():
            return ArgumentBindings(positional=tuple(value))
        case Bindings():
            return value
    msg = f"Bindings must be a sequence, a mapping or None, got {type(value).__name__}"
    raise TypeError(msg)
