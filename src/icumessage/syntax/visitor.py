"""Visitor pattern for AST traversal.

Enables tools to traverse message trees without modifying node classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name (snake_case).
See: https://docs.python.org/3/library/ast.html#ast.NodeVisitor

Traversal Order:
    generic_visit() visits dataclass fields in declaration order, so an
    argument's name is visited before its clauses, and clauses in declared
    order (depth-first, pre-order).

Python 3.13+.
"""

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import Field, fields
from typing import ClassVar

from icumessage.constants import MAX_DEPTH
from icumessage.core.depth_guard import DepthGuard

from .ast import ASTNode, PluralArgument, SelectArgument

# Nodes that open a nesting level; depth is the argument nesting depth,
# the same measure the parser limits.
_NESTING_NODES: tuple[type[ASTNode], ...] = (PluralArgument, SelectArgument)

__all__ = ["ASTVisitor"]


class ASTVisitor[T = ASTNode]:
    """Base visitor for traversing message trees.

    Follows stdlib ast.NodeVisitor convention: generic_visit() automatically
    traverses all child nodes. Override visit_NodeType methods to add custom
    behavior.

    Uses class-level dispatch table for performance:
    - Dispatch table built once per class definition via __init_subclass__
    - Falls back to generic_visit for node types without a visit_ method

    Example:
        >>> class CountArgumentsVisitor(ASTVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_NamedArg(self, node: NamedArg) -> ASTNode:
        ...         self.count += 1
        ...         return self.generic_visit(node)
        ...
        >>> visitor = CountArgumentsVisitor()
        >>> visitor.visit(parse_message("{a} and {b}"))
        >>> visitor.count
        2
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    # Class-level dispatch table (method names only, not bound methods)
    _class_visit_methods: ClassVar[dict[str, str]] = {}

    # Class-level cache for dataclass fields per node type
    _fields_cache: ClassVar[dict[type[ASTNode], tuple[Field[object], ...]]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_") and name != "visit":
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum traversal depth (default: MAX_DEPTH from constants).
        """
        effective_max_depth = max_depth if max_depth is not None else MAX_DEPTH
        self._depth_guard = DepthGuard(max_depth=effective_max_depth)
        self._instance_dispatch_cache: dict[type[ASTNode], Callable[[ASTNode], T]] = {}

    def visit(self, node: ASTNode) -> T:
        """Visit a node (dispatcher with class-level + instance-level caching).

        Args:
            node: AST node to visit

        Returns:
            Result of visiting the node
        """
        node_type = type(node)

        if node_type in self._instance_dispatch_cache:
            return self._instance_dispatch_cache[node_type](node)

        node_type_name = node_type.__name__
        if node_type_name in self._class_visit_methods:
            method = getattr(self, self._class_visit_methods[node_type_name])
        else:
            method = self.generic_visit

        self._instance_dispatch_cache[node_type] = method
        return method(node)  # type: ignore[no-any-return]  # getattr returns Any

    def _get_node_fields(self, node_type: type[ASTNode]) -> tuple[Field[object], ...]:
        """Get cached dataclass fields for a node type."""
        if node_type not in ASTVisitor._fields_cache:
            ASTVisitor._fields_cache[node_type] = fields(node_type)
        return ASTVisitor._fields_cache[node_type]

    def generic_visit(self, node: ASTNode) -> T:
        """Default visitor (traverses children with depth protection).

        Depth Protection:
            Uses DepthGuard to prevent stack overflow from deeply nested
            trees built by hand. Only plural/select arguments count, so
            every tree the parser accepts under the same limit is visited.

        Args:
            node: AST node to visit

        Returns:
            The node itself (identity)

        Raises:
            DepthLimitExceededError: If argument nesting exceeds max_depth
        """
        guard: AbstractContextManager[object] = (
            self._depth_guard if isinstance(node, _NESTING_NODES) else nullcontext()
        )
        with guard:
            for field in self._get_node_fields(type(node)):
                value = getattr(node, field.name)

                # Skip None values and non-node fields (str, int, enums)
                if value is None or isinstance(value, (str, int, float, bool)):
                    continue

                if isinstance(value, tuple):
                    for item in value:
                        if hasattr(item, "__dataclass_fields__"):
                            self.visit(item)
                elif hasattr(value, "__dataclass_fields__"):
                    self.visit(value)

        return node  # type: ignore[return-value]  # T defaults to ASTNode
