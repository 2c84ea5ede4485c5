"""Message runtime package.

Provides binding sets, plural rules, formatting services, the resolver,
and the MessageFormatter API. Depends on syntax package for parsing.

Python 3.13+.
"""

from .bindings import ArgumentBindings, Bindings, DynamicBindings, as_bindings
from .formatters import (
    Formatter,
    FormatterRegistry,
    create_default_registry,
    date_format,
    duration_format,
    get_shared_registry,
    number_format,
    time_format,
)
from .locale_context import LocaleContext
from .message_formatter import MessageFormatter
from .plural_rules import Pluralizer, create_pluralizer, select_plural_category
from .resolver import MessageResolver

__all__ = [
    "ArgumentBindings",
    "Bindings",
    "DynamicBindings",
    "Formatter",
    "FormatterRegistry",
    "LocaleContext",
    "MessageFormatter",
    "MessageResolver",
    "Pluralizer",
    "as_bindings",
    "create_default_registry",
    "create_pluralizer",
    "date_format",
    "duration_format",
    "get_shared_registry",
    "number_format",
    "select_plural_category",
    "time_format",
]
