"""Hypothesis strategies for icumessage property-based testing.

Strategies are organized by domain:

- templates: template text and parser-normal message trees
- values: bound values for plural and selectordinal arguments

Usage:
    from tests.strategies import patterns, plural_numbers
    from tests.strategies.templates import clause_lists
"""

from .templates import (
    arg_names,
    clause_lists,
    formatted_args,
    identifiers,
    patterns,
    plain_templates,
    plural_arguments,
    select_arguments,
)
from .values import non_finite_numbers, plural_numbers

__all__ = [
    "arg_names",
    "clause_lists",
    "formatted_args",
    "identifiers",
    "non_finite_numbers",
    "patterns",
    "plain_templates",
    "plural_arguments",
    "plural_numbers",
    "select_arguments",
]
