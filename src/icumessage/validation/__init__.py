"""Validation utilities for parsed templates.

Python 3.13+.
"""

from icumessage.validation.bindings import (
    ArgumentReferenceCollector,
    extract_arguments,
    iter_argument_references,
    validate_bindings,
)

__all__ = [
    "ArgumentReferenceCollector",
    "extract_arguments",
    "iter_argument_references",
    "validate_bindings",
]
