"""Shared constants for icumessage.

This module provides centralized configuration constants used across
syntax and runtime packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for parsing/resolution/traversal
- Cache limits: Memory bounds for locale caching
- Input limits: DoS prevention via size constraints
- Selector keywords: Mandatory and well-known clause selectors

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Locale
    "DEFAULT_LOCALE",
    # Selector keywords
    "OTHER_SELECTOR",
    "PLURAL_CATEGORIES",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# One limit is shared by the parser (argument nesting), the resolver
# (clause body nesting) and the visitor (tree traversal). Legitimate
# templates rarely nest more than three or four arguments deep; a
# template nested 100 levels is malformed or adversarial.
#
# ============================================================================

# Unified maximum depth for recursion protection.
MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached LocaleContext instances.
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum template size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# LOCALE
# ============================================================================

# Locale used by the module-level convenience functions.
DEFAULT_LOCALE: str = "en"

# ============================================================================
# SELECTOR KEYWORDS
# ============================================================================

# Every plural, selectordinal and select argument must carry this clause.
OTHER_SELECTOR: str = "other"

# CLDR plural categories in canonical order.
PLURAL_CATEGORIES: tuple[str, ...] = ("zero", "one", "two", "few", "many", "other")
