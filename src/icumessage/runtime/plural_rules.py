"""CLDR plural rules implementation using Babel.

Provides cardinal (plural) and ordinal (selectordinal) category selection
for all locales using Babel's CLDR data.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from collections.abc import Callable
from decimal import Decimal

from babel.core import UnknownLocaleError

from icumessage.constants import OTHER_SELECTOR
from icumessage.enums import PluralType
from icumessage.locale_utils import get_babel_locale

__all__ = ["Pluralizer", "create_pluralizer", "select_plural_category"]

type Pluralizer = Callable[[int | float | Decimal, PluralType], str]
"""Plural service: (number, plural_type) -> category keyword; locale is bound."""


def select_plural_category(
    n: int | float | Decimal,
    locale: str,
    plural_type: PluralType = PluralType.CARDINAL,
) -> str:
    """Select CLDR plural category for number using Babel's CLDR data.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "lv_LV", "en_US", "ar-SA")
        plural_type: CARDINAL (plural) or ORDINAL (selectordinal) rules

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(0, "lv_LV")
        'zero'
        >>> select_plural_category(1, "en_US")
        'one'
        >>> select_plural_category(5, "ru_RU")
        'many'
        >>> select_plural_category(3, "en", PluralType.ORDINAL)
        'few'
        >>> select_plural_category(42, "ja_JP")
        'other'

    Architecture:
        Uses Babel's Locale.plural_form (cardinal) and Locale.ordinal_form
        (ordinal), which implement CLDR operands (n, i, v, w, f, t, e) for
        200+ locales with automatic fallback to language-level rules.

        Unknown or malformed locales select "other", the one category every
        plural argument is guaranteed to carry.

    Performance:
        Uses cached locale parsing via get_babel_locale() to avoid
        repeated Locale.parse() overhead in hot paths.
    """
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        return OTHER_SELECTOR

    if plural_type is PluralType.ORDINAL:
        rule = locale_obj.ordinal_form
    else:
        rule = locale_obj.plural_form

    return rule(n)


def create_pluralizer(locale: str) -> Pluralizer:
    """Bind a locale to the plural service.

    Args:
        locale: Locale code

    Returns:
        Callable (number, plural_type) -> category keyword

    Example:
        >>> pluralize = create_pluralizer("pl")
        >>> pluralize(5, PluralType.CARDINAL)
        'many'
    """

    def pluralize(n: int | float | Decimal, plural_type: PluralType) -> str:
        return select_plural_category(n, locale, plural_type)

    return pluralize
