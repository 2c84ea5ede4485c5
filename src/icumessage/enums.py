"""Enumerations for icumessage type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class FormatKind(StrEnum):
    """Argument type named after the first comma of an argument.

    StrEnum provides automatic string conversion: str(FormatKind.NUMBER) == "number"
    """

    NUMBER = "number"
    """Locale number: {price, number, percent}"""

    DATE = "date"
    """Locale date: {due, date, short}"""

    TIME = "time"
    """Locale time: {due, time, short}"""

    SPELLOUT = "spellout"
    """Number spelled out in words: {n, spellout}"""

    ORDINAL = "ordinal"
    """Ordinal number: {n, ordinal}"""

    DURATION = "duration"
    """Elapsed time: {elapsed, duration}"""

    PLURAL = "plural"
    """Cardinal plural sub-message: {n, plural, one {...} other {...}}"""

    SELECTORDINAL = "selectordinal"
    """Ordinal plural sub-message: {n, selectordinal, one {#st} other {#th}}"""

    SELECT = "select"
    """Keyword sub-message: {gender, select, female {...} other {...}}"""

    @property
    def takes_clauses(self) -> bool:
        """True for argument types whose style is a clause list."""
        return self in (FormatKind.PLURAL, FormatKind.SELECTORDINAL, FormatKind.SELECT)


class PluralType(StrEnum):
    """CLDR plural rule set used for category selection.

    StrEnum provides automatic string conversion: str(PluralType.CARDINAL) == "cardinal"
    """

    CARDINAL = "cardinal"
    """Counting rules: 1 item, 2 items"""

    ORDINAL = "ordinal"
    """Ranking rules: 1st, 2nd, 3rd"""


class ParseRule(StrEnum):
    """Grammar entry rule selectable when parsing.

    StrEnum provides automatic string conversion: str(ParseRule.MESSAGE) == "message"
    """

    MESSAGE = "message"
    """Full message grammar: literals and arguments"""

    PLURAL_MESSAGE = "plural_message"
    """Plural clause body grammar: '#' is a placeholder, an unmatched '}' ends the body"""


__all__ = [
    "FormatKind",
    "ParseRule",
    "PluralType",
]
