"""Quickstart example for icumessage.

This example demonstrates parsing and formatting ICU message templates.

Note: Errors raise exceptions. In production, catch MessageError (or one
of its subclasses) and log/report the translation issue.
"""

from decimal import Decimal

from icumessage import (
    MessageError,
    MessageFormatter,
    create_default_registry,
    extract_arguments,
    parse_message,
    serialize_message,
)

# Example 1: Simple message
print("=" * 50)
print("Example 1: Positional and Named Arguments")
print("=" * 50)

formatter = MessageFormatter("en")

print(formatter.format("Hello, {0}!", ["World"]))
# Output: Hello, World!

print(formatter.format_list("{name} has {count} new messages", {"name": "Ann", "count": 3}))
# Output: ('Ann', ' has ', '3', ' new messages')

# Example 2: Plurals with offset and exact matches
print("\n" + "=" * 50)
print("Example 2: Plurals")
print("=" * 50)

party = (
    "{num_guests, plural, offset: 1 "
    "=0 {{host} does not give a party.} "
    "=1 {{host} invites {guest} to the party.} "
    "other {{host} invites {guest} and # other people to the party.}}"
)
for guests in (0, 1, 4):
    print(formatter.format(party, {"num_guests": guests, "host": "Kip", "guest": "Jim"}))
# Output: Kip does not give a party.
# Output: Kip invites Jim to the party.
# Output: Kip invites Jim and 3 other people to the party.

# Example 3: Locale-specific plural categories
print("\n" + "=" * 50)
print("Example 3: Latvian Plural Rules")
print("=" * 50)

lv = MessageFormatter("lv")
apples = "{n, plural, zero {# ābolu} one {# ābols} other {# āboli}}"
for n in (0, 1, 2, 21):
    print(lv.format(apples, {"n": n}))
# Output: 0 ābolu / 1 ābols / 2 āboli / 21 ābols

# Example 4: Ordinals, select and number styles
print("\n" + "=" * 50)
print("Example 4: selectordinal, select, number styles")
print("=" * 50)

print(formatter.format("{n, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}", {"n": 23}))
# Output: 23rd

print(formatter.format("{g, select, female {She} male {He} other {They}} replied", {"g": "x"}))
# Output: They replied

print(formatter.format("{rate, number, percent} of {total, number, #,##0.00}",
                       {"rate": 0.15, "total": Decimal("1234.5")}))
# Output: 15% of 1,234.50

# Example 5: Custom formatters
print("\n" + "=" * 50)
print("Example 5: Registering a spellout formatter")
print("=" * 50)

WORDS = {1: "one", 2: "two", 3: "three"}
registry = create_default_registry()
registry.register("spellout", lambda value, locale, style: WORDS.get(value, str(value)))
print(MessageFormatter("en", formatters=registry).format("{n, spellout} cats", {"n": 3}))
# Output: three cats

# Example 6: Inspecting templates
print("\n" + "=" * 50)
print("Example 6: Parsing, Serialization and Validation")
print("=" * 50)

pattern = parse_message("{n,plural,offset:1 =0{none}other{# left, {who}}}")
print(serialize_message(pattern))
# Output: {n, plural, offset: 1 =0 {none} other {# left, {who}}}
print([str(arg) for arg in extract_arguments(pattern)])
# Output: ['n', 'who']

try:
    formatter.format(pattern, {"n": 0}, validate=True)
except MessageError as e:
    print(e.format_error())
# Output: error[ARGUMENT_NOT_BOUND]: No argument binding was found for 'who' in {'n': 0}

try:
    formatter.format("{num, plural, =0 {it's zero}}", {"num": 0})
except MessageError as e:
    print(e)
# Output: 'plural', 'select' and 'selectordinal' arguments must have an 'other' clause. ...
