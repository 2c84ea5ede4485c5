"""Tests for runtime/message_formatter.py - the main formatting API."""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest
from hypothesis import given

from icumessage.constants import DEFAULT_LOCALE
from icumessage.diagnostics import (
    MessageBindingError,
    MessageParseError,
    MessageTypeError,
)
from icumessage.runtime import (
    ArgumentBindings,
    DynamicBindings,
    MessageFormatter,
    create_default_registry,
    get_shared_registry,
)
from icumessage.syntax import parse

from tests.strategies import plain_templates


class TestFormatterInit:
    def test_default_locale(self) -> None:
        assert MessageFormatter().locale == DEFAULT_LOCALE

    def test_locale_is_positional_only(self) -> None:
        with pytest.raises(TypeError):
            MessageFormatter(locale="en")  # type: ignore[misc]

    def test_empty_locale_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            MessageFormatter("")

    def test_shared_registry_by_default(self) -> None:
        assert MessageFormatter("en").formatters is get_shared_registry()

    def test_custom_registry_kept(self) -> None:
        registry = create_default_registry()
        assert MessageFormatter("en", formatters=registry).formatters is registry

    def test_limits(self) -> None:
        formatter = MessageFormatter("en", max_source_size=10, max_nesting_depth=3)
        assert formatter.max_source_size == 10
        assert formatter.max_nesting_depth == 3

    def test_repr(self) -> None:
        assert repr(MessageFormatter("de")) == "MessageFormatter(locale='de', formatters=4)"

    def test_init_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="icumessage.runtime.message_formatter"):
            MessageFormatter("lv")
        assert "MessageFormatter initialized for locale: lv" in caplog.text

    def test_for_system_locale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "icumessage.runtime.message_formatter.get_system_locale",
            lambda *, raise_on_failure: "de_DE",
        )
        assert MessageFormatter.for_system_locale().locale == "de_DE"


class TestFormatList:
    """Scenario coverage for format_list()."""

    def test_positional_fragments(self, en_formatter: MessageFormatter) -> None:
        result = en_formatter.format_list("{0} {1} à {2}", ["You", "sont allées", "three"])
        assert result == ("You", " ", "sont allées", " à ", "three")

    def test_named_fragments(self, en_formatter: MessageFormatter) -> None:
        result = en_formatter.format_list("{name} has {n} messages", {"name": "Ann", "n": 5})
        assert result == ("Ann", " has ", "5", " messages")

    def test_percent(self, en_formatter: MessageFormatter) -> None:
        assert en_formatter.format_list("{0, number, percent}", [0.15]) == ("15%",)

    def test_select_other(self, en_formatter: MessageFormatter) -> None:
        template = "{taxable_area, select, yes {An additional tax will be applied.} other {No taxes apply.}}"
        assert en_formatter.format_list(template, {"taxable_area": "no"}) == ("No taxes apply.",)
        assert en_formatter.format_list(template, {"taxable_area": "yes"}) == (
            "An additional tax will be applied.",
        )

    def test_explicit_zero(self, en_formatter: MessageFormatter) -> None:
        template = "{num, plural, =0 {it's zero} other {it's {num}}}"
        assert en_formatter.format_list(template, {"num": 0}) == ("it's zero",)
        assert en_formatter.format_list(template, {"num": 7}) == ("it's 7",)

    def test_decimal_plural(self, en_formatter: MessageFormatter) -> None:
        template = "{num, plural, =0 {zero} =2 {two} other {#}}"
        assert en_formatter.format_list(template, {"num": Decimal(2)}) == ("two",)
        assert en_formatter.format_list(template, {"num": Decimal(0)}) == ("zero",)
        assert en_formatter.format_list(template, {"num": Decimal("3.5")}) == ("3.5",)

    def test_selectordinal(self, en_formatter: MessageFormatter) -> None:
        template = "{n, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}"
        assert en_formatter.format_list(template, {"n": 3}) == ("3rd",)

    def test_missing_other_raises_parse_error(self, en_formatter: MessageFormatter) -> None:
        with pytest.raises(MessageParseError, match="must have an 'other' clause"):
            en_formatter.format_list("{num, plural, =0 {it's zero}}", {"num": 0})

    def test_parsed_pattern_accepted(self, en_formatter: MessageFormatter) -> None:
        pattern = parse("{a}-{b}")
        assert en_formatter.format_list(pattern, {"a": 1, "b": 2}) == ("1", "-", "2")

    def test_binding_set_accepted(self, en_formatter: MessageFormatter) -> None:
        bindings = ArgumentBindings(("first",), {"name": "N"})
        assert en_formatter.format_list("{0}/{name}", bindings) == ("first", "/", "N")

    def test_dynamic_bindings(self, en_formatter: MessageFormatter) -> None:
        bindings = DynamicBindings(lambda key: str(key).upper())
        assert en_formatter.format("{abc} {0}", bindings) == "ABC 0"


class TestExactAndCategoryClauses:
    TEMPLATE = "{n, plural, =0 {no items} one {1 item} other {{n} items}}"

    @pytest.mark.parametrize(
        ("n", "expected"), [(0, ("no items",)), (1, ("1 item",)), (2, ("2 items",))]
    )
    def test_items(self, en_formatter: MessageFormatter, n: int, expected: tuple[str]) -> None:
        assert en_formatter.format_list(self.TEMPLATE, {"n": n}) == expected

    @pytest.mark.parametrize(("area", "expected"), [("yes", ("tax",)), ("no", ("no tax",))])
    def test_area(self, en_formatter: MessageFormatter, area: str, expected: tuple[str]) -> None:
        template = "{area, select, yes {tax} other {no tax}}"
        assert en_formatter.format_list(template, {"area": area}) == expected


class TestFormat:
    def test_joined(self, en_formatter: MessageFormatter) -> None:
        template = "{name} has {n, plural, one {# file} other {# files}}"
        assert en_formatter.format(template, {"name": "Ann", "n": 3}) == "Ann has 3 files"

    def test_locale_number_formatting(self) -> None:
        assert MessageFormatter("de").format("{0}", [1234.5]) == "1.234,5"

    def test_no_arguments(self, en_formatter: MessageFormatter) -> None:
        assert en_formatter.format("plain '{text}'") == "plain {text}"

    def test_date_argument(self, en_formatter: MessageFormatter) -> None:
        assert en_formatter.format("{d, date, yyyy-MM-dd}", {"d": "2025-10-27"}) == "2025-10-27"

    def test_duration_argument(self, en_formatter: MessageFormatter) -> None:
        assert en_formatter.format("{t, duration}", {"t": 7200}) == "2 hours"


class TestValidation:
    """validate=True checks every reference before evaluation."""

    TEMPLATE = "{n, plural, =0 {none} other {{who}}}"

    def test_without_validate_unselected_reference_ignored(
        self, en_formatter: MessageFormatter
    ) -> None:
        assert en_formatter.format(self.TEMPLATE, {"n": 0}) == "none"

    def test_validate_reports_unselected_reference(self, en_formatter: MessageFormatter) -> None:
        with pytest.raises(MessageBindingError) as exc_info:
            en_formatter.format(self.TEMPLATE, {"n": 0}, validate=True)
        assert exc_info.value.argument == "who"

    def test_validate_bindings_method(self, en_formatter: MessageFormatter) -> None:
        en_formatter.validate_bindings(self.TEMPLATE, {"n": 0, "who": "x"})
        with pytest.raises(MessageBindingError):
            en_formatter.validate_bindings(self.TEMPLATE, {"n": 0})

    def test_validate_deeply_nested_template(self, en_formatter: MessageFormatter) -> None:
        depth = 50
        template = "{g, select, other {" * depth + "{who}" + "}}" * depth
        assert en_formatter.format(template, {"g": "x", "who": "ok"}, validate=True) == "ok"


class TestErrors:
    def test_parse_error_propagates(self, en_formatter: MessageFormatter) -> None:
        with pytest.raises(MessageParseError):
            en_formatter.format("{oops")

    def test_binding_error(self, en_formatter: MessageFormatter) -> None:
        with pytest.raises(MessageBindingError):
            en_formatter.format("{0} {1}", ["one"])

    def test_type_error(self, en_formatter: MessageFormatter) -> None:
        with pytest.raises(MessageTypeError):
            en_formatter.format("{n, plural, other {#}}", {"n": "many"})

    def test_infinite_plural_value(self, en_formatter: MessageFormatter) -> None:
        with pytest.raises(MessageTypeError, match="finite"):
            en_formatter.format_list("{n, plural, one {#} other {#}}", {"n": float("inf")})

    def test_invalid_bindings_type(self, en_formatter: MessageFormatter) -> None:
        with pytest.raises(TypeError, match="Bindings must be"):
            en_formatter.format("{0}", 42)

    def test_string_bindings_rejected(self, en_formatter: MessageFormatter) -> None:
        with pytest.raises(TypeError):
            en_formatter.format("{0}", "abc")

    def test_source_size_limit(self) -> None:
        formatter = MessageFormatter("en", max_source_size=5)
        with pytest.raises(ValueError, match="exceeds"):
            formatter.format("0123456789")

    def test_nesting_limit(self) -> None:
        formatter = MessageFormatter("en", max_nesting_depth=2)
        template = "{a, select, other {{b, select, other {{c, select, other {x}}}}}}"
        with pytest.raises(MessageParseError):
            formatter.format(template, {"a": 1, "b": 2, "c": 3})

    def test_failure_logged_as_warning(
        self, en_formatter: MessageFormatter, caplog: pytest.LogCaptureFixture
    ) -> None:
        with (
            caplog.at_level(logging.WARNING, logger="icumessage.runtime.message_formatter"),
            pytest.raises(MessageBindingError),
        ):
            en_formatter.format("{missing}")
        assert "Formatting failed (MessageBindingError)" in caplog.text


class TestInputsUnchanged:
    """Formatting never mutates inputs or leaks state between calls."""

    def test_bindings_not_mutated(self, en_formatter: MessageFormatter) -> None:
        named = {"n": 2, "who": ["a"]}
        positional = ["x", 1]
        en_formatter.format("{n, plural, other {#}} {who}", named)
        en_formatter.format("{0} {1}", positional)
        assert named == {"n": 2, "who": ["a"]}
        assert positional == ["x", 1]

    def test_pattern_reusable(self, en_formatter: MessageFormatter) -> None:
        pattern = parse("{n, plural, one {#} other {# x}}")
        before = repr(pattern)
        assert en_formatter.format(pattern, {"n": 1}) == "1"
        assert en_formatter.format(pattern, {"n": 2}) == "2 x"
        assert repr(pattern) == before

    def test_failure_does_not_affect_next_call(self, en_formatter: MessageFormatter) -> None:
        with pytest.raises(MessageBindingError):
            en_formatter.format("{a, select, other {{b}}}", {"a": "x"})
        assert en_formatter.format("{a, select, other {{b}}}", {"a": "x", "b": "ok"}) == "ok"

    @given(plain_templates())
    def test_plain_templates_format(self, template: str) -> None:
        formatter = MessageFormatter("en")
        bindings = DynamicBindings(lambda key: f"<{key}>")
        assert formatter.format(template, bindings) == "".join(
            formatter.format_list(template, bindings)
        )
