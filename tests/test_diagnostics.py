"""Tests for diagnostics: codes, spans, templates, formatter and errors."""

from __future__ import annotations

import json

import pytest

from icumessage.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorCategory,
    ErrorTemplate,
    MessageBindingError,
    MessageError,
    MessageFormatError,
    MessageParseError,
    MessageTypeError,
    OutputFormat,
    SourceSpan,
)


class TestDiagnosticCode:
    @pytest.mark.parametrize(
        ("code", "category"),
        [
            (DiagnosticCode.ARGUMENT_NOT_BOUND, ErrorCategory.BINDING),
            (DiagnosticCode.TYPE_MISMATCH, ErrorCategory.TYPE),
            (DiagnosticCode.FORMATTER_NOT_FOUND, ErrorCategory.FORMATTING),
            (DiagnosticCode.MAX_DEPTH_EXCEEDED, ErrorCategory.FORMATTING),
            (DiagnosticCode.MISSING_OTHER_CLAUSE, ErrorCategory.PARSE),
            (DiagnosticCode.UNEXPECTED_EOF, ErrorCategory.PARSE),
        ],
    )
    def test_category(self, code: DiagnosticCode, category: ErrorCategory) -> None:
        assert code.category is category

    def test_values_unique(self) -> None:
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))


class TestSourceSpan:
    def test_valid(self) -> None:
        span = SourceSpan(start=3, end=5, line=1, column=4)
        assert (span.line, span.column) == (1, 4)

    @pytest.mark.parametrize(
        ("kwargs", "match"),
        [
            ({"start": -1, "end": 0, "line": 1, "column": 1}, "start"),
            ({"start": 5, "end": 4, "line": 1, "column": 1}, "end"),
            ({"start": 0, "end": 0, "line": 0, "column": 1}, "line"),
            ({"start": 0, "end": 0, "line": 1, "column": 0}, "column"),
        ],
    )
    def test_invalid(self, kwargs: dict[str, int], match: str) -> None:
        with pytest.raises(ValueError, match=match):
            SourceSpan(**kwargs)


class TestErrorTemplate:
    def test_grammar_failure_message(self) -> None:
        diagnostic = ErrorTemplate.parse_failure(
            DiagnosticCode.UNEXPECTED_CHARACTER, "Expected argument name", "}", 2
        )
        assert diagnostic.message == (
            "Expected argument name. Could not parse the remaining '}' starting at position 2"
        )
        assert diagnostic.hint is not None
        assert "quoted" in diagnostic.hint

    def test_clause_validation_message_is_reason(self) -> None:
        reason = ErrorTemplate.duplicate_selector("one")
        diagnostic = ErrorTemplate.parse_failure(
            DiagnosticCode.DUPLICATE_SELECTOR, reason, "one {b}}", 10
        )
        assert diagnostic.message == reason

    def test_argument_not_bound(self) -> None:
        diagnostic = ErrorTemplate.argument_not_bound("name", {})
        assert diagnostic.message == "No argument binding was found for 'name' in {}"
        assert diagnostic.argument_name == "name"

    def test_plural_value_not_numeric(self) -> None:
        diagnostic = ErrorTemplate.plural_value_not_numeric(0, "x", "selectordinal")
        assert diagnostic.message == (
            "Argument 0 of a 'selectordinal' argument must be a number, got str"
        )
        assert diagnostic.received_type == "str"
        assert diagnostic.format_kind == "selectordinal"

    def test_depth_exceeded(self) -> None:
        diagnostic = ErrorTemplate.expression_depth_exceeded(7)
        assert diagnostic.message == "Maximum nesting depth (7) exceeded"
        assert diagnostic.code is DiagnosticCode.MAX_DEPTH_EXCEEDED


class TestDiagnosticFormatter:
    DIAGNOSTIC = Diagnostic(
        code=DiagnosticCode.TYPE_MISMATCH,
        message="Argument 'n' of a 'plural' argument must be a number, got str",
        span=SourceSpan(start=0, end=0, line=2, column=3),
        hint="Bind an int, float or Decimal",
        argument_name="n",
        format_kind="plural",
        expected_type="int | float | Decimal",
        received_type="str",
    )

    def test_rust(self) -> None:
        assert DiagnosticFormatter().format(self.DIAGNOSTIC) == "\n".join(
            [
                "error[TYPE_MISMATCH]: Argument 'n' of a 'plural' argument must be a number, got str",
                "  --> line 2, column 3",
                "  = kind: plural",
                "  = argument: n",
                "  = expected: int | float | Decimal",
                "  = received: str",
                "  = help: Bind an int, float or Decimal",
            ]
        )

    def test_rust_color(self) -> None:
        rendered = DiagnosticFormatter(color=True).format(self.DIAGNOSTIC)
        assert rendered.startswith("\033[1;31merror\033[0m[TYPE_MISMATCH]")

    def test_simple(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        assert formatter.format(self.DIAGNOSTIC) == (
            "TYPE_MISMATCH: Argument 'n' of a 'plural' argument must be a number, got str"
        )

    def test_json(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(self.DIAGNOSTIC))
        assert data["code"] == "TYPE_MISMATCH"
        assert data["code_value"] == 2001
        assert data["category"] == "type"
        assert data["line"] == 2
        assert data["argument_name"] == "n"
        assert "span" not in data

    def test_json_omits_empty_fields(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(ErrorTemplate.unknown_node("int")))
        assert set(data) == {"code", "code_value", "category", "message", "severity"}

    def test_sanitize_truncates(self) -> None:
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )
        assert formatter.format(self.DIAGNOSTIC) == "TYPE_MISMATCH: Argument '..."

    def test_format_all(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        diagnostics = [ErrorTemplate.unknown_node("a"), ErrorTemplate.unknown_node("b")]
        assert formatter.format_all(diagnostics) == (
            "UNKNOWN_NODE: Unknown node type: a\n\nUNKNOWN_NODE: Unknown node type: b"
        )


class TestErrors:
    def test_hierarchy(self) -> None:
        for cls in (MessageParseError, MessageBindingError, MessageTypeError, MessageFormatError):
            assert issubclass(cls, MessageError)

    def test_plain_string_message(self) -> None:
        error = MessageError("boom")
        assert str(error) == "boom"
        assert error.message == "boom"
        assert error.diagnostic is None
        assert error.code is None
        assert error.format_error() == "boom"

    def test_diagnostic_message(self) -> None:
        diagnostic = ErrorTemplate.formatter_not_found("ordinal")
        error = MessageFormatError(diagnostic, kind="ordinal", value=3)
        assert str(error) == diagnostic.message
        assert error.code is DiagnosticCode.FORMATTER_NOT_FOUND
        assert error.format_error().startswith("error[FORMATTER_NOT_FOUND]")
        assert (error.kind, error.value) == ("ordinal", 3)

    def test_parse_error_attributes(self) -> None:
        error = MessageParseError("bad", reason="Bad", remainder="}", position=3)
        assert (error.reason, error.remainder, error.position) == ("Bad", "}", 3)

    def test_binding_error_attributes(self) -> None:
        error = MessageBindingError("missing", argument="x", bindings={})
        assert error.argument == "x"
        assert error.bindings == {}

    def test_type_error_attributes(self) -> None:
        error = MessageTypeError("wrong", argument=0, value="s")
        assert (error.argument, error.value) == (0, "s")
