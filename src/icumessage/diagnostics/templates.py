"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]

# Clause validation failures are reported with their fixed message only;
# grammar failures append the unconsumed remainder and position.
_CLAUSE_VALIDATION_HINTS: dict[DiagnosticCode, str] = {
    DiagnosticCode.MISSING_OTHER_CLAUSE: "Add an 'other {...}' clause",
    DiagnosticCode.DUPLICATE_SELECTOR: "Each selector may appear once per argument",
}

_GRAMMAR_HINT = "Literal '{' and '}' must be quoted, e.g. '{'"


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def parse_failure(
        code: DiagnosticCode,
        reason: str,
        remainder: str,
        position: int,
        span: SourceSpan | None = None,
    ) -> Diagnostic:
        """Template grammar violation.

        Args:
            code: Syntax error code
            reason: Human-readable reason (capitalized, no trailing period)
            remainder: Unconsumed input at the failure point
            position: 1-based character offset of the failure point
            span: Source location of the failure point

        Returns:
            Diagnostic for the syntax error
        """
        hint = _CLAUSE_VALIDATION_HINTS.get(code)
        if hint is not None:
            msg = reason
        else:
            hint = _GRAMMAR_HINT
            msg = (
                f"{reason}. Could not parse the remaining {remainder!r} "
                f"starting at position {position}"
            )
        return Diagnostic(
            code=code,
            message=msg,
            span=span,
            hint=hint,
        )

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Cursor read past the end of the template.

        Args:
            position: The position where EOF was encountered

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(code=DiagnosticCode.UNEXPECTED_EOF, message=msg)

    @staticmethod
    def missing_other_clause(found: str) -> str:
        """Reason text for a plural/select argument without 'other'.

        Args:
            found: Rendering of the clause map that was parsed

        Returns:
            Reason text (used verbatim as the error message)
        """
        return (
            "'plural', 'select' and 'selectordinal' arguments must have an 'other' clause. "
            f"Found {found}"
        )

    @staticmethod
    def duplicate_selector(selector: str) -> str:
        """Reason text for a selector repeated within one argument.

        Args:
            selector: Selector as written in the template (e.g. "=0", "one")

        Returns:
            Reason text (used verbatim as the error message)
        """
        return f"Duplicate selector '{selector}' in 'plural', 'select' or 'selectordinal' argument"

    @staticmethod
    def argument_not_bound(argument: int | str, bindings: object) -> Diagnostic:
        """Referenced argument missing from the bindings.

        Args:
            argument: Positional index or name
            bindings: The binding set that was supplied

        Returns:
            Diagnostic for ARGUMENT_NOT_BOUND
        """
        msg = f"No argument binding was found for {argument!r} in {bindings!r}"
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_NOT_BOUND,
            message=msg,
            hint=f"Pass a value for {argument!r} in the bindings",
            argument_name=str(argument),
        )

    @staticmethod
    def plural_value_not_numeric(argument: int | str, value: object, kind: str) -> Diagnostic:
        """Plural or selectordinal argument bound to a non-number.

        Args:
            argument: Positional index or name
            value: The bound value
            kind: "plural" or "selectordinal"

        Returns:
            Diagnostic for TYPE_MISMATCH
        """
        received = type(value).__name__
        msg = f"Argument {argument!r} of a '{kind}' argument must be a number, got {received}"
        return Diagnostic(
            code=DiagnosticCode.TYPE_MISMATCH,
            message=msg,
            hint="Bind an int, float or Decimal",
            argument_name=str(argument),
            format_kind=kind,
            expected_type="int | float | Decimal",
            received_type=received,
        )

    @staticmethod
    def plural_value_not_finite(argument: int | str, value: object, kind: str) -> Diagnostic:
        """Plural or selectordinal argument bound to infinity or NaN."""
        msg = f"Argument {argument!r} of a '{kind}' argument must be a finite number, got {value!r}"
        return Diagnostic(
            code=DiagnosticCode.TYPE_MISMATCH,
            message=msg,
            hint="Plural categories are only defined for finite numbers",
            argument_name=str(argument),
            format_kind=kind,
            expected_type="finite int | float | Decimal",
            received_type=type(value).__name__,
        )

    @staticmethod
    def formatter_not_found(kind: str) -> Diagnostic:
        """No formatting service registered for an argument type.

        Args:
            kind: Argument type (number, date, spellout, ...)

        Returns:
            Diagnostic for FORMATTER_NOT_FOUND
        """
        msg = f"No formatter is registered for '{kind}' arguments"
        return Diagnostic(
            code=DiagnosticCode.FORMATTER_NOT_FOUND,
            message=msg,
            hint=f"Register a '{kind}' formatter on the FormatterRegistry",
            format_kind=kind,
        )

    @staticmethod
    def formatting_failed(kind: str, value: object, reason: str) -> Diagnostic:
        """Formatting service raised while formatting a value.

        Args:
            kind: Argument type (number, date, ...)
            value: The value being formatted
            reason: Underlying failure description

        Returns:
            Diagnostic for FORMATTING_FAILED
        """
        msg = f"Formatting {value!r} as '{kind}' failed: {reason}"
        return Diagnostic(
            code=DiagnosticCode.FORMATTING_FAILED,
            message=msg,
            format_kind=kind,
            received_type=type(value).__name__,
        )

    @staticmethod
    def expression_depth_exceeded(max_depth: int) -> Diagnostic:
        """Maximum traversal depth exceeded.

        Args:
            max_depth: Maximum allowed depth

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Reduce argument nesting in the template",
        )

    @staticmethod
    def unknown_node(type_name: str) -> Diagnostic:
        """Tree contains an object that is not a node.

        Args:
            type_name: Name of the unexpected type

        Returns:
            Diagnostic for UNKNOWN_NODE
        """
        msg = f"Unknown node type: {type_name}"
        return Diagnostic(code=DiagnosticCode.UNKNOWN_NODE, message=msg)
