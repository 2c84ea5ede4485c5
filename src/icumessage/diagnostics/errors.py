"""Message exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Every kind is terminal for the format call that raised it: nothing is
retried or replaced by placeholder text internally.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = [
    "MessageBindingError",
    "MessageError",
    "MessageFormatError",
    "MessageParseError",
    "MessageTypeError",
]


class MessageError(Exception):
    """Base exception for all message errors.

    ``str(error)`` is the plain diagnostic message, which is stable across
    runs for identical input. Use ``format_error()`` for the multi-line
    rendering with hints.

    Attributes:
        diagnostic: Structured diagnostic information
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MessageError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)

    @property
    def message(self) -> str:
        """Plain error message."""
        return str(self)

    @property
    def code(self) -> DiagnosticCode | None:
        """Diagnostic code, if the error was built from a Diagnostic."""
        return self.diagnostic.code if self.diagnostic is not None else None

    def format_error(self) -> str:
        """Render the error with its diagnostic context."""
        if self.diagnostic is None:
            return str(self)
        return self.diagnostic.format_error()


class MessageParseError(MessageError):
    """Template grammar violation, detected eagerly during parsing.

    Also raised for plural/select/selectordinal arguments without an
    'other' clause and for duplicate clause selectors.

    Attributes:
        reason: Human-readable reason
        remainder: Exact unconsumed input at the failure point
        position: 1-based character offset of the failure point
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        reason: str,
        remainder: str,
        position: int,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.remainder = remainder
        self.position = position


class MessageBindingError(MessageError):
    """A referenced argument has no entry in the supplied bindings.

    Raised eagerly by the binding validator or lazily by the resolver on
    first use of the unresolved reference.

    Attributes:
        argument: Positional index or name that could not be resolved
        bindings: The binding set that was supplied
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        argument: int | str,
        bindings: object,
    ) -> None:
        super().__init__(message)
        self.argument = argument
        self.bindings = bindings


class MessageTypeError(MessageError):
    """A plural or selectordinal argument is bound to a non-numeric value.

    Attributes:
        argument: Positional index or name of the argument
        value: The offending bound value
    """

    def __init__(self, message: str | Diagnostic, *, argument: int | str, value: object) -> None:
        super().__init__(message)
        self.argument = argument
        self.value = value


class MessageFormatError(MessageError):
    """A formatting service is missing or failed.

    Attributes:
        kind: Argument type whose formatter failed (number, date, ...)
        value: The value being formatted
    """

    def __init__(self, message: str | Diagnostic, *, kind: str, value: object = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.value = value

