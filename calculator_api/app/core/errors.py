"""
Error taxonomy for the calculator service.

Handlers translate these into HTTP status codes: ``ValidationError``
→ 400, ``NotFound`` → 404, ``StorageError`` → 500.  Anything not
derived from ``CalculatorError`` is left to the catch‑all middleware.
"""


class CalculatorError(Exception):
    """Base class for errors raised by the service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CalculatorError):
    """Missing or malformed client input."""


class NotFound(CalculatorError):
    """No record matches the requested identifier."""

    def __init__(self, message: str = "Calculation not found") -> None:
        super().__init__(message)


class StorageError(CalculatorError):
    """The document store is unreachable or rejected an operation."""
