from __future__ import annotations

from typing import Any, Optional, Tuple


class SolhijriError(Exception):
    """Base error."""


class InvalidFieldValue(SolhijriError, ValueError):
    """A field value lies outside its valid range for the given context."""

    def __init__(self, message: str, *, field: Any = None, value: Optional[int] = None):
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidEra(InvalidFieldValue):
    """Era value outside {0, 1}, or an era that conflicts with the year."""


class DateMismatch(SolhijriError, ValueError):
    """Resolved date disagrees with an explicitly supplied field."""


class UnsupportedField(SolhijriError, KeyError):
    """Field outside the recognized domain."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class OutOfTableRange(SolhijriError, ValueError):
    """Year or day offset outside the span covered by the leap-year table."""

    def __init__(self, message: str, *, value: int, span: Tuple[int, int]):
        super().__init__(message)
        self.value = value
        self.span = span


class DateOverflowError(SolhijriError, OverflowError):
    """Arithmetic left the representable range of the underlying calendar."""
