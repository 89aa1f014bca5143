"""Errors raised when wire messages are converted into domain values."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for every failed conversion of a wire message."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class HexError(ConversionError):
    """A hex string could not be decoded."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"Hex error: {self.reason}"


class SmtLeafError(ConversionError):
    """A sparse Merkle tree leaf is malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"SMT leaf error: {self.reason}"


class SmtProofError(ConversionError):
    """A sparse Merkle tree opening is malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"SMT proof error: {self.reason}"


class TooMuchData(ConversionError):
    """More bytes were supplied than the target type holds."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(expected, got)
        self.expected = expected
        self.got = got

    def __str__(self) -> str:
        return f"Too much data, expected {self.expected}, got {self.got}"


class InsufficientData(ConversionError):
    """Fewer bytes were supplied than the target type needs."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(expected, got)
        self.expected = expected
        self.got = got

    def __str__(self) -> str:
        return f"Not enough data, expected {self.expected}, got {self.got}"


class NotAValidFelt(ConversionError):
    """A value lies outside the prime field."""

    def __str__(self) -> str:
        return "Value is not in the range 0..MODULUS"


class MissingFieldError(ConversionError):
    """A required field of a wire message was left empty."""

    def __init__(self, entity: str, field_name: str) -> None:
        super().__init__(entity, field_name)
        self.entity = entity
        self.field_name = field_name

    def __str__(self) -> str:
        return (
            f"Field `{self.field_name}` required to be filled in protobuf "
            f"representation of {self.entity}"
        )


def missing_field(entity: str | type, field_name: str) -> MissingFieldError:
    """Build the error for a missing field of the message ``entity``."""
    name = entity if isinstance(entity, str) else entity.__name__
    return MissingFieldError(name, field_name)