"""The four-word digest carried in wire messages, with hex encoding."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from dataclasses import dataclass, fields

from .errors import HexError, InsufficientData, NotAValidFelt, TooMuchData

MODULUS = 2**64 - 2**32 + 1
"""Order of the prime field that felts live in."""

DIGEST_DATA_SIZE = 32
"""Number of bytes in an encoded digest."""

_U64_LIMIT = 2**64
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_LAYOUT = struct.Struct(">4Q")


def is_valid_felt(value: int) -> bool:
    """Return whether ``value`` is an element of the prime field."""
    return 0 <= value < MODULUS


@dataclass(frozen=True, order=True)
class Digest:
    """Four unsigned 64-bit words, as sent over the wire."""

    d0: int = 0
    d1: int = 0
    d2: int = 0
    d3: int = 0

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if not isinstance(value, int) or not 0 <= value < _U64_LIMIT:
                raise ValueError(f"{field.name} must be an unsigned 64-bit integer, got {value!r}")

    def __str__(self) -> str:
        return self.to_hex()

    def to_hex(self) -> str:
        """Encode as 64 lower-case hex digits, most significant word first."""
        return "".join(f"{word:016x}" for word in self.to_words())

    def to_hex_upper(self) -> str:
        """Encode as 64 upper-case hex digits, most significant word first."""
        return "".join(f"{word:016X}" for word in self.to_words())

    @classmethod
    def from_hex(cls, text: str | bytes) -> Digest:
        """Decode 64 hex digits into a digest."""
        if isinstance(text, (bytes, bytearray)):
            text = text.decode("latin-1")
        if len(text) % 2:
            raise HexError("Odd number of digits")
        for position, char in enumerate(text):
            if char not in _HEX_DIGITS:
                raise HexError(f"Invalid character {char!r} at position {position}")
        data = bytes.fromhex(text)
        if len(data) < DIGEST_DATA_SIZE:
            raise InsufficientData(DIGEST_DATA_SIZE, len(data))
        if len(data) > DIGEST_DATA_SIZE:
            raise TooMuchData(DIGEST_DATA_SIZE, len(data))
        return cls(*_LAYOUT.unpack(data))

    @classmethod
    def from_words(cls, words: Sequence[int]) -> Digest:
        """Build a digest from exactly four words."""
        if len(words) != 4:
            raise ValueError(f"a digest holds 4 words, got {len(words)}")
        return cls(*words)

    def to_words(self) -> tuple[int, int, int, int]:
        """Return the four words in order."""
        return (self.d0, self.d1, self.d2, self.d3)

    def to_felts(self) -> tuple[int, int, int, int]:
        """Return the words as field elements, checking that each is in range."""
        words = self.to_words()
        if not all(is_valid_felt(word) for word in words):
            raise NotAValidFelt()
        return words