from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

MASK32 = 0xFFFFFFFF


class Status(IntEnum):
    """Result codes returned by encode()/decode()."""
    SUCCESS = 0
    FAILURE = 1
    INVALID_KEY = 2
    INVALID_IV = 3
    INVALID_DATA = 4
    INVALID_LENGTH = 5


class ObfError(ValueError):
    """Raised by byte-level helpers when a transform returns a non-success Status."""

    def __init__(self, status: Status, message: str = ""):
        self.status = Status(status)
        super().__init__(message or f"obf: {self.status.name}")


def check_u32(name: str, v: int) -> int:
    if not isinstance(v, int) or isinstance(v, bool):
        raise TypeError(f"{name} must be int")
    if not (0 <= v <= MASK32):
        raise ValueError(f"{name} must be an unsigned 32-bit value")
    return v


@dataclass(frozen=True)
class Key:
    """
    Two-part 64-bit key.

    low/high: unsigned 32-bit halves
    raw:      high << 32 | low (same key, single-integer view)
    """
    low: int
    high: int

    def __post_init__(self) -> None:
        check_u32("key.low", self.low)
        check_u32("key.high", self.high)

    @classmethod
    def from_raw(cls, raw: int) -> "Key":
        if not isinstance(raw, int) or isinstance(raw, bool):
            raise TypeError("key raw must be int")
        if not (0 <= raw <= 0xFFFFFFFFFFFFFFFF):
            raise ValueError("key raw must be an unsigned 64-bit value")
        return cls(low=raw & MASK32, high=(raw >> 32) & MASK32)

    @property
    def raw(self) -> int:
        return (self.high << 32) | self.low

    @property
    def product(self) -> int:
        # low * high, truncated to 32 bits
        return (self.low * self.high) & MASK32


@dataclass
class IV:
    """
    Mutable 32-bit running counter.

    encode()/decode() overwrite .value in place; the value after encode is
    only meaningful when fed back into decode with the same key.
    """
    value: int = 0

    def __post_init__(self) -> None:
        check_u32("iv.value", self.value)
