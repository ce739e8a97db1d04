from __future__ import annotations

from typing import Tuple

from libobf.core.types import MASK32


def forward_combine(c: int, a: int, b: int) -> Tuple[int, int]:
    """
    XOR with post-incremented counter.
    Returns (a ^ b ^ c, c + 1) with the counter wrapping at 2^32.
    """
    return (a ^ b ^ c) & MASK32, (c + 1) & MASK32


def backward_combine(c: int, a: int, b: int) -> Tuple[int, int]:
    """
    XOR with pre-decremented counter.
    Returns (a ^ b ^ (c - 1), c - 1) with the counter wrapping at 2^32.

    Replaying a forward_combine() run in reverse call order with the same
    operand pairs consumes exactly the same counter values.
    """
    c = (c - 1) & MASK32
    return (a ^ b ^ c) & MASK32, c
