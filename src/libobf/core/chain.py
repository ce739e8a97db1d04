from __future__ import annotations

from typing import List

from libobf.core.combine import backward_combine, forward_combine
from libobf.core.types import Key


def wrap_iv(key: Key, c: int, head: int) -> int:
    """
    Fold the key product, then the first ciphertext block, into the counter.
    Uses its own counter starting at 0.
    """
    t = 0
    c, t = forward_combine(t, c, key.product)
    c, t = forward_combine(t, c, head)
    return c


def unwrap_iv(key: Key, c: int, head: int) -> int:
    """
    Inverse of wrap_iv(). Operands are taken in the opposite order
    (head first, then product); XOR commutes and both steps consume
    counter offsets {0, 1}, so the result is the pre-wrap counter.
    """
    t = 0
    c, t = forward_combine(t, c, head)
    c, t = forward_combine(t, c, key.product)
    return c


def encode_blocks(key: Key, iv: int, data: List[int]) -> int:
    """
    Encode data in place and return the wrapped counter.

    Pass 1 runs 0 -> n-1, chaining each block to the previous output
    (seeded with key.low). Pass 2 runs n-1 -> 0, chaining each block to the
    next output (seeded with key.high). Both neighbours are already written
    when read.
    """
    n = len(data)
    c = iv

    for i in range(n):
        data[i], c = forward_combine(c, data[i], key.low if i == 0 else data[i - 1])

    for j in range(n - 1, -1, -1):
        data[j], c = forward_combine(c, data[j], key.high if j == n - 1 else data[j + 1])

    return wrap_iv(key, c, data[0])


def decode_blocks(key: Key, iv: int, data: List[int]) -> int:
    """
    Decode data in place and return the original counter.

    Pass 1 (0 -> n-1) undoes encode pass 2; data[i + 1] is still ciphertext
    when read. Pass 2 (n-1 -> 0) undoes encode pass 1; data[k - 1] is still
    intermediate when read.
    """
    n = len(data)
    c = unwrap_iv(key, iv, data[0])

    for i in range(n):
        data[i], c = backward_combine(c, data[i], key.high if i == n - 1 else data[i + 1])

    for k in range(n - 1, -1, -1):
        data[k], c = backward_combine(c, data[k], key.low if k == 0 else data[k - 1])

    return c
