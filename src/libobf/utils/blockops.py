from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from libobf.core.types import IV, Key

_DTYPES = {"little": "<u4", "big": ">u4"}


def _block_dtype(byteorder: str) -> str:
    if byteorder not in _DTYPES:
        raise ValueError("byteorder must be 'little' or 'big'")
    return _DTYPES[byteorder]


def bytes_to_blocks(data: bytes, *, byteorder: str = "little") -> np.ndarray:
    """
    Split bytes into 32-bit blocks. Returns a fresh, writeable uint32 array
    in native order (safe to pass straight to encode()/decode()).
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("data must be bytes-like")
    if len(data) % 4 != 0:
        raise ValueError(f"data length {len(data)} not a multiple of 4")
    dt = _block_dtype(byteorder)
    return np.frombuffer(bytes(data), dtype=dt).astype(np.uint32)


def blocks_to_bytes(blocks: Sequence[int], *, byteorder: str = "little") -> bytes:
    dt = _block_dtype(byteorder)
    return np.asarray(blocks, dtype=np.uint32).astype(dt).tobytes()


def format_blocks(blocks: Sequence[int], *, per_line: int = 8, indent: int = 9) -> str:
    """
    Hex dump: %08X words separated by ", ", wrapped every per_line words.
    Continuation lines are indented so they line up after a "Plain  = " label.
    """
    if per_line <= 0:
        raise ValueError("per_line must be > 0")

    parts = []
    for i, b in enumerate(blocks):
        if i and i % per_line == 0:
            parts.append("\n" + " " * indent)
        parts.append(f"{int(b):08X}")
        if i < len(blocks) - 1:
            parts.append(", ")
    return "".join(parts)


def random_key(rng: Optional[np.random.Generator] = None) -> Key:
    rng = rng if rng is not None else np.random.default_rng()
    low, high = rng.integers(0, 1 << 32, size=2, dtype=np.uint64).tolist()
    return Key(low=low, high=high)


def random_iv(rng: Optional[np.random.Generator] = None) -> IV:
    rng = rng if rng is not None else np.random.default_rng()
    return IV(int(rng.integers(0, 1 << 32, dtype=np.uint64)))


def random_blocks(n: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    if n < 0:
        raise ValueError("n must be >= 0")
    rng = rng if rng is not None else np.random.default_rng()
    return rng.integers(0, 1 << 32, size=n, dtype=np.uint64).astype(np.uint32)
