from __future__ import annotations

from typing import Any, Callable, List, Optional

import numpy as np

from libobf.core.chain import decode_blocks, encode_blocks
from libobf.core.types import IV, Key, ObfError, Status, check_u32
from libobf.core.validate import validate

API_VERSION_1 = 1
API_VERSION = API_VERSION_1


def encode(key: Optional[Key], iv: Optional[IV], blocks: Any, length: Optional[int] = None) -> Status:
    """
    Encode blocks in place using key and IV.

    blocks: 1-D uint32 ndarray or list of ints in [0, 2^32); only
            blocks[:length] is touched
    iv:     overwritten with the wrapped counter on success

    Returns Status.SUCCESS, or INVALID_KEY / INVALID_IV / INVALID_DATA /
    INVALID_LENGTH without modifying iv or blocks. A non-int or out-of-range
    list element or iv.value raises TypeError / ValueError, also before any
    write.
    """
    return _run(encode_blocks, key, iv, blocks, length)


def decode(key: Optional[Key], iv: Optional[IV], blocks: Any, length: Optional[int] = None) -> Status:
    """
    Decode blocks in place using key and IV (inverse of encode()).

    iv must hold the value encode() left behind; on success it is restored
    to the value encode() was originally called with.
    """
    return _run(decode_blocks, key, iv, blocks, length)


def check(status: Status) -> None:
    """Raise ObfError unless status is SUCCESS."""
    if status != Status.SUCCESS:
        raise ObfError(status)


def _run(
    blocks_fn: Callable[[Key, int, List[int]], int],
    key: Optional[Key],
    iv: Optional[IV],
    blocks: Any,
    length: Optional[int],
) -> Status:
    result = validate(key, iv, blocks, length)
    if result != Status.SUCCESS:
        return result

    n = len(blocks) if length is None else length
    start = check_u32("iv.value", iv.value)
    work = _read_blocks(blocks, n)

    iv.value = blocks_fn(key, start, work)
    blocks[:n] = work

    return result


def _read_blocks(blocks: Any, n: int) -> List[int]:
    if isinstance(blocks, np.ndarray):
        if blocks.dtype != np.uint32 or blocks.ndim != 1:
            raise TypeError("blocks must be a 1-D uint32 array")
        if not blocks.flags.writeable:
            raise TypeError("blocks array must be writeable")
        return blocks[:n].tolist()

    if isinstance(blocks, list):
        return [check_u32(f"blocks[{i}]", b) for i, b in enumerate(blocks[:n])]

    raise TypeError("blocks must be a uint32 ndarray or a list of ints")
