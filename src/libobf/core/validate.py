from __future__ import annotations

from typing import Any, Optional

from libobf.core.types import Status


def validate(key: Any, iv: Any, data: Any, length: Optional[int]) -> Status:
    """
    Check encode/decode arguments, first failure wins:
      key missing    -> INVALID_KEY
      iv missing     -> INVALID_IV
      data missing   -> INVALID_DATA
      length == 0    -> INVALID_LENGTH

    length=None means "all of data". A negative length or one past the end
    of data is also INVALID_LENGTH. No side effects.
    """
    if key is None:
        return Status.INVALID_KEY

    if iv is None:
        return Status.INVALID_IV

    if data is None:
        return Status.INVALID_DATA

    n = len(data) if length is None else length
    if n <= 0 or n > len(data):
        return Status.INVALID_LENGTH

    return Status.SUCCESS
