from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from libobf.core.types import IV, Key
from libobf.obf import check, decode, encode
from libobf.utils.blockops import blocks_to_bytes, bytes_to_blocks


@dataclass(frozen=True)
class Config:
    """
    Two-pass XOR chain over 32-bit blocks.
      rx(tx(x)) == x

    This is NOT crypto. There is no integrity check either: rx() with the
    wrong key returns garbage rather than failing.

    key:       64-bit raw key (high << 32 | low)
    iv:        32-bit starting counter used by tx()
    byteorder: how bytes map onto blocks, "little" or "big"

    Wire layout of tx() output:
      wrapped IV (4 bytes) | ciphertext blocks (len(data) bytes)
    """
    key: int = 0x9E3779B97F4A7C15
    iv: int = 0
    byteorder: str = "little"


IV_LEN = 4


def tx(data: bytes, *, cfg: Any) -> bytes:
    """
    TX direction: len(data) must be a non-zero multiple of 4.
    Uniform module API: tx(bytes, *, cfg) -> bytes
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("tx: data must be bytes-like")

    key = _get_key(cfg)
    byteorder = _get_byteorder(cfg)
    iv = IV(_get_iv(cfg))

    if len(data) % 4 != 0:
        raise ValueError(f"tx: length {len(data)} not a multiple of 4")

    blocks = bytes_to_blocks(data, byteorder=byteorder)
    check(encode(key, iv, blocks))

    return iv.value.to_bytes(IV_LEN, byteorder) + blocks_to_bytes(blocks, byteorder=byteorder)


def rx(data: bytes, *, cfg: Any) -> bytes:
    """
    RX direction: strip the wrapped IV and decode the remaining blocks.
    Uniform module API: rx(bytes, *, cfg) -> bytes
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("rx: data must be bytes-like")

    key = _get_key(cfg)
    byteorder = _get_byteorder(cfg)

    b = bytes(data)
    if len(b) < IV_LEN + 4:
        raise ValueError("rx: input too short")
    if len(b) % 4 != 0:
        raise ValueError(f"rx: length {len(b)} not a multiple of 4")

    iv = IV(int.from_bytes(b[:IV_LEN], byteorder))
    blocks = bytes_to_blocks(b[IV_LEN:], byteorder=byteorder)
    check(decode(key, iv, blocks))

    return blocks_to_bytes(blocks, byteorder=byteorder)


# ----------------------------
# Internal
# ----------------------------

def _get_key(cfg: Any) -> Key:
    key = getattr(cfg, "key", None)
    if key is None:
        raise AttributeError("cfg missing required int attribute: key")
    if not isinstance(key, int):
        raise TypeError("cfg.key must be int")
    if not (0 <= key <= 0xFFFFFFFFFFFFFFFF):
        raise ValueError("cfg.key must be an unsigned 64-bit value")
    return Key.from_raw(key)


def _get_iv(cfg: Any) -> int:
    iv = getattr(cfg, "iv", None)
    if iv is None:
        raise AttributeError("cfg missing required int attribute: iv")
    if not isinstance(iv, int):
        raise TypeError("cfg.iv must be int")
    if not (0 <= iv <= 0xFFFFFFFF):
        raise ValueError("cfg.iv must be an unsigned 32-bit value")
    return iv


def _get_byteorder(cfg: Any) -> str:
    bo = getattr(cfg, "byteorder", None)
    if bo is None:
        raise AttributeError("cfg missing required attribute: byteorder")
    if bo not in ("little", "big"):
        raise ValueError("cfg.byteorder must be 'little' or 'big'")
    return bo
