from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import importlib
import pkgutil

BLOCK_BYTES = 4


@dataclass(frozen=True)
class Config:
    """
    Scramble stage config.

    module:     scramble module name (e.g. "chain32")
    module_cfg: instance of that module's Config (or None -> defaults)
    pad:        if True, tx() pads to whole 32-bit blocks (1..4 bytes, each
                holding the pad length) and rx() strips it again, so any
                payload length works. If False the payload goes to the module
                as-is and must already be block aligned.
    """
    module: str = "chain32"
    module_cfg: Any = None
    pad: bool = True


def available_modules() -> list[str]:
    pkg = importlib.import_module(f"{__package__}.modules")
    return sorted(m.name for m in pkgutil.iter_modules(pkg.__path__) if not m.name.startswith("_"))


def tx(data: bytes, *, cfg: Config) -> bytes:
    """
    Stage TX: (optionally) pad to block size, then obfuscate.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("tx: data must be bytes-like")
    mod, module_cfg = _resolve(cfg)
    x = bytes(data)
    if _get_pad(cfg):
        x = pad_blocks(x)
    return mod.tx(x, cfg=module_cfg)


def rx(data: bytes, *, cfg: Config) -> bytes:
    """
    Stage RX: recover what tx() was given.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("rx: data must be bytes-like")
    mod, module_cfg = _resolve(cfg)
    x = mod.rx(bytes(data), cfg=module_cfg)
    return unpad_blocks(x) if _get_pad(cfg) else x


def pad_blocks(data: bytes) -> bytes:
    n = BLOCK_BYTES - (len(data) % BLOCK_BYTES)
    return data + bytes([n]) * n


def unpad_blocks(data: bytes) -> bytes:
    if not data or len(data) % BLOCK_BYTES != 0:
        raise ValueError("rx: padded data must be a non-empty multiple of 4")
    n = data[-1]
    if not (1 <= n <= BLOCK_BYTES) or data[-n:] != bytes([n]) * n:
        raise ValueError("rx: bad block padding")
    return data[:-n]


# ----------------------------
# Internal
# ----------------------------

def _resolve(cfg: Config):
    name = getattr(cfg, "module", None)
    if not isinstance(name, str) or not name:
        raise ValueError("cfg.module must be a non-empty string")

    mod = importlib.import_module(f"{__package__}.modules.{name}")
    for attr in ("Config", "tx", "rx"):
        if not hasattr(mod, attr):
            raise AttributeError(f"scramble module '{name}' missing {attr}")

    module_cfg = cfg.module_cfg if cfg.module_cfg is not None else mod.Config()
    return mod, module_cfg


def _get_pad(cfg: Any) -> bool:
    p = getattr(cfg, "pad", None)
    if not isinstance(p, bool):
        raise TypeError("cfg.pad must be bool")
    return p
