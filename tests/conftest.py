from __future__ import annotations

from pathlib import Path

import numpy as np


def repo_root() -> Path:
    """
    Find the repository root by walking upward until we find pyproject.toml.
    This is robust regardless of where tests live.
    """
    start = Path(__file__).resolve()
    for p in [start] + list(start.parents):
        if (p / "pyproject.toml").exists():
            return p
    raise RuntimeError("repo_root(): could not find pyproject.toml walking upward")


def seeded_rng(seed: int) -> np.random.Generator:
    """
    Deterministic generator for keys/IVs/blocks so failures reproduce.
    """
    return np.random.default_rng(seed)
