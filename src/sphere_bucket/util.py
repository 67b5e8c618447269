# MIT License (see LICENSE)
"""
Utility functions for numeric operations and contract checks.

Provides the small helpers shared by the lattice and the bucket:
float64 array conversion, symmetric rounding, and debug-only
precondition checks controlled by an environment variable.
"""
from __future__ import annotations
import math
import os

import numpy as np

from .constants import ASSERTIONS_ENV_VAR


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Allows tuple/list inputs wherever a 2D point is accepted.
    """
    return np.array(x, dtype=np.float64)


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.hypot(v[0], v[1]))


def round_symmetric(value: float) -> int:
    """
    Round to the nearest integer, with halves rounded away from zero.

    Differs from round()/np.round, which round halves to even:
    round_symmetric(2.5) == 3 and round_symmetric(-2.5) == -3.
    """
    rounded = math.floor(abs(value) + 0.5)
    return int(rounded) if value >= 0 else -int(rounded)


def assertions_enabled() -> bool:
    """
    Check whether contract checks are active.

    They are on unless Python runs optimized (-O) or the
    SPHERE_BUCKET_ASSERTIONS environment variable is set to "0".
    """
    return __debug__ and os.environ.get(ASSERTIONS_ENV_VAR, "1") != "0"


def check(condition: bool, message: str) -> None:
    """
    Report a programming-error precondition violation.

    Raises AssertionError when assertions are enabled, does nothing otherwise.
    Callers must stay well-behaved (no crash) when the check is skipped.
    """
    if not condition and assertions_enabled():
        raise AssertionError(message)
