# src/mwi_grating/phase/grating.py

from __future__ import annotations

import math

import numpy as np

from ..types import Array


def grating_phase(n: int, x: Array, grating_period: float) -> Array:
    """Diffraction phase of harmonic n at positions x: 2π n x / d."""
    x = np.asarray(x, dtype=float)
    return 2.0 * math.pi * int(n) * x / float(grating_period)
