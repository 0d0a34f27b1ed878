"""
mwi_grating

Fourier coefficients of the phase imposed on a matter-wave beam by a tilted,
wedged transmission grating (grating, gravity and Van der Waals terms).
"""

from __future__ import annotations

from .constants import PhysicalConstants  # noqa: F401
from .fourier import (  # noqa: F401
    FourierCoefficients,
    FourierSweep,
    compute_fourier_bin,
    compute_fourier_coefficients,
    sweep_z,
)
from .types import BeamParams, InvalidParameter  # noqa: F401

__version__: str = "0.1.0"
