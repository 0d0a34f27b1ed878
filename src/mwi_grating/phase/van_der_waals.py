# src/mwi_grating/phase/van_der_waals.py
"""
mwi_grating.phase.van_der_waals

Van der Waals (image-charge) phase of a neutral particle crossing a slit.

Each wall contributes

  φ_wall(r) = - C3 t / (ħ v r^3)

with r the wall distance in nm, t the bar thickness and v the particle
velocity. The two walls sit at x = 0 and x = x_max in the sample coordinate.

The 1/r^3 term diverges on a wall. A sample lying exactly on either wall gets
zero phase instead; this is a modeling surrogate, not a numerical failure.
"""

from __future__ import annotations

import numpy as np

from ..constants import DEFAULT_CONSTANTS, METERS_TO_NM, PhysicalConstants
from ..types import Array, BeamParams


def wall_distances_nm(x: Array, x_max: float) -> tuple[Array, Array]:
    """Distances (nm) from x to the lower (x = 0) and upper (x = x_max) walls."""
    x = np.asarray(x, dtype=float)
    lower = np.abs(x) * METERS_TO_NM
    upper = np.abs(float(x_max) - x) * METERS_TO_NM
    return lower, upper


def van_der_waals_phase(
    x: Array,
    x_max: float,
    params: BeamParams,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> Array:
    """
    Van der Waals phase at sample positions x (meters).

    Returns an array shaped like x. All entries are zero when
    params.account_van_der_waals is False; entries on a wall are zero.
    """
    x = np.asarray(x, dtype=float)
    if not params.account_van_der_waals:
        return np.zeros_like(x)

    lower, upper = wall_distances_nm(x, x_max)
    on_wall = (lower == 0.0) | (upper == 0.0)

    k = float(constants.c3) * float(params.grating_thickness) / (
        float(constants.hbar) * float(params.particle_velocity)
    )

    # Guarded samples are replaced before the division so no inf/NaN is formed.
    lo = np.where(on_wall, 1.0, lower)
    hi = np.where(on_wall, 1.0, upper)
    phase = -k / lo**3 - k / hi**3
    return np.where(on_wall, 0.0, phase)
