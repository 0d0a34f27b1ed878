# src/mwi_grating/phase/gravity.py

from __future__ import annotations

import math

from ..constants import DEFAULT_CONSTANTS, PhysicalConstants
from ..types import BeamParams


def time_free_fall(z_position: float, particle_velocity: float) -> float:
    """Transit time t = z / v to reach longitudinal position z (s)."""
    return float(z_position) / float(particle_velocity)


def gravity_phase(
    z_position: float,
    params: BeamParams,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> float:
    """
    Free-fall phase shift relative to the grating period:

      φ_g = 2π g t^2 / d,   t = z / v

    Returns 0.0 when params.account_gravity is False.
    """
    if not params.account_gravity:
        return 0.0
    t = time_free_fall(z_position, params.particle_velocity)
    return 2.0 * math.pi * float(constants.gravity_acceleration) * t**2 / float(params.grating_period)
