# src/mwi_grating/constants.py
"""
Physical constants for the grating phase models.

Values are in the mixed unit system the phase formulas were calibrated in:
  - C3 in meV * nm^3 (Van der Waals coefficient of the particle/wall pair)
  - hbar in meV * s
  - gravity_acceleration in m/s^2, signed (negative = downward)

Constants are grouped in a frozen dataclass so a different particle species
can be substituted without touching the phase models.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict

from .types import InvalidParameter

C3_HYDROGEN_MEV_NM3: float = 2.0453e-2
HBAR_MEV_S: float = 6.58212e-13
GRAVITY_ACCELERATION_M_PER_S2: float = -9.8

# Wall distances are converted from meters to nm before entering the 1/r^3 term.
METERS_TO_NM: float = 1.0e9


@dataclass(frozen=True)
class PhysicalConstants:
    c3: float = C3_HYDROGEN_MEV_NM3
    hbar: float = HBAR_MEV_S
    gravity_acceleration: float = GRAVITY_ACCELERATION_M_PER_S2

    def validate(self) -> None:
        if not (self.hbar > 0.0):
            raise InvalidParameter("hbar must be > 0.")
        if self.c3 < 0.0:
            raise InvalidParameter("c3 must be >= 0.")

    def with_overrides(self, **kwargs: float) -> "PhysicalConstants":
        return replace(self, **{k: float(v) for k, v in kwargs.items()})


DEFAULT_CONSTANTS = PhysicalConstants()

# Muonium is assumed to share the hydrogen C3 coefficient.
SPECIES_CONSTANTS: Dict[str, PhysicalConstants] = {
    "hydrogen": DEFAULT_CONSTANTS,
    "muonium": DEFAULT_CONSTANTS,
}


def constants_for_species(species: str) -> PhysicalConstants:
    key = species.strip().lower()
    if key not in SPECIES_CONSTANTS:
        known = ", ".join(sorted(SPECIES_CONSTANTS))
        raise InvalidParameter(f"Unknown species {species!r} (known: {known})")
    return SPECIES_CONSTANTS[key]
