# src/mwi_grating/types.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union
import math

import numpy as np

Array = np.ndarray

Projection = Literal["real", "imaginary"]

# Legacy integer selectors: 1 -> real part, 2 -> imaginary part.
_PROJECTION_CODES = {1: "real", 2: "imaginary"}


class InvalidParameter(ValueError):
    """Raised when beam/grating parameters or call arguments are degenerate."""


def as_projection(mode: Union[str, int]) -> Projection:
    """
    Normalize a projection selector to "real" or "imaginary".

    Accepts the strings "real" / "imaginary" (case-insensitive) and the
    integer codes 1 / 2.
    """
    if isinstance(mode, bool):
        raise InvalidParameter(f"Unsupported projection mode: {mode!r}")
    if isinstance(mode, (int, np.integer)):
        if int(mode) in _PROJECTION_CODES:
            return _PROJECTION_CODES[int(mode)]  # type: ignore[return-value]
        raise InvalidParameter(f"Unsupported projection code: {mode!r} (use 1=real, 2=imaginary)")
    if isinstance(mode, str):
        key = mode.strip().lower()
        if key in ("real", "imaginary"):
            return key  # type: ignore[return-value]
    raise InvalidParameter(f"Unsupported projection mode: {mode!r}")


@dataclass(frozen=True)
class BeamParams:
    """
    Beam and grating parameters for one slit of a tilted, wedged grating.

    Angles in radians, lengths in meters, velocity in m/s.

      tilt_angle:        beam angle relative to the grating normal
      wedge_angle:       taper angle of the grating bars (>= 0)
      slit_height:       slit opening (> 0)
      resolution:        integration samples per slit_height (> 0)
      grating_thickness: bar thickness along the beam (>= 0)
      grating_period:    grating period (!= 0)
      particle_velocity: longitudinal particle velocity (!= 0)
      account_gravity / account_van_der_waals: feature flags
      number_of_rows_fourier_coefficient_array: N, odd; harmonics
        n = -(N-1)/2 .. (N-1)/2 map to array index j = n + (N-1)/2
    """
    tilt_angle: float
    wedge_angle: float
    slit_height: float
    resolution: float
    grating_thickness: float
    grating_period: float
    particle_velocity: float
    account_gravity: bool = True
    account_van_der_waals: bool = True
    number_of_rows_fourier_coefficient_array: int = 41

    @property
    def n_harmonics(self) -> int:
        return int(self.number_of_rows_fourier_coefficient_array)

    @property
    def max_harmonic(self) -> int:
        """Largest |n| in the symmetric harmonic window."""
        return (self.n_harmonics - 1) // 2

    def harmonics(self) -> Array:
        """Harmonic indices n in array order (index j holds n = j - max_harmonic)."""
        m = self.max_harmonic
        return np.arange(-m, m + 1, dtype=int)

    def index_of(self, n: int) -> int:
        """Array index j for harmonic n."""
        if abs(int(n)) > self.max_harmonic:
            raise InvalidParameter(f"Harmonic n={n} outside window ±{self.max_harmonic}")
        return int(n) + self.max_harmonic

    def validate(self) -> None:
        """Raise InvalidParameter if any parameter is degenerate."""
        for name in ("tilt_angle", "wedge_angle", "slit_height", "resolution",
                     "grating_thickness", "grating_period", "particle_velocity"):
            value = getattr(self, name)
            try:
                finite = math.isfinite(float(value))
            except (TypeError, ValueError) as e:
                raise InvalidParameter(f"{name} must be a number (got {value!r}).") from e
            if not finite:
                raise InvalidParameter(f"{name} must be finite (got {value!r}).")

        if not (self.slit_height > 0.0):
            raise InvalidParameter("slit_height must be > 0.")
        if not (self.resolution > 0.0):
            raise InvalidParameter("resolution must be > 0.")
        if self.wedge_angle < 0.0:
            raise InvalidParameter("wedge_angle must be >= 0.")
        if self.grating_thickness < 0.0:
            raise InvalidParameter("grating_thickness must be >= 0.")
        if self.grating_period == 0.0:
            raise InvalidParameter("grating_period must be nonzero.")
        if self.particle_velocity == 0.0:
            raise InvalidParameter("particle_velocity must be nonzero.")

        N = self.number_of_rows_fourier_coefficient_array
        if isinstance(N, bool) or not isinstance(N, (int, np.integer)):
            raise InvalidParameter(f"number_of_rows_fourier_coefficient_array must be an int (got {N!r}).")
        if N < 1 or N % 2 == 0:
            raise InvalidParameter(
                f"number_of_rows_fourier_coefficient_array must be odd and >= 1 (got {N})."
            )
