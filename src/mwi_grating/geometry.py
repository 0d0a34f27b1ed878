# src/mwi_grating/geometry.py
"""
mwi_grating.geometry

Integration bounds across one slit of a tilted, wedged grating, and the
fixed-step sample grid used to integrate over them.

Bounds depend on the tilt regime (sign of the tilt, and whether |tilt|
exceeds the wedge angle). Once |tilt| exceeds the wedge angle the beam crosses
the bar thickness diagonally and one bound moves by

    t * (tan(wedge) - tan(tilt))

With h = slit_height, r = resolution, θ = tilt:

  regime                  x_min                                 x_max
  POSITIVE_WITHIN_WEDGE   h (1/r - cos θ / 2)                   h cos θ / 2 - h/r
  POSITIVE_BEYOND_WEDGE   h (1/r - cos θ / 2)                   h cos θ / 2 - h/r + t (tan w - tan θ)
  NEGATIVE_WITHIN_WEDGE   -h cos θ / 2 + h/r                    h cos θ / 2 - h/r
  NEGATIVE_BEYOND_WEDGE   -h cos θ / 2 + h/r - t (tan w - tan θ) h cos θ / 2 - h/r

All functions here are pure.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import math

import numpy as np

from .types import Array, BeamParams, InvalidParameter

# Upper limit on samples per slit; a finer custom step is rejected.
MAX_SAMPLES: int = 100_000_000

# Relative slack (in units of the step) below which a sample is treated as
# landing on x_max and therefore excluded.
_GRID_EDGE_RTOL: float = 1.0e-9


class TiltRegime(Enum):
    POSITIVE_WITHIN_WEDGE = "positive_within_wedge"
    POSITIVE_BEYOND_WEDGE = "positive_beyond_wedge"
    NEGATIVE_WITHIN_WEDGE = "negative_within_wedge"
    NEGATIVE_BEYOND_WEDGE = "negative_beyond_wedge"

    @property
    def beyond_wedge(self) -> bool:
        return self in (TiltRegime.POSITIVE_BEYOND_WEDGE, TiltRegime.NEGATIVE_BEYOND_WEDGE)


@dataclass(frozen=True)
class SlitBounds:
    """Transverse integration interval [x_min, x_max) in meters."""
    x_min: float
    x_max: float
    regime: TiltRegime

    @property
    def width(self) -> float:
        return float(self.x_max - self.x_min)


@dataclass(frozen=True)
class SampleGrid:
    """
    Fixed-step discretization of [x_min, x_max).

      positions: x_min + k * step, k = 0 .. count-1
      norm:      divisor turning a sample sum into a coefficient
                 (resolution for the default step h/r)
    """
    x_start: float
    step: float
    count: int
    norm: float

    def positions(self) -> Array:
        return self.x_start + self.step * np.arange(self.count, dtype=float)

    @property
    def is_empty(self) -> bool:
        return self.count == 0


def classify_tilt(tilt_angle: float, wedge_angle: float) -> TiltRegime:
    """Pick the bounds regime: sign of tilt first, then |tilt| against the wedge angle."""
    if tilt_angle >= 0.0:
        if tilt_angle <= wedge_angle:
            return TiltRegime.POSITIVE_WITHIN_WEDGE
        return TiltRegime.POSITIVE_BEYOND_WEDGE
    if abs(tilt_angle) <= wedge_angle:
        return TiltRegime.NEGATIVE_WITHIN_WEDGE
    return TiltRegime.NEGATIVE_BEYOND_WEDGE


def slit_bounds(params: BeamParams) -> SlitBounds:
    """Compute (x_min, x_max) for the slit under the current tilt."""
    h = float(params.slit_height)
    r = float(params.resolution)
    tilt = float(params.tilt_angle)
    wedge = float(params.wedge_angle)
    t = float(params.grating_thickness)

    regime = classify_tilt(tilt, wedge)
    half_open = h * math.cos(tilt) / 2.0
    edge = h / r
    diagonal = t * (math.tan(wedge) - math.tan(tilt))

    if regime is TiltRegime.POSITIVE_WITHIN_WEDGE:
        x_min = h * (1.0 / r - math.cos(tilt) / 2.0)
        x_max = half_open - edge
    elif regime is TiltRegime.POSITIVE_BEYOND_WEDGE:
        x_min = h * (1.0 / r - math.cos(tilt) / 2.0)
        x_max = half_open - edge + diagonal
    elif regime is TiltRegime.NEGATIVE_WITHIN_WEDGE:
        x_min = -half_open + edge
        x_max = half_open - edge
    else:
        x_min = -half_open + edge - diagonal
        x_max = half_open - edge

    return SlitBounds(x_min=float(x_min), x_max=float(x_max), regime=regime)


def sample_grid(bounds: SlitBounds, params: BeamParams, step: Optional[float] = None) -> SampleGrid:
    """
    Build the sample grid over [x_min, x_max).

    The default step is slit_height / resolution and the grid is then
    normalized by resolution. A custom step keeps the same meaning: the
    norm becomes slit_height / step.
    """
    if step is None:
        step_f = float(params.slit_height) / float(params.resolution)
        norm = float(params.resolution)
    else:
        step_f = float(step)
        if not (math.isfinite(step_f) and step_f > 0.0):
            raise InvalidParameter(f"step must be finite and > 0 (got {step!r}).")
        norm = float(params.slit_height) / step_f

    span = bounds.x_max - bounds.x_min
    if span <= 0.0:
        count = 0
    else:
        n_steps = span / step_f
        if n_steps > MAX_SAMPLES:
            raise InvalidParameter(
                f"step={step_f:.3e} gives {n_steps:.3e} samples across the slit (limit {MAX_SAMPLES:.0e})."
            )
        count = int(math.ceil(n_steps - _GRID_EDGE_RTOL))

    return SampleGrid(x_start=float(bounds.x_min), step=step_f, count=max(count, 0), norm=norm)
