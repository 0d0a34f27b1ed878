# src/mwi_grating/fourier.py
"""
mwi_grating.fourier

Fourier coefficients of the slit transmission phase.

For each harmonic n in the symmetric window and each sample x of the slit
grid, the total phase

  φ(n, x) = φ_vdW(x) + 2π n x / d + φ_g(z)

is projected onto cos (real part) or sin (imaginary part) and summed. The sum
is divided by the grid norm (the resolution for the default step) so each bin
holds the mean-valued coefficient for its harmonic.

compute_fourier_bin() is the accumulation primitive: it ADDS into a
caller-owned array and never resets it. Callers start from zeros.
compute_fourier_coefficients() and sweep_z() are convenience wrappers that
own their arrays.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import MutableSequence, Optional, Sequence, Union
import math

import numpy as np

from .constants import DEFAULT_CONSTANTS, PhysicalConstants
from .diagnostics import PhaseDiagnostics, report_phase_shifts
from .geometry import sample_grid, slit_bounds
from .logging_config import get_logger
from .phase import grating_phase, gravity_phase, van_der_waals_phase
from .types import BeamParams, InvalidParameter, as_projection

logger = get_logger(__name__)

Coefficients = Union[np.ndarray, MutableSequence[float]]


def _check_coefficients(coefficients: Coefficients, params: BeamParams) -> None:
    if isinstance(coefficients, np.ndarray):
        if coefficients.ndim != 1:
            raise InvalidParameter("coefficients must be a 1D array.")
        if not np.issubdtype(coefficients.dtype, np.floating):
            raise InvalidParameter(f"coefficients must have a float dtype (got {coefficients.dtype}).")
    n = len(coefficients)
    if n != params.n_harmonics:
        raise InvalidParameter(
            f"coefficients has length {n}, expected {params.n_harmonics} "
            "(number_of_rows_fourier_coefficient_array)."
        )


def compute_fourier_bin(
    coefficients: Coefficients,
    mode: Union[str, int],
    z_position: float,
    params: BeamParams,
    *,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
    step: Optional[float] = None,
    report: bool = True,
) -> PhaseDiagnostics:
    """
    Accumulate one projection of the slit phase into `coefficients`.

    Parameters
    ----------
    coefficients : 1D float array or list, length N
        Caller-owned bins; index j holds harmonic n = j - (N-1)/2.
        Values are added to, never overwritten.
    mode : {"real", "imaginary"} or {1, 2}
        Projection: cos for real, sin for imaginary.
    z_position : float
        Longitudinal beam position (m), sets the free-fall time.
    params : BeamParams
    constants : PhysicalConstants, optional
    step : float, optional
        Sample spacing (m). Defaults to slit_height / resolution.
    report : bool
        Print the gravity / VdW phase lines (real pass only).

    Returns
    -------
    PhaseDiagnostics
        Gravity phase, last sampled VdW phase, bounds and sample count.
    """
    params.validate()
    constants.validate()
    projection = as_projection(mode)
    if not math.isfinite(float(z_position)):
        raise InvalidParameter(f"z_position must be finite (got {z_position!r}).")
    _check_coefficients(coefficients, params)

    bounds = slit_bounds(params)
    grid = sample_grid(bounds, params, step=step)
    logger.debug(
        "slit bounds: regime=%s x_min=%.6e x_max=%.6e step=%.6e samples=%d",
        bounds.regime.value, bounds.x_min, bounds.x_max, grid.step, grid.count,
    )
    if grid.is_empty:
        logger.warning(
            "Empty slit sample grid (x_min=%.3e >= x_max=%.3e); coefficients unchanged.",
            bounds.x_min, bounds.x_max,
        )

    phase_g = gravity_phase(z_position, params, constants)

    x = grid.positions()
    phase_vdw = van_der_waals_phase(x, bounds.x_max, params, constants)
    base = phase_vdw + phase_g

    project = np.cos if projection == "real" else np.sin

    for j, n in enumerate(params.harmonics()):
        total = base + grating_phase(int(n), x, params.grating_period)
        coefficients[j] = coefficients[j] + float(np.sum(project(total))) / grid.norm

    diag = PhaseDiagnostics(
        phase_gravity=float(phase_g),
        phase_van_der_waals_last=float(phase_vdw[-1]) if grid.count else 0.0,
        x_min=bounds.x_min,
        x_max=bounds.x_max,
        regime=bounds.regime,
        n_samples=grid.count,
    )

    if projection == "real" and report:
        report_phase_shifts(diag)

    return diag


@dataclass(frozen=True)
class FourierCoefficients:
    """Real and imaginary coefficient arrays for one beam position."""
    z_position: float
    harmonics: np.ndarray
    real: np.ndarray
    imaginary: np.ndarray
    diagnostics: PhaseDiagnostics

    def as_complex(self) -> np.ndarray:
        return self.real + 1j * self.imaginary

    def magnitude(self) -> np.ndarray:
        return np.hypot(self.real, self.imaginary)

    def coefficient(self, n: int) -> complex:
        m = (self.harmonics.size - 1) // 2
        if abs(int(n)) > m:
            raise InvalidParameter(f"Harmonic n={n} outside window ±{m}")
        j = int(n) + m
        return complex(self.real[j], self.imaginary[j])


def compute_fourier_coefficients(
    z_position: float,
    params: BeamParams,
    *,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
    step: Optional[float] = None,
    report: bool = True,
) -> FourierCoefficients:
    """Allocate zeroed arrays and run the real then imaginary pass."""
    params.validate()
    N = params.n_harmonics
    real = np.zeros(N, dtype=float)
    imag = np.zeros(N, dtype=float)

    diag = compute_fourier_bin(real, "real", z_position, params, constants=constants, step=step, report=report)
    compute_fourier_bin(imag, "imaginary", z_position, params, constants=constants, step=step, report=report)

    return FourierCoefficients(
        z_position=float(z_position),
        harmonics=params.harmonics(),
        real=real,
        imaginary=imag,
        diagnostics=diag,
    )


@dataclass(frozen=True)
class FourierSweep:
    """Coefficients along the beam axis: arrays shaped (n_z, N)."""
    z_positions: np.ndarray
    harmonics: np.ndarray
    real: np.ndarray
    imaginary: np.ndarray
    phase_gravity: np.ndarray

    def magnitude(self) -> np.ndarray:
        return np.hypot(self.real, self.imaginary)


def sweep_z(
    z_positions: Sequence[float],
    params: BeamParams,
    *,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
    step: Optional[float] = None,
    report: bool = True,
) -> FourierSweep:
    """Evaluate compute_fourier_coefficients at each z position."""
    z = np.asarray(z_positions, dtype=float).reshape(-1)
    if z.size < 1:
        raise InvalidParameter("z_positions must contain at least one value.")

    params.validate()
    N = params.n_harmonics
    real = np.empty((z.size, N), dtype=float)
    imag = np.empty((z.size, N), dtype=float)
    phase_g = np.empty(z.size, dtype=float)

    for i, zi in enumerate(z):
        res = compute_fourier_coefficients(float(zi), params, constants=constants, step=step, report=report)
        real[i] = res.real
        imag[i] = res.imaginary
        phase_g[i] = res.diagnostics.phase_gravity

    logger.info("Computed %d harmonics at %d z positions.", N, z.size)

    return FourierSweep(
        z_positions=z,
        harmonics=params.harmonics(),
        real=real,
        imaginary=imag,
        phase_gravity=phase_g,
    )
