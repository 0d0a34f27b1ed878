# src/mwi_grating/diagnostics.py
"""
mwi_grating.diagnostics

Scalar phase values reported alongside a coefficient computation:
- gravitational phase (one value per beam position)
- Van der Waals phase at the last integrated sample

The gravity and VdW values are identical for the real and imaginary passes,
so only the real pass reports them.
"""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import TiltRegime
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PhaseDiagnostics:
    phase_gravity: float
    phase_van_der_waals_last: float
    x_min: float
    x_max: float
    regime: TiltRegime
    n_samples: int


def format_phase_shifts(diag: PhaseDiagnostics) -> list[str]:
    return [
        f"Gravitational phase shift: {diag.phase_gravity:.3e} rad",
        f"Van der Waals phase shift: {diag.phase_van_der_waals_last:.3e} rad",
    ]


def report_phase_shifts(diag: PhaseDiagnostics) -> None:
    """Print the two phase-shift lines to stdout."""
    for line in format_phase_shifts(diag):
        print(line)
    logger.debug(
        "phase shifts: gravity=%.6e rad, vdw_last=%.6e rad (regime=%s, samples=%d)",
        diag.phase_gravity,
        diag.phase_van_der_waals_last,
        diag.regime.value,
        diag.n_samples,
    )
