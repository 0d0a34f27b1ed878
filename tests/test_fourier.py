from __future__ import annotations

import logging
import os
import subprocess
import sys

import numpy as np
import pytest

from mwi_grating.fourier import compute_fourier_bin, compute_fourier_coefficients, sweep_z
from mwi_grating.geometry import TiltRegime, sample_grid, slit_bounds
from mwi_grating.phase import gravity_phase, van_der_waals_phase
from mwi_grating.types import InvalidParameter

from conftest import make_params

Z = 1e-3


def _phase_lines(text: str) -> list[str]:
    return [
        line for line in text.splitlines()
        if line.startswith("Gravitational phase shift") or line.startswith("Van der Waals phase shift")
    ]


# -----------------------------------------------------------------------------
# Core accumulation
# -----------------------------------------------------------------------------

def test_end_to_end_reference_case(params):
    res = compute_fourier_coefficients(Z, params, report=False)

    assert res.real.shape == (3,)
    assert res.imaginary.shape == (3,)
    assert np.all(np.isfinite(res.real))
    assert np.all(np.isfinite(res.imaginary))
    np.testing.assert_array_equal(res.harmonics, [-1, 0, 1])

    # each bin is a mean of unit-modulus terms over 8 of 10 slots
    assert res.diagnostics.n_samples == 8
    assert np.all(res.magnitude() <= 0.8 + 1e-12)
    assert res.diagnostics.regime is TiltRegime.POSITIVE_WITHIN_WEDGE
    assert res.diagnostics.phase_gravity == pytest.approx(gravity_phase(Z, params))


def test_without_offsets_harmonics_are_conjugate(quiet_params):
    res = compute_fourier_coefficients(Z, quiet_params, report=False)
    c = res.as_complex()

    np.testing.assert_allclose(c[0], np.conj(c[2]), rtol=1e-12, atol=1e-15)
    # n = 0: every sample contributes cos(0) = 1
    assert res.real[1] == pytest.approx(0.8)
    assert res.imaginary[1] == 0.0
    assert res.coefficient(1) == pytest.approx(complex(res.real[2], res.imaginary[2]))


def test_single_harmonic_is_mean_of_offset_phase():
    p = make_params(number_of_rows_fourier_coefficient_array=1, tilt_angle=0.02, resolution=40)
    b = slit_bounds(p)
    x = sample_grid(b, p).positions()
    offset = van_der_waals_phase(x, b.x_max, p) + gravity_phase(Z, p)

    real = np.zeros(1)
    imag = np.zeros(1)
    compute_fourier_bin(real, "real", Z, p, report=False)
    compute_fourier_bin(imag, "imaginary", Z, p)

    assert real[0] == pytest.approx(np.sum(np.cos(offset)) / p.resolution, rel=1e-12)
    assert imag[0] == pytest.approx(np.sum(np.sin(offset)) / p.resolution, rel=1e-12)


def test_repeated_calls_add(params):
    once = np.zeros(3)
    compute_fourier_bin(once, "real", Z, params, report=False)

    twice = np.zeros(3)
    compute_fourier_bin(twice, "real", Z, params, report=False)
    compute_fourier_bin(twice, "real", Z, params, report=False)

    np.testing.assert_allclose(twice, 2.0 * once, rtol=1e-15)


def test_existing_values_are_kept(params):
    base = np.zeros(3)
    compute_fourier_bin(base, "imaginary", Z, params)

    seeded = np.array([1.0, -2.0, 0.5])
    compute_fourier_bin(seeded, "imaginary", Z, params)

    np.testing.assert_allclose(seeded - np.array([1.0, -2.0, 0.5]), base, rtol=1e-12, atol=1e-15)


def test_plain_list_is_accepted(params):
    arr = np.zeros(3)
    lst = [0.0, 0.0, 0.0]
    compute_fourier_bin(arr, "real", Z, params, report=False)
    compute_fourier_bin(lst, "real", Z, params, report=False)
    np.testing.assert_allclose(lst, arr)


def test_legacy_mode_codes_match_names(params):
    by_name = np.zeros(3)
    by_code = np.zeros(3)
    compute_fourier_bin(by_name, "imaginary", Z, params)
    compute_fourier_bin(by_code, 2, Z, params)
    np.testing.assert_array_equal(by_name, by_code)


def test_custom_step_keeps_normalization(quiet_params):
    fine = compute_fourier_coefficients(Z, quiet_params, step=quiet_params.slit_height / 40, report=False)
    assert fine.diagnostics.n_samples == 32
    assert fine.real[1] == pytest.approx(0.8)


@pytest.mark.parametrize("tilt, wedge", [(0.3, 0.1), (-0.3, 0.1), (-0.05, 0.1)])
def test_tilted_grating_stays_finite(tilt, wedge):
    p = make_params(tilt_angle=tilt, wedge_angle=wedge, resolution=100, number_of_rows_fourier_coefficient_array=7)
    res = compute_fourier_coefficients(5e-3, p, report=False)
    assert np.all(np.isfinite(res.as_complex()))
    assert res.diagnostics.n_samples > 0


def test_empty_grid_leaves_coefficients(caplog):
    p = make_params(resolution=2)
    coeffs = np.array([0.25, 0.0, -0.25])
    with caplog.at_level(logging.WARNING, logger="mwi_grating.fourier"):
        diag = compute_fourier_bin(coeffs, "real", Z, p, report=False)

    np.testing.assert_array_equal(coeffs, [0.25, 0.0, -0.25])
    assert diag.n_samples == 0
    assert diag.phase_van_der_waals_last == 0.0
    assert any("Empty slit sample grid" in r.getMessage() for r in caplog.records)


# -----------------------------------------------------------------------------
# Diagnostics output
# -----------------------------------------------------------------------------

def test_real_pass_prints_once_per_pair(params, capsys):
    compute_fourier_coefficients(Z, params)
    lines = _phase_lines(capsys.readouterr().out)
    assert len(lines) == 2
    assert lines[0].endswith(" rad")


def test_imaginary_pass_is_silent(params, capsys):
    compute_fourier_bin(np.zeros(3), "imaginary", Z, params)
    assert _phase_lines(capsys.readouterr().out) == []


def test_report_flag_silences_real_pass(params, capsys):
    compute_fourier_bin(np.zeros(3), "real", Z, params, report=False)
    assert _phase_lines(capsys.readouterr().out) == []


def test_last_vdw_phase_is_last_sample(params):
    b = slit_bounds(params)
    x = sample_grid(b, params).positions()
    diag = compute_fourier_bin(np.zeros(3), "real", Z, params, report=False)
    assert diag.phase_van_der_waals_last == pytest.approx(van_der_waals_phase(x, b.x_max, params)[-1])


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "overrides",
    [
        {"resolution": 0.0},
        {"resolution": -5.0},
        {"grating_period": 0.0},
        {"particle_velocity": 0.0},
        {"slit_height": 0.0},
        {"wedge_angle": -0.1},
        {"grating_thickness": -1e-9},
        {"tilt_angle": float("nan")},
        {"number_of_rows_fourier_coefficient_array": 4},
        {"number_of_rows_fourier_coefficient_array": 0},
        {"number_of_rows_fourier_coefficient_array": -3},
        {"number_of_rows_fourier_coefficient_array": 3.0},
    ],
)
def test_degenerate_parameters_rejected(overrides):
    p = make_params(**overrides)
    with pytest.raises(InvalidParameter):
        compute_fourier_bin(np.zeros(3), "real", Z, p)


@pytest.mark.parametrize("mode", [0, 3, "complex", True, None])
def test_unknown_mode_rejected(params, mode):
    with pytest.raises(InvalidParameter):
        compute_fourier_bin(np.zeros(3), mode, Z, params)


def test_coefficient_shape_checked(params):
    with pytest.raises(InvalidParameter):
        compute_fourier_bin(np.zeros(5), "real", Z, params)
    with pytest.raises(InvalidParameter):
        compute_fourier_bin(np.zeros((3, 1)), "real", Z, params)
    with pytest.raises(InvalidParameter):
        compute_fourier_bin(np.zeros(3, dtype=int), "real", Z, params)


def test_non_finite_z_rejected(params):
    with pytest.raises(InvalidParameter):
        compute_fourier_bin(np.zeros(3), "real", float("inf"), params)


def test_invalid_parameter_is_value_error(params):
    with pytest.raises(ValueError):
        compute_fourier_bin(np.zeros(2), "real", Z, params)


# -----------------------------------------------------------------------------
# Sweep along z
# -----------------------------------------------------------------------------

def test_sweep_matches_single_positions(params):
    zs = [0.0, 1e-3, 4e-3]
    sweep = sweep_z(zs, params, report=False)

    assert sweep.real.shape == (3, 3)
    assert sweep.phase_gravity[0] == 0.0
    for i, z in enumerate(zs):
        single = compute_fourier_coefficients(z, params, report=False)
        np.testing.assert_array_equal(sweep.real[i], single.real)
        np.testing.assert_array_equal(sweep.imaginary[i], single.imaginary)


def test_sweep_gravity_off_is_z_independent(quiet_params):
    sweep = sweep_z([0.0, 1e-2, 1.0], quiet_params, report=False)
    np.testing.assert_array_equal(sweep.real[0], sweep.real[2])
    np.testing.assert_array_equal(sweep.imaginary[1], sweep.imaginary[2])


def test_sweep_requires_positions(params):
    with pytest.raises(InvalidParameter):
        sweep_z([], params)


# -----------------------------------------------------------------------------
# stdout contract
# -----------------------------------------------------------------------------

_EMPTY_GRID_RUN = """
import numpy as np
from mwi_grating import BeamParams, compute_fourier_bin
p = BeamParams(
    tilt_angle=0.0, wedge_angle=0.1, slit_height=100e-9, resolution=2,
    grating_thickness=50e-9, grating_period=200e-9, particle_velocity=500.0,
    number_of_rows_fourier_coefficient_array=3,
)
compute_fourier_bin(np.zeros(3), {mode!r}, 1e-3, p)
"""


def _run_python(code: str) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env.pop("MWI_GRATING_LOG_LEVEL", None)
    return subprocess.run(
        [sys.executable, "-c", code], capture_output=True, text=True, env=env, check=True
    )


def test_imaginary_pass_writes_nothing_to_stdout():
    proc = _run_python(_EMPTY_GRID_RUN.format(mode="imaginary"))
    assert proc.stdout.splitlines() == []


def test_real_pass_stdout_is_only_phase_lines():
    proc = _run_python(_EMPTY_GRID_RUN.format(mode="real"))
    lines = proc.stdout.splitlines()
    assert len(lines) == 2
    assert _phase_lines(proc.stdout) == lines


def test_import_leaves_root_logger_alone():
    proc = _run_python(
        "import logging\n"
        "before = list(logging.getLogger().handlers), logging.getLogger().level\n"
        "import mwi_grating.fourier, mwi_grating.config\n"
        "after = list(logging.getLogger().handlers), logging.getLogger().level\n"
        "print(before == after)\n"
    )
    assert proc.stdout.strip() == "True"
