from __future__ import annotations

import pytest

from mwi_grating.types import BeamParams


def make_params(**overrides) -> BeamParams:
    base = dict(
        tilt_angle=0.0,
        wedge_angle=0.1,
        slit_height=100e-9,
        resolution=10,
        grating_thickness=50e-9,
        grating_period=200e-9,
        particle_velocity=500.0,
        account_gravity=True,
        account_van_der_waals=True,
        number_of_rows_fourier_coefficient_array=3,
    )
    base.update(overrides)
    return BeamParams(**base)


@pytest.fixture
def params() -> BeamParams:
    """Normal-incidence reference case (100 nm slit, 200 nm period, N=3)."""
    return make_params()


@pytest.fixture
def quiet_params() -> BeamParams:
    """Reference case with gravity and Van der Waals switched off."""
    return make_params(account_gravity=False, account_van_der_waals=False)
