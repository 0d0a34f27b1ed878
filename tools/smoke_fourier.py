# tools/smoke_fourier.py
import numpy as np
from mwi_grating.types import BeamParams
from mwi_grating.geometry import slit_bounds
from mwi_grating.fourier import compute_fourier_bin, compute_fourier_coefficients

def main() -> None:
    params = BeamParams(
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

    b = slit_bounds(params)
    assert np.isclose(b.x_min, -b.x_max, rtol=0.0, atol=1e-20)

    res = compute_fourier_coefficients(1e-3, params)
    assert res.real.shape == (3,)
    assert np.all(np.isfinite(res.real))
    assert np.all(np.isfinite(res.imaginary))
    assert np.all(res.magnitude() <= res.diagnostics.n_samples / params.resolution + 1e-12)

    real = np.zeros(3)
    compute_fourier_bin(real, "real", 1e-3, params, report=False)
    assert np.allclose(real, res.real)

    print("OK: Fourier smoke test passed.")

if __name__ == "__main__":
    main()
