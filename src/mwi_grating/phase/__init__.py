"""
mwi_grating.phase

The three additive phase contributions integrated across a slit:

- grating: diffraction phase per harmonic and position
- gravity: free-fall phase, one scalar per beam position z
- van_der_waals: wall interaction phase per position, zero on the walls
"""

from .grating import grating_phase  # noqa: F401
from .gravity import gravity_phase, time_free_fall  # noqa: F401
from .van_der_waals import van_der_waals_phase, wall_distances_nm  # noqa: F401
