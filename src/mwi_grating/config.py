# src/mwi_grating/config.py
"""
mwi_grating.config

YAML run configuration -> BeamParams, PhysicalConstants and z positions.

Schema (see data/configs/*.yaml):

  beam:
    tilt_angle_rad, wedge_angle_rad, slit_height_m, resolution,
    grating_thickness_m, grating_period_m, particle_velocity_m_per_s,
    account_gravity, account_van_der_waals, n_harmonics
  species: hydrogen            (optional preset)
  constants:                   (optional overrides)
    c3_mev_nm3, hbar_mev_s, gravity_acceleration_m_per_s2
  run:
    z_positions_m: [..]        (optional, default [0.0])
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import numpy as np
import yaml

from .constants import DEFAULT_CONSTANTS, PhysicalConstants, constants_for_species
from .logging_config import get_logger
from .types import BeamParams, InvalidParameter

logger = get_logger(__name__)

# yaml key -> BeamParams field
_BEAM_FLOAT_KEYS = {
    "tilt_angle_rad": "tilt_angle",
    "wedge_angle_rad": "wedge_angle",
    "slit_height_m": "slit_height",
    "resolution": "resolution",
    "grating_thickness_m": "grating_thickness",
    "grating_period_m": "grating_period",
    "particle_velocity_m_per_s": "particle_velocity",
}
_BEAM_BOOL_KEYS = {
    "account_gravity": "account_gravity",
    "account_van_der_waals": "account_van_der_waals",
}
_CONSTANT_KEYS = {
    "c3_mev_nm3": "c3",
    "hbar_mev_s": "hbar",
    "gravity_acceleration_m_per_s2": "gravity_acceleration",
}


@dataclass(frozen=True)
class RunConfig:
    beam: BeamParams
    constants: PhysicalConstants
    z_positions: np.ndarray


def _section(raw: Mapping[str, Any], key: str, *, required: bool) -> Dict[str, Any]:
    sec = raw.get(key)
    if sec is None:
        if required:
            raise InvalidParameter(f"Config is missing required section '{key}'.")
        return {}
    if not isinstance(sec, dict):
        raise InvalidParameter(f"Config section '{key}' must be a mapping.")
    return sec


def _as_float(sec: Mapping[str, Any], key: str) -> float:
    if key not in sec:
        raise InvalidParameter(f"Config key 'beam.{key}' is required.")
    value = sec[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(f"Config key 'beam.{key}' must be a number (got {value!r}).")
    return float(value)


def beam_from_dict(sec: Mapping[str, Any]) -> BeamParams:
    kwargs: Dict[str, Any] = {field: _as_float(sec, key) for key, field in _BEAM_FLOAT_KEYS.items()}

    for key, field in _BEAM_BOOL_KEYS.items():
        value = sec.get(key, True)
        if not isinstance(value, bool):
            raise InvalidParameter(f"Config key 'beam.{key}' must be true/false (got {value!r}).")
        kwargs[field] = value

    n = sec.get("n_harmonics", 41)
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidParameter(f"Config key 'beam.n_harmonics' must be an integer (got {n!r}).")
    kwargs["number_of_rows_fourier_coefficient_array"] = n

    beam = BeamParams(**kwargs)
    beam.validate()
    return beam


def constants_from_dict(raw: Mapping[str, Any]) -> PhysicalConstants:
    species = raw.get("species")
    base = constants_for_species(str(species)) if species is not None else DEFAULT_CONSTANTS

    overrides: Dict[str, float] = {}
    for key, value in _section(raw, "constants", required=False).items():
        if key not in _CONSTANT_KEYS:
            raise InvalidParameter(f"Unknown constants key '{key}' (known: {', '.join(_CONSTANT_KEYS)}).")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidParameter(f"Config key 'constants.{key}' must be a number (got {value!r}).")
        overrides[_CONSTANT_KEYS[key]] = float(value)

    constants = base.with_overrides(**overrides) if overrides else base
    constants.validate()
    return constants


def config_from_dict(raw: Mapping[str, Any]) -> RunConfig:
    if not isinstance(raw, dict):
        raise InvalidParameter("Config root must be a mapping.")

    beam = beam_from_dict(_section(raw, "beam", required=True))
    constants = constants_from_dict(raw)

    run = _section(raw, "run", required=False)
    z_raw = run.get("z_positions_m", [0.0])
    if not isinstance(z_raw, list) or not z_raw:
        raise InvalidParameter("Config key 'run.z_positions_m' must be a non-empty list.")
    try:
        z = np.asarray([float(v) for v in z_raw], dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"Config key 'run.z_positions_m' must hold numbers: {z_raw!r}") from e
    if not np.all(np.isfinite(z)):
        raise InvalidParameter("Config key 'run.z_positions_m' must hold finite values.")

    return RunConfig(beam=beam, constants=constants, z_positions=z)


def load_config(path: Union[str, Path]) -> RunConfig:
    """Read and validate a YAML run configuration."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing config: {path}")

    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise InvalidParameter(f"Malformed YAML in {path}: {e}") from e

    cfg = config_from_dict(raw)
    logger.info(
        "Loaded %s: N=%d, tilt=%.3e rad, wedge=%.3e rad, %d z positions",
        path.name,
        cfg.beam.n_harmonics,
        cfg.beam.tilt_angle,
        cfg.beam.wedge_angle,
        cfg.z_positions.size,
    )
    return cfg
