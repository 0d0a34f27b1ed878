#!/usr/bin/env python3
"""
experiments/compute_grating_coefficients.py

Grating transmission-phase Fourier coefficients along the beam axis.

Given a YAML run config (see data/configs/), this script:
- computes the real/imaginary Fourier coefficients at every z position
- writes an audit CSV (z_m, n, real, imaginary, magnitude)
- plots |c_n| per harmonic for each z position

Outputs (git-ignored):
- outputs/<config_stem>_coefficients.csv
- figures/derived/<config_stem>_magnitude.png
"""

from __future__ import annotations

from pathlib import Path
import argparse
import csv
import logging

import numpy as np
import matplotlib.pyplot as plt

from mwi_grating.config import load_config
from mwi_grating.fourier import FourierSweep, sweep_z
from mwi_grating.logging_config import LOG_LEVELS, configure_logging, enable_file_logging

REPO_ROOT = Path(__file__).resolve().parents[1]
FIG_DIR = REPO_ROOT / "figures" / "derived"
OUT_DIR = REPO_ROOT / "outputs"


def banner(tag: str, **kv: object) -> None:
    items = " ".join([f"{k}={v}" for k, v in kv.items()])
    print(f"[{tag}] {items}".rstrip())


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def write_coefficients_csv(path: Path, sweep: FourierSweep) -> None:
    """
    Columns:
      z_m, n, real, imaginary, magnitude
    """
    mag = sweep.magnitude()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["z_m", "n", "real", "imaginary", "magnitude"])
        for i, z in enumerate(sweep.z_positions):
            for j, n in enumerate(sweep.harmonics):
                w.writerow([
                    f"{z:.12e}",
                    int(n),
                    f"{sweep.real[i, j]:.12e}",
                    f"{sweep.imaginary[i, j]:.12e}",
                    f"{mag[i, j]:.12e}",
                ])


def plot_magnitudes(path: Path, sweep: FourierSweep, title: str) -> None:
    mag = sweep.magnitude()
    n = sweep.harmonics
    n_z = sweep.z_positions.size
    width = 0.8 / n_z

    plt.figure(figsize=(9.0, 5.0))
    for i, z in enumerate(sweep.z_positions):
        offset = (i - 0.5 * (n_z - 1)) * width
        plt.bar(n + offset, mag[i], width=width, label=f"z = {z:.3e} m")
    plt.xlabel("Harmonic n")
    plt.ylabel("|c_n|")
    plt.title(title)
    plt.legend()
    plt.tight_layout()
    plt.savefig(path, dpi=200)
    plt.close()


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", required=True, help="YAML run config (relative to repo root or absolute)")
    ap.add_argument("--out-dir", default=None, help="Override output directory for CSV and figure")
    ap.add_argument("--no-plot", action="store_true", help="Skip the magnitude figure")
    ap.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS, help="Console log level")
    ap.add_argument("--log-file", default=None, help="Also write a DEBUG log to this file")
    args = ap.parse_args()

    configure_logging(logging.getLevelName(args.log_level) if args.log_level else None)
    if args.log_file:
        enable_file_logging(args.log_file)

    cfg_arg = Path(args.config)
    cfg_path = (REPO_ROOT / cfg_arg).resolve() if not cfg_arg.is_absolute() else cfg_arg
    cfg = load_config(cfg_path)
    beam = cfg.beam

    banner(
        "GRATING",
        config=cfg_path.name,
        tilt_rad=f"{beam.tilt_angle:.3e}",
        wedge_rad=f"{beam.wedge_angle:.3e}",
        slit_m=f"{beam.slit_height:.3e}",
        period_m=f"{beam.grating_period:.3e}",
        thickness_m=f"{beam.grating_thickness:.3e}",
        v_m_per_s=f"{beam.particle_velocity:.3e}",
        N=beam.n_harmonics,
        gravity=beam.account_gravity,
        vdw=beam.account_van_der_waals,
        n_z=int(cfg.z_positions.size),
    )

    sweep = sweep_z(cfg.z_positions, beam, constants=cfg.constants)

    if not np.all(np.isfinite(sweep.real)) or not np.all(np.isfinite(sweep.imaginary)):
        raise RuntimeError("Non-finite Fourier coefficients produced; check the configuration.")

    out_dir = Path(args.out_dir) if args.out_dir else OUT_DIR
    fig_dir = Path(args.out_dir) if args.out_dir else FIG_DIR
    ensure_dir(out_dir)

    out_csv = out_dir / f"{cfg_path.stem}_coefficients.csv"
    write_coefficients_csv(out_csv, sweep)
    written = [out_csv]

    if not args.no_plot:
        ensure_dir(fig_dir)
        out_png = fig_dir / f"{cfg_path.stem}_magnitude.png"
        plot_magnitudes(out_png, sweep, title=f"Grating phase Fourier magnitudes ({cfg_path.stem})")
        written.append(out_png)

    banner("GRATING_OUT", **{p.suffix.lstrip("."): str(p) for p in written})

    print("Grating coefficient run complete.")
    print("Wrote:")
    for p in written:
        print(f"  {p}")


if __name__ == "__main__":
    main()
