"""Path-loss models: FSPL and log-distance, in dB."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def distance_m(pos_a: Sequence[float], pos_b: Sequence[float]) -> float:
    """Euclidean distance (m) between two 3-D positions."""
    return float(np.linalg.norm(np.asarray(pos_a, dtype=np.float64) - np.asarray(pos_b, dtype=np.float64)))


def free_space_path_loss(distance: np.ndarray | float, freq_mhz: float) -> np.ndarray:
    """Free-Space Path Loss (Friis).

    FSPL(dB) = 20·log10(d) + 20·log10(f) + 32.44
    where *d* in km, *f* in MHz. Distances below 1 mm are clipped.
    """
    d_km = np.asarray(distance, dtype=np.float64) / 1000.0
    d_km = np.clip(d_km, 1e-6, None)
    return 20.0 * np.log10(d_km) + 20.0 * np.log10(freq_mhz) + 32.44  # type: ignore[return-value]


def log_distance_path_loss(
    distance: np.ndarray | float,
    freq_mhz: float,
    n: float = 3.0,
    d0: float = 1.0,
    reference_loss_db: float | None = None,
) -> np.ndarray:
    """Log-distance path-loss model.

    PL(d) = PL(d0) + 10·n·log10(d/d0)

    PL(d0) defaults to FSPL at reference distance *d0*; pass
    *reference_loss_db* to pin it (e.g. 46.6777 dB at 1 m, 5.15 GHz).
    Distances below *d0* lose PL(d0).
    """
    if reference_loss_db is None:
        reference_loss_db = float(free_space_path_loss(d0, freq_mhz))
    d = np.asarray(distance, dtype=np.float64)
    d = np.clip(d, d0, None)
    return reference_loss_db + 10.0 * n * np.log10(d / d0)  # type: ignore[return-value]
