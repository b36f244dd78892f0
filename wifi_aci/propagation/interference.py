"""Noise-floor and power-summation helpers."""

from __future__ import annotations

from typing import Iterable

import numpy as np


def noise_power_dbm(bandwidth_hz: float, temperature_k: float = 290.0) -> float:
    """Thermal noise power in dBm.

    N = k·T·B  →  N(dBm) = 10·log10(k·T·B) + 30
    """
    k_b = 1.380649e-23  # Boltzmann constant (J/K)
    n_watts = k_b * temperature_k * bandwidth_hz
    return float(10.0 * np.log10(n_watts) + 30.0)


def dbm_to_mw(power_dbm: np.ndarray | float) -> np.ndarray:
    return 10.0 ** (np.asarray(power_dbm, dtype=np.float64) / 10.0)  # type: ignore[return-value]


def mw_to_dbm(power_mw: np.ndarray | float) -> np.ndarray:
    return 10.0 * np.log10(np.asarray(power_mw, dtype=np.float64))  # type: ignore[return-value]


def total_power_dbm(powers_dbm: Iterable[float], floor_dbm: float | None = None) -> float:
    """Sum powers in the linear domain and convert back to dBm.

    *floor_dbm* (e.g. thermal noise) is added to the sum. Returns ``-inf``
    only when there is nothing to sum and no floor.
    """
    powers = list(powers_dbm)
    total_mw = float(np.sum(dbm_to_mw(powers))) if powers else 0.0
    if floor_dbm is not None:
        total_mw += float(dbm_to_mw(floor_dbm))
    if total_mw <= 0.0:
        return float("-inf")
    return float(mw_to_dbm(total_mw))
