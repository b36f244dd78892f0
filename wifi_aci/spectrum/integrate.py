"""Trapezoidal integration of piecewise-linear curves."""

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


def trapezoid_area(points: Iterable[Tuple[float, float]]) -> float:
    """Area under an ordered piecewise-linear curve.

    A = Σ (y_i + y_{i+1}) · (x_{i+1} − x_i) / 2

    Fewer than two points give ``0.0``.

    Raises
    ------
    ValueError
        If an item is not an ``(x, y)`` pair, or the x coordinates are not
        strictly increasing.
    """
    pts = np.asarray(list(points), dtype=np.float64)
    if pts.size == 0:
        return 0.0
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"expected (x, y) pairs, got an array of shape {pts.shape}")
    if len(pts) < 2:
        return 0.0
    x, y = pts[:, 0], pts[:, 1]
    dx = np.diff(x)
    if np.any(dx <= 0):
        raise ValueError("x coordinates must be strictly increasing")
    return float(np.sum((y[:-1] + y[1:]) * dx / 2.0))
