"""Overlap region of two spectral masks.

The overlap curve is the pointwise minimum of two piecewise-linear masks on the
intersection of their supports. Its breakpoints are the control points of both
masks inside that interval plus every frequency where the two masks cross.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .integrate import trapezoid_area
from .mask import SpectralMask


@dataclass(frozen=True, eq=False)
class OverlapCurve:
    """Ordered ``(frequency, density)`` points; frequencies strictly increasing."""

    frequencies: np.ndarray
    densities: np.ndarray

    def __post_init__(self) -> None:
        self.frequencies.setflags(write=False)
        self.densities.setflags(write=False)

    @classmethod
    def empty(cls) -> "OverlapCurve":
        return cls(np.array([], dtype=np.float64), np.array([], dtype=np.float64))

    def __len__(self) -> int:
        return len(self.frequencies)

    @property
    def is_degenerate(self) -> bool:
        """True when the curve cannot enclose any area (fewer than 2 points)."""
        return len(self) < 2

    def points(self) -> list[tuple[float, float]]:
        return list(zip(self.frequencies.tolist(), self.densities.tolist()))

    def area(self) -> float:
        return trapezoid_area(self.points())


def segment_crossing(
    x0: float,
    x1: float,
    a: Tuple[float, float],
    b: Tuple[float, float],
) -> Optional[Tuple[float, float]]:
    """Crossing of two line segments sharing the interval [x0, x1].

    *a* and *b* hold each segment's values at ``x0`` and ``x1``. Equating

        y = a0 + s_a·(x − x0)   and   y = b0 + s_b·(x − x0)

    gives ``x = x0 + (b0 − a0) / (s_a − s_b)``. Returns ``None`` unless the two
    segments swap order strictly inside the interval.
    """
    a0, a1 = a
    b0, b1 = b
    if not ((a0 < b0 and a1 > b1) or (a0 > b0 and a1 < b1)):
        return None
    s_a = (a1 - a0) / (x1 - x0)
    s_b = (b1 - b0) / (x1 - x0)
    x = x0 + (b0 - a0) / (s_a - s_b)
    if not x0 < x < x1:
        # Rounding pushed the crossing onto an existing breakpoint.
        return None
    y = a0 + s_a * (x - x0)
    return x, y


def overlap_curve(a: SpectralMask, b: SpectralMask) -> OverlapCurve:
    """Merge two masks into their overlap curve.

    Parameters
    ----------
    a : SpectralMask
        Sender mask.
    b : SpectralMask
        Mask of the other endpoint.

    Returns
    -------
    OverlapCurve
        Empty when the supports do not intersect, a single point when they only
        touch.
    """
    f_min = max(a.low_edge_mhz, b.low_edge_mhz)
    f_max = min(a.high_edge_mhz, b.high_edge_mhz)
    if f_min > f_max:
        return OverlapCurve.empty()

    retained = {float(f) for f in a.frequencies if f_min <= f <= f_max}
    retained.update(float(f) for f in b.frequencies if f_min <= f <= f_max)
    freqs = sorted(retained)

    va = [a.density_at(f) for f in freqs]
    vb = [b.density_at(f) for f in freqs]

    out_f: List[float] = []
    out_psd: List[float] = []
    for i, f in enumerate(freqs):
        out_f.append(f)
        out_psd.append(min(va[i], vb[i]))
        if i + 1 == len(freqs):
            break
        # Both masks are linear between consecutive breakpoints.
        crossing = segment_crossing(f, freqs[i + 1], (va[i], va[i + 1]), (vb[i], vb[i + 1]))
        if crossing is not None:
            out_f.append(crossing[0])
            out_psd.append(crossing[1])

    return OverlapCurve(np.asarray(out_f, dtype=np.float64), np.asarray(out_psd, dtype=np.float64))
