"""802.11 transmit spectral masks as 9-point piecewise-linear PSD curves."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Tuple

import numpy as np

from .integrate import trapezoid_area


class UnsupportedChannelWidth(ValueError):
    """Raised when a channel width is not one of 20, 40, 80 or 160 MHz."""

    def __init__(self, width: object) -> None:
        super().__init__(
            f"Unsupported channel width {width!r} MHz. Choose from: "
            + ", ".join(str(int(w)) for w in ChannelWidth)
        )
        self.width = width


class ChannelWidth(IntEnum):
    """Channel widths (MHz) covered by the standard spectral masks."""

    W20 = 20
    W40 = 40
    W80 = 80
    W160 = 160

    @classmethod
    def from_mhz(cls, value: float) -> "ChannelWidth":
        try:
            return cls(value)
        except (TypeError, ValueError):
            raise UnsupportedChannelWidth(value) from None


# ---------------------------------------------------------------------------
# Mask templates: offset from the centre frequency (MHz) per channel width,
# and the relative attenuation (dB) shared by every width.
# ---------------------------------------------------------------------------
MASK_OFFSETS_MHZ: Dict[ChannelWidth, Tuple[float, ...]] = {
    ChannelWidth.W20: (-30.0, -20.0, -11.0, -9.0, 0.0, 9.0, 11.0, 20.0, 30.0),
    ChannelWidth.W40: (-60.0, -40.0, -21.0, -19.0, 0.0, 19.0, 21.0, 40.0, 60.0),
    ChannelWidth.W80: (-120.0, -80.0, -41.0, -39.0, 0.0, 39.0, 41.0, 80.0, 120.0),
    ChannelWidth.W160: (-240.0, -160.0, -81.0, -79.0, 0.0, 79.0, 81.0, 160.0, 240.0),
}

MASK_ATTENUATION_DB: Tuple[float, ...] = (-40.0, -28.0, -20.0, 0.0, 0.0, 0.0, -20.0, -28.0, -40.0)

# Published peak-density divisors of the reference ns-3 ACI model.
REFERENCE_NORMALIZATION: Dict[ChannelWidth, float] = {
    ChannelWidth.W20: 20.1414,
    ChannelWidth.W40: 40.2744,
    ChannelWidth.W80: 80.5404,
    ChannelWidth.W160: 161.0724,
}

NORMALIZATION_MODES = ("exact", "reference")


def _relative_densities() -> np.ndarray:
    return 10.0 ** (np.asarray(MASK_ATTENUATION_DB) / 10.0)


def normalization_divisor(channel_width: float, normalization: str = "exact") -> float:
    """Divisor turning total power (mW) into the mask's peak density (mW/MHz).

    ``"exact"`` uses the trapezoidal area of the unit-peak template so the mask
    integrates back to the transmit power; ``"reference"`` uses the published
    constants in :data:`REFERENCE_NORMALIZATION`.
    """
    width = ChannelWidth.from_mhz(channel_width)
    if normalization == "exact":
        offsets = MASK_OFFSETS_MHZ[width]
        return trapezoid_area(zip(offsets, _relative_densities()))
    if normalization == "reference":
        return REFERENCE_NORMALIZATION[width]
    raise ValueError(
        f"Unknown normalization '{normalization}'. Choose from: " + ", ".join(NORMALIZATION_MODES)
    )


@dataclass(frozen=True, eq=False)
class SpectralMask:
    """Piecewise-linear power spectral density of one endpoint.

    Parameters
    ----------
    channel_width : ChannelWidth
    center_frequency_mhz : float
    frequencies : np.ndarray
        Control-point frequencies (MHz), strictly increasing.
    densities : np.ndarray
        Linear power density (mW/MHz) at each control point.
    """

    channel_width: ChannelWidth
    center_frequency_mhz: float
    frequencies: np.ndarray
    densities: np.ndarray

    def __post_init__(self) -> None:
        self.frequencies.setflags(write=False)
        self.densities.setflags(write=False)

    @property
    def low_edge_mhz(self) -> float:
        return float(self.frequencies[0])

    @property
    def high_edge_mhz(self) -> float:
        return float(self.frequencies[-1])

    @property
    def peak_density(self) -> float:
        return float(self.densities.max())

    def points(self) -> list[tuple[float, float]]:
        return list(zip(self.frequencies.tolist(), self.densities.tolist()))

    def index_of(self, freq_mhz: float) -> Optional[int]:
        """Index of the control point at exactly *freq_mhz*, or ``None``."""
        idx = int(np.searchsorted(self.frequencies, freq_mhz))
        if idx < len(self.frequencies) and self.frequencies[idx] == freq_mhz:
            return idx
        return None

    def density_at(self, freq_mhz: float) -> float:
        """Mask value at *freq_mhz*: the control point itself, or the linear
        interpolation of the segment straddling it. Zero outside the support."""
        idx = self.index_of(freq_mhz)
        if idx is not None:
            return float(self.densities[idx])
        if freq_mhz < self.low_edge_mhz or freq_mhz > self.high_edge_mhz:
            return 0.0
        hi = int(np.searchsorted(self.frequencies, freq_mhz))
        x0, x1 = self.frequencies[hi - 1], self.frequencies[hi]
        y0, y1 = self.densities[hi - 1], self.densities[hi]
        return float((y1 - y0) * (freq_mhz - x0) / (x1 - x0) + y0)

    def area(self) -> float:
        """Total power (mW) under the mask."""
        return trapezoid_area(self.points())


def build_spectral_mask(
    channel_width: float,
    center_frequency_mhz: float,
    tx_power_dbm: float,
    normalization: str = "exact",
) -> SpectralMask:
    """Build the 9-point transmit mask of an endpoint.

    PSD_max = 10^(P/10) / divisor(width)
    PSD_i   = PSD_max · 10^(att_i/10)   at   f_c + offset_i

    Raises
    ------
    UnsupportedChannelWidth
        If *channel_width* is not 20, 40, 80 or 160 MHz.
    """
    width = ChannelWidth.from_mhz(channel_width)
    peak = 10.0 ** (tx_power_dbm / 10.0) / normalization_divisor(width, normalization)
    freqs = center_frequency_mhz + np.asarray(MASK_OFFSETS_MHZ[width], dtype=np.float64)
    psd = peak * _relative_densities()
    return SpectralMask(
        channel_width=width,
        center_frequency_mhz=float(center_frequency_mhz),
        frequencies=freqs,
        densities=psd,
    )
