"""IEEE 802.11ac (VHT) 5 GHz channel plan."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .base import Protocol

BAND_START_MHZ = 5000.0
CHANNEL_SPACING_MHZ = 5.0

# Channel numbers per width (MHz); each number names the channel centre.
VHT_CHANNELS: Dict[int, Tuple[int, ...]] = {
    20: (36, 40, 44, 48, 52, 56, 60, 64, 100, 104, 108, 112, 116, 120, 124, 128,
         132, 136, 140, 144, 149, 153, 157, 161, 165),
    40: (38, 46, 54, 62, 102, 110, 118, 126, 134, 142, 151, 159),
    80: (42, 58, 106, 122, 138, 155),
    160: (50, 114),
}

# Minimum sensitivity (dBm) at MCS0 per width
VHT_SENSITIVITY: Dict[int, float] = {20: -82.0, 40: -79.0, 80: -76.0, 160: -73.0}


def channel_center_frequency(channel_number: int) -> float:
    """Centre frequency (MHz) of a 5 GHz channel number."""
    return BAND_START_MHZ + CHANNEL_SPACING_MHZ * channel_number


def channel_number_for(frequency_mhz: float) -> int:
    """Inverse of :func:`channel_center_frequency`.

    Raises
    ------
    ValueError
        If *frequency_mhz* is not on the 5 MHz channel raster.
    """
    number = (frequency_mhz - BAND_START_MHZ) / CHANNEL_SPACING_MHZ
    if number != int(number) or number < 0:
        raise ValueError(f"{frequency_mhz} MHz is not on the 5 GHz channel raster")
    return int(number)


def channels_for_width(channel_width_mhz: int) -> Tuple[int, ...]:
    if channel_width_mhz not in VHT_CHANNELS:
        raise ValueError(
            f"No VHT channels of width {channel_width_mhz} MHz. Choose from: "
            + ", ".join(str(w) for w in VHT_CHANNELS)
        )
    return VHT_CHANNELS[channel_width_mhz]


def validate_channel(channel_number: int, channel_width_mhz: int) -> None:
    """Raise ``ValueError`` unless *channel_number* exists at *channel_width_mhz*."""
    if channel_number not in channels_for_width(channel_width_mhz):
        raise ValueError(
            f"Channel {channel_number} is not a {channel_width_mhz} MHz VHT channel"
        )


@dataclass
class VhtProtocol(Protocol):
    """802.11ac configuration.

    Parameters
    ----------
    channel_number : int
        5 GHz channel number valid for *channel_width_mhz*.
    channel_width_mhz : int
        20, 40, 80 or 160 MHz.
    """

    name: str = "802.11ac"
    channel_number: int = 36
    channel_width_mhz: int = 20

    def __post_init__(self) -> None:
        validate_channel(self.channel_number, self.channel_width_mhz)
        self.frequency_mhz = channel_center_frequency(self.channel_number)
        self.sensitivity_dbm = VHT_SENSITIVITY[self.channel_width_mhz]
