"""Overlap factor between a sender and another endpoint.

Co-channel interference counts all of the interferer's power (0 dB). Adjacent
channel interference counts only the part of the sender's mask that falls under
the other endpoint's mask:

    α = area(overlap curve) / area(sender mask)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .mask import ChannelWidth, build_spectral_mask
from .overlap import overlap_curve

if TYPE_CHECKING:
    from wifi_aci.core.device import WifiPhy

logger = logging.getLogger(__name__)

GUARD_BAND_MHZ = 20.0
"""Edge-to-edge separation beyond which two channels do not interfere."""

ZERO_OVERLAP_ATTENUATION_DB = -300.0
"""Attenuation reported when α = 0, in place of 10·log10(0)."""


class ChannelRelation(Enum):
    CO_CHANNEL = "co-channel"
    ADJACENT = "adjacent"
    DISJOINT = "disjoint"


@dataclass(frozen=True)
class EndpointDescriptor:
    """Active channel configuration of one radio at a given instant."""

    channel_width: ChannelWidth
    center_frequency_mhz: float
    tx_power_dbm: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "channel_width", ChannelWidth.from_mhz(self.channel_width))

    @classmethod
    def from_phy(cls, phy: "WifiPhy", tx_power_dbm: float | None = None) -> "EndpointDescriptor":
        power = phy.tx_power_end_dbm if tx_power_dbm is None else tx_power_dbm
        return cls(phy.channel_width, phy.frequency_mhz, power)

    @property
    def low_edge_mhz(self) -> float:
        return self.center_frequency_mhz - self.channel_width / 2

    @property
    def high_edge_mhz(self) -> float:
        return self.center_frequency_mhz + self.channel_width / 2


@dataclass(frozen=True)
class AciResult:
    relation: ChannelRelation
    alpha: float
    attenuation_db: float


def classify(
    sender: EndpointDescriptor,
    other: EndpointDescriptor,
    guard_band_mhz: float = GUARD_BAND_MHZ,
) -> ChannelRelation:
    """Classify the frequency relationship of *sender* towards *other*.

    Only the sender-inside-other containment counts as co-channel.
    """
    if other.low_edge_mhz <= sender.low_edge_mhz and sender.high_edge_mhz <= other.high_edge_mhz:
        return ChannelRelation.CO_CHANNEL
    if (
        sender.low_edge_mhz >= other.high_edge_mhz + guard_band_mhz
        or other.low_edge_mhz >= sender.high_edge_mhz + guard_band_mhz
    ):
        return ChannelRelation.DISJOINT
    return ChannelRelation.ADJACENT


def overlap_factor(
    sender: EndpointDescriptor,
    other: EndpointDescriptor,
    normalization: str = "exact",
) -> float:
    """Fraction of the sender's mask power lying under the other endpoint's mask."""
    mask_s = build_spectral_mask(
        sender.channel_width, sender.center_frequency_mhz, sender.tx_power_dbm, normalization
    )
    mask_o = build_spectral_mask(
        other.channel_width, other.center_frequency_mhz, other.tx_power_dbm, normalization
    )
    curve = overlap_curve(mask_s, mask_o)
    if curve.is_degenerate:
        return 0.0
    return curve.area() / mask_s.area()


def alpha_to_db(alpha: float) -> float:
    """10·log10(α), with :data:`ZERO_OVERLAP_ATTENUATION_DB` for α ≤ 0."""
    if alpha <= 0.0:
        return ZERO_OVERLAP_ATTENUATION_DB
    return 10.0 * math.log10(alpha)


def aci_attenuation(
    sender: EndpointDescriptor,
    other: EndpointDescriptor,
    guard_band_mhz: float = GUARD_BAND_MHZ,
    normalization: str = "exact",
) -> AciResult:
    """Attenuation (dB) to add to the sender's power received by *other*."""
    relation = classify(sender, other, guard_band_mhz)
    if relation is ChannelRelation.CO_CHANNEL:
        return AciResult(relation, 1.0, 0.0)
    if relation is ChannelRelation.DISJOINT:
        return AciResult(relation, 0.0, ZERO_OVERLAP_ATTENUATION_DB)

    alpha = overlap_factor(sender, other, normalization)
    if alpha <= 0.0:
        logger.debug("zero overlap between %s and %s", sender, other)
    return AciResult(relation, alpha, alpha_to_db(alpha))
