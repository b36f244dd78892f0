"""Device classes: Node, NetDevice, WifiPhy."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from ..protocols.vht import (
    channel_center_frequency, channel_number_for, validate_channel, VhtProtocol,
)
from .packet import MpduType, WifiPreamble, WifiTxVector

if TYPE_CHECKING:
    from .channel import RxParameters, WifiChannel

logger = logging.getLogger(__name__)

NO_CONTEXT = 0xFFFFFFFF
"""Scheduler context used for phys without an owning node."""


@dataclass
class Node:
    node_id: int


@dataclass
class NetDevice:
    node: Node
    label: str = ""


@dataclass
class Reception:
    """One arrival at a phy: the first bit of the preamble."""

    time: float
    packet: Any
    params: RxParameters
    detected: bool
    decodable: bool = False


@dataclass(eq=False)
class WifiPhy:
    """802.11 PHY of one radio, attached to a shared :class:`WifiChannel`.

    Parameters
    ----------
    x, y, z : float
        Position (m).
    channel_number : int
        Active 5 GHz channel number.
    channel_width : int
        Active channel width (MHz).
    frequency_mhz : float, optional
        Centre frequency; derived from *channel_number* when omitted.
    tx_power_start_dbm, tx_power_end_dbm : float
        Transmit power range (dBm). The end value is the power the phy
        advertises to the channel.
    energy_detection_threshold_dbm : float
        Arrivals weaker than this are recorded but not detected.
    rx_sensitivity_dbm : float
        Decode threshold; arrivals at or above it are marked decodable.
    device : NetDevice, optional
        Owning device; its node id is the scheduling context of deliveries.
    """

    x: float
    y: float
    z: float = 0.0
    channel_number: int = 36
    channel_width: int = 20
    frequency_mhz: Optional[float] = None
    tx_power_start_dbm: float = 16.0
    tx_power_end_dbm: float = 16.0
    energy_detection_threshold_dbm: float = -96.0
    rx_sensitivity_dbm: float = -82.0
    device: Optional[NetDevice] = None
    label: str = ""
    on_receive: Optional[Callable[["WifiPhy", Reception], None]] = field(default=None, repr=False)
    channel: Optional[WifiChannel] = field(default=None, repr=False)
    receptions: List[Reception] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.frequency_mhz is None:
            self.frequency_mhz = channel_center_frequency(self.channel_number)

    @classmethod
    def from_protocol(cls, protocol: VhtProtocol, x: float, y: float, z: float = 0.0, **kwargs: Any) -> "WifiPhy":
        return cls(
            x=x, y=y, z=z,
            channel_number=protocol.channel_number,
            channel_width=protocol.channel_width_mhz,
            tx_power_start_dbm=protocol.max_tx_power_dbm,
            tx_power_end_dbm=protocol.max_tx_power_dbm,
            rx_sensitivity_dbm=protocol.sensitivity_dbm,
            **kwargs,
        )

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def node_id(self) -> int:
        if self.device is None:
            return NO_CONTEXT
        return self.device.node.node_id

    # ------------------------------------------------------------------
    # Channel configuration
    # ------------------------------------------------------------------

    def switch_channel(self, channel_number: int, channel_width: Optional[int] = None) -> None:
        """Move to another VHT channel; raises ``ValueError`` for invalid pairs."""
        width = self.channel_width if channel_width is None else channel_width
        validate_channel(channel_number, width)
        self.channel_number = channel_number
        self.channel_width = width
        self.frequency_mhz = channel_center_frequency(channel_number)

    def set_frequency(self, frequency_mhz: float, channel_width: Optional[int] = None) -> None:
        """Tune to an arbitrary centre frequency. Off-raster frequencies get channel 0."""
        if channel_width is not None:
            self.channel_width = channel_width
        self.frequency_mhz = frequency_mhz
        try:
            self.channel_number = channel_number_for(frequency_mhz)
        except ValueError:
            self.channel_number = 0

    # ------------------------------------------------------------------
    # Tx / Rx
    # ------------------------------------------------------------------

    def send(
        self,
        packet: Any,
        tx_vector: Optional[WifiTxVector] = None,
        preamble: WifiPreamble = WifiPreamble.VHT,
        mpdu_type: MpduType = MpduType.NORMAL,
        duration: float = 0.0,
        tx_power_dbm: Optional[float] = None,
    ) -> int:
        """Transmit *packet* on the attached channel; returns deliveries scheduled."""
        if self.channel is None:
            raise RuntimeError(f"phy {self.label or id(self)} is not attached to a channel")
        if tx_vector is None:
            tx_vector = WifiTxVector(channel_width=self.channel_width)
        power = self.tx_power_end_dbm if tx_power_dbm is None else tx_power_dbm
        return self.channel.send(self, packet, power, tx_vector, preamble, mpdu_type, duration)

    def start_receive_preamble_and_header(self, packet: Any, params: RxParameters) -> Reception:
        now = self.channel.now if self.channel is not None else 0.0
        detected = params.rx_power_dbm >= self.energy_detection_threshold_dbm
        decodable = params.rx_power_dbm >= self.rx_sensitivity_dbm
        reception = Reception(time=now, packet=packet, params=params, detected=detected, decodable=decodable)
        self.receptions.append(reception)
        if not detected:
            status = " (below energy detection)"
        elif not decodable:
            status = " (below sensitivity)"
        else:
            status = ""
        logger.debug(
            "%s: arrival at t=%.9fs rx=%.2f dBm from %.0f MHz/%d MHz%s",
            self.label or f"node {self.node_id}", now, params.rx_power_dbm,
            params.channel_frequency_mhz, params.channel_width, status,
        )
        if self.on_receive is not None:
            self.on_receive(self, reception)
        return reception
