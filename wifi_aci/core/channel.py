"""Shared Wi-Fi channel with adjacent-channel interference.

For every transmission the channel walks all registered phys and, per
receiver, decides how much of the sender's power counts:

* co-channel (sender band inside receiver band): all of it, 0 dB;
* more than the guard band apart: none, no delivery is scheduled;
* otherwise: the overlap factor α of the two spectral masks, 10·log10(α) dB.

The result is added to the path-loss received power and a delivery is
scheduled on the receiver's node after the propagation delay.
"""

from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Protocol, Sequence, Tuple

from ..spectrum.factor import (
    GUARD_BAND_MHZ, ChannelRelation, EndpointDescriptor, aci_attenuation,
)
from ..spectrum.mask import UnsupportedChannelWidth
from .packet import MpduType, WifiPreamble

if TYPE_CHECKING:
    from .device import NetDevice, WifiPhy

logger = logging.getLogger(__name__)


class PropagationLossModel(Protocol):
    def calc_received_power(
        self, tx_power_dbm: float, pos_a: Sequence[float], pos_b: Sequence[float]
    ) -> float: ...


class PropagationDelayModel(Protocol):
    def delay(self, pos_a: Sequence[float], pos_b: Sequence[float]) -> float: ...


class Scheduler(Protocol):
    @property
    def now(self) -> float: ...

    def schedule_with_context(self, node_id: int, delay: float, callback: Any, *args: Any) -> None: ...


@dataclass(frozen=True)
class RxParameters:
    """What a receiver learns about an arriving transmission."""

    rx_power_dbm: float
    mpdu_type: MpduType
    duration: float
    tx_vector: Any
    preamble: WifiPreamble
    channel_frequency_mhz: float
    channel_width: int


class RegistryLockedError(RuntimeError):
    """Raised when a phy is registered while a broadcast is in progress."""


class PhyRegistry:
    """Append-only list of the phys sharing a channel.

    Registration is a setup-time operation: :meth:`add` fails while a
    broadcast holds the registry through :meth:`broadcasting`.
    """

    def __init__(self) -> None:
        self._phys: List[WifiPhy] = []
        self._active_broadcasts = 0

    def add(self, phy: WifiPhy) -> int:
        if self._active_broadcasts:
            raise RegistryLockedError("Cannot register a phy during a broadcast")
        self._phys.append(phy)
        return len(self._phys) - 1

    def __len__(self) -> int:
        return len(self._phys)

    def __getitem__(self, index: int) -> WifiPhy:
        return self._phys[index]

    def __iter__(self) -> Iterator[WifiPhy]:
        return iter(self._phys)

    @property
    def locked(self) -> bool:
        return self._active_broadcasts > 0

    @contextmanager
    def broadcasting(self) -> Iterator[Tuple[WifiPhy, ...]]:
        self._active_broadcasts += 1
        try:
            yield tuple(self._phys)
        finally:
            self._active_broadcasts -= 1


class WifiChannel:
    """Broadcast medium connecting :class:`WifiPhy` endpoints.

    Parameters
    ----------
    loss_model
        Provides ``calc_received_power(tx_power_dbm, pos_a, pos_b)``.
    delay_model
        Provides ``delay(pos_a, pos_b)`` in seconds.
    scheduler
        Provides ``now`` and ``schedule_with_context(node_id, delay, callback, *args)``.
    registry : PhyRegistry, optional
        Shared registry; a new one is created when omitted.
    guard_band_mhz : float
        Edge separation beyond which channels do not interfere (default 20).
    normalization : str
        Spectral-mask normalization, ``"exact"`` or ``"reference"``.
    """

    def __init__(
        self,
        loss_model: PropagationLossModel,
        delay_model: PropagationDelayModel,
        scheduler: Scheduler,
        registry: Optional[PhyRegistry] = None,
        guard_band_mhz: float = GUARD_BAND_MHZ,
        normalization: str = "exact",
    ) -> None:
        self.loss_model = loss_model
        self.delay_model = delay_model
        self.scheduler = scheduler
        self.registry = registry if registry is not None else PhyRegistry()
        self.guard_band_mhz = guard_band_mhz
        self.normalization = normalization

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    def add(self, phy: WifiPhy) -> int:
        index = self.registry.add(phy)
        phy.channel = self
        return index

    @property
    def n_devices(self) -> int:
        return len(self.registry)

    def get_device(self, index: int) -> Optional[NetDevice]:
        return self.registry[index].device

    @property
    def now(self) -> float:
        return self.scheduler.now

    # ------------------------------------------------------------------
    # Broadcast
    # ------------------------------------------------------------------

    def send(
        self,
        sender: WifiPhy,
        packet: Any,
        tx_power_dbm: float,
        tx_vector: Any,
        preamble: WifiPreamble,
        mpdu_type: MpduType,
        duration: float,
    ) -> int:
        """Schedule a delivery of *packet* on every receiver it can reach.

        Returns the number of deliveries scheduled.

        Raises
        ------
        UnsupportedChannelWidth
            If the sender's own width is not 20, 40, 80 or 160 MHz. A receiver
            with such a width is logged and skipped instead.
        """
        tx = EndpointDescriptor.from_phy(sender, tx_power_dbm)
        scheduled = 0
        with self.registry.broadcasting() as phys:
            for index, receiver in enumerate(phys):
                if receiver is sender:
                    continue
                try:
                    rx = EndpointDescriptor.from_phy(receiver)
                except UnsupportedChannelWidth as exc:
                    logger.warning("Skipping receiver %d: %s", index, exc)
                    continue
                aci = aci_attenuation(
                    tx, rx, guard_band_mhz=self.guard_band_mhz, normalization=self.normalization
                )
                if aci.relation is ChannelRelation.DISJOINT:
                    continue

                delay = self.delay_model.delay(sender.position, receiver.position)
                rx_power_dbm = self.loss_model.calc_received_power(
                    tx_power_dbm, sender.position, receiver.position
                )
                rx_power_dbm += aci.attenuation_db
                logger.debug(
                    "propagation: txPower=%.2fdbm, rxPower=%.2fdbm, aci=%.2fdB (%s), delay=%.3es",
                    tx_power_dbm, rx_power_dbm, aci.attenuation_db, aci.relation.value, delay,
                )

                params = RxParameters(
                    rx_power_dbm=rx_power_dbm,
                    mpdu_type=mpdu_type,
                    duration=duration,
                    tx_vector=tx_vector,
                    preamble=preamble,
                    channel_frequency_mhz=sender.frequency_mhz,
                    channel_width=sender.channel_width,
                )
                self.scheduler.schedule_with_context(
                    receiver.node_id, delay, self.receive, index, copy.copy(packet), params
                )
                scheduled += 1
        return scheduled

    def receive(self, index: int, packet: Any, params: RxParameters) -> None:
        self.registry[index].start_receive_preamble_and_header(packet, params)
