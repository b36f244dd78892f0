"""Run a simulation: broadcast transmissions and collect per-receiver power."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import simpy

from .channel import PhyRegistry, WifiChannel
from .device import Reception, WifiPhy
from .packet import MpduType, WifiPreamble, WifiTxVector
from .scheduler import SimpyScheduler
from ..propagation.interference import noise_power_dbm, total_power_dbm
from ..propagation.models import ConstantSpeedPropagationDelay, make_loss_model
from ..spectrum.factor import GUARD_BAND_MHZ


@dataclass
class SimulationResult:
    """Holds what each receiver saw during one run."""

    receptions: Dict[str, List[Reception]] = field(default_factory=dict)
    """Arrivals per phy label."""
    noise_floor_dbm: Dict[str, float] = field(default_factory=dict)
    """Thermal noise plus noise figure over each phy's channel width."""
    total_power_dbm: Dict[str, float] = field(default_factory=dict)
    """Noise floor plus every arrival, summed in mW."""
    strongest_rx_dbm: Dict[str, float] = field(default_factory=dict)
    transmissions: int = 0
    deliveries: int = 0


class Simulation:
    """Event-driven ACI simulation over a shared :class:`WifiChannel`.

    Parameters
    ----------
    pathloss_model : str
        ``"fspl"`` or ``"log-distance"`` (default ``"log-distance"``).
    pathloss_exponent : float
        Path-loss exponent for log-distance model (default 3.0).
    frequency_mhz : float
        Carrier used by the path-loss model (default 5180).
    guard_band_mhz : float
        Edge separation beyond which channels do not interfere.
    normalization : str
        Spectral-mask normalization, ``"exact"`` or ``"reference"``.
    noise_figure_db : float
        Receiver noise figure added to the thermal floor (default 7).
    """

    def __init__(
        self,
        pathloss_model: str = "log-distance",
        pathloss_exponent: float = 3.0,
        frequency_mhz: float = 5180.0,
        guard_band_mhz: float = GUARD_BAND_MHZ,
        normalization: str = "exact",
        noise_figure_db: float = 7.0,
        env: Optional[simpy.Environment] = None,
    ) -> None:
        self.env = env if env is not None else simpy.Environment()
        self.scheduler = SimpyScheduler(self.env)
        self.registry = PhyRegistry()
        self.channel = WifiChannel(
            make_loss_model(pathloss_model, frequency_mhz, pathloss_exponent),
            ConstantSpeedPropagationDelay(),
            self.scheduler,
            registry=self.registry,
            guard_band_mhz=guard_band_mhz,
            normalization=normalization,
        )
        self.noise_figure_db = noise_figure_db
        self.transmissions = 0
        self.deliveries = 0

    # ------------------------------------------------------------------
    def add_phy(self, phy: WifiPhy) -> int:
        return self.channel.add(phy)

    def transmit(
        self,
        sender: WifiPhy,
        packet: Any,
        at: float = 0.0,
        duration: float = 0.0,
        tx_power_dbm: Optional[float] = None,
        tx_vector: Optional[WifiTxVector] = None,
        preamble: WifiPreamble = WifiPreamble.VHT,
        mpdu_type: MpduType = MpduType.NORMAL,
    ) -> None:
        """Schedule *sender* to put *packet* on the channel at time *at* (s)."""
        self.scheduler.schedule_with_context(
            sender.node_id, at - self.scheduler.now, self._send,
            sender, packet, tx_vector, preamble, mpdu_type, duration, tx_power_dbm,
        )

    def _send(self, sender: WifiPhy, packet: Any, *args: Any) -> None:
        self.transmissions += 1
        self.deliveries += sender.send(packet, *args)

    # ------------------------------------------------------------------
    def run(self, until: Optional[float] = None) -> SimulationResult:
        """Execute the simulation and return results."""
        self.env.run(until=until)
        result = SimulationResult(transmissions=self.transmissions, deliveries=self.deliveries)

        for idx, phy in enumerate(self.registry):
            label = phy.label or f"phy_{idx}"
            floor = noise_power_dbm(phy.channel_width * 1e6) + self.noise_figure_db
            powers = [r.params.rx_power_dbm for r in phy.receptions]
            result.receptions[label] = list(phy.receptions)
            result.noise_floor_dbm[label] = floor
            result.total_power_dbm[label] = total_power_dbm(powers, floor_dbm=floor)
            if powers:
                result.strongest_rx_dbm[label] = max(powers)

        return result
