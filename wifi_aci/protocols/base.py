"""Base protocol definition."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Protocol:
    """Radio settings a :class:`~wifi_aci.core.device.WifiPhy` is built from.

    ``sensitivity_dbm`` becomes the phy's decode threshold: arrivals weaker
    than it are recorded as not decodable.
    """

    name: str = "generic"
    frequency_mhz: float = 5180.0
    channel_width_mhz: int = 20
    max_tx_power_dbm: float = 16.0
    sensitivity_dbm: float = -82.0
