from .packet import Packet, WifiTxVector, WifiPreamble, MpduType
from .device import Node, NetDevice, WifiPhy, Reception, NO_CONTEXT
from .channel import WifiChannel, PhyRegistry, RxParameters, RegistryLockedError
from .scheduler import SimpyScheduler
from .simulation import Simulation, SimulationResult

__all__ = [
    "Packet", "WifiTxVector", "WifiPreamble", "MpduType",
    "Node", "NetDevice", "WifiPhy", "Reception", "NO_CONTEXT",
    "WifiChannel", "PhyRegistry", "RxParameters", "RegistryLockedError",
    "SimpyScheduler", "Simulation", "SimulationResult",
]
