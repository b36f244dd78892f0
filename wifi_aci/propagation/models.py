"""Propagation collaborators used by the channel: received power and delay."""

from __future__ import annotations

from typing import Sequence

from .pathloss import distance_m, free_space_path_loss, log_distance_path_loss

SPEED_OF_LIGHT_M_S = 299_792_458.0


class FriisPropagationLoss:
    """Free-space received power at a fixed carrier frequency."""

    def __init__(self, frequency_mhz: float = 5180.0) -> None:
        self.frequency_mhz = frequency_mhz

    def calc_received_power(
        self, tx_power_dbm: float, pos_a: Sequence[float], pos_b: Sequence[float]
    ) -> float:
        return tx_power_dbm - float(free_space_path_loss(distance_m(pos_a, pos_b), self.frequency_mhz))


class LogDistancePropagationLoss:
    """Log-distance received power.

    Parameters
    ----------
    frequency_mhz : float
        Carrier used for the FSPL reference loss.
    exponent : float
        Path-loss exponent (default 3.0).
    reference_distance_m : float
    reference_loss_db : float, optional
        Overrides the FSPL reference loss at *reference_distance_m*.
    """

    def __init__(
        self,
        frequency_mhz: float = 5180.0,
        exponent: float = 3.0,
        reference_distance_m: float = 1.0,
        reference_loss_db: float | None = None,
    ) -> None:
        self.frequency_mhz = frequency_mhz
        self.exponent = exponent
        self.reference_distance_m = reference_distance_m
        self.reference_loss_db = reference_loss_db

    def calc_received_power(
        self, tx_power_dbm: float, pos_a: Sequence[float], pos_b: Sequence[float]
    ) -> float:
        pl = log_distance_path_loss(
            distance_m(pos_a, pos_b),
            self.frequency_mhz,
            n=self.exponent,
            d0=self.reference_distance_m,
            reference_loss_db=self.reference_loss_db,
        )
        return tx_power_dbm - float(pl)


class ConstantSpeedPropagationDelay:
    """Delay (s) = distance / propagation speed."""

    def __init__(self, speed_m_s: float = SPEED_OF_LIGHT_M_S) -> None:
        self.speed_m_s = speed_m_s

    def delay(self, pos_a: Sequence[float], pos_b: Sequence[float]) -> float:
        return distance_m(pos_a, pos_b) / self.speed_m_s


PATHLOSS_MODELS = {
    "fspl": FriisPropagationLoss,
    "log-distance": LogDistancePropagationLoss,
}


def make_loss_model(
    name: str = "log-distance", frequency_mhz: float = 5180.0, exponent: float = 3.0
) -> FriisPropagationLoss | LogDistancePropagationLoss:
    """Build a loss model by name (``"fspl"`` or ``"log-distance"``).

    Raises
    ------
    ValueError
        If *name* is not a known model.
    """
    if name == "fspl":
        return FriisPropagationLoss(frequency_mhz)
    if name == "log-distance":
        return LogDistancePropagationLoss(frequency_mhz, exponent=exponent)
    raise ValueError(
        f"Unknown pathloss model '{name}'. Choose from: " + ", ".join(sorted(PATHLOSS_MODELS))
    )
