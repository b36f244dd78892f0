"""Overlap-factor sweeps and pairwise ACI tables over a channel plan."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from ..protocols.vht import channel_center_frequency
from ..spectrum.factor import (
    GUARD_BAND_MHZ, ChannelRelation, EndpointDescriptor, aci_attenuation,
)


def overlap_sweep(
    sender_width: int,
    receiver_width: int,
    offsets_mhz: Sequence[float] | np.ndarray,
    tx_power_dbm: float = 16.0,
    center_frequency_mhz: float = 5500.0,
    guard_band_mhz: float = GUARD_BAND_MHZ,
    normalization: str = "exact",
) -> np.ndarray:
    """Overlap factor α with the receiver centred at ``centre + offset``.

    Co-channel pairs give 1, pairs beyond the guard band give 0.
    """
    sender = EndpointDescriptor(sender_width, center_frequency_mhz, tx_power_dbm)
    offsets = np.asarray(offsets_mhz, dtype=np.float64)
    alphas = np.empty(offsets.shape, dtype=np.float64)
    for i, offset in enumerate(offsets):
        other = EndpointDescriptor(receiver_width, center_frequency_mhz + float(offset), tx_power_dbm)
        alphas[i] = aci_attenuation(sender, other, guard_band_mhz, normalization).alpha
    return alphas


def aci_matrix(
    channels: Sequence[Tuple[int, int]],
    tx_power_dbm: float = 16.0,
    guard_band_mhz: float = GUARD_BAND_MHZ,
    normalization: str = "exact",
) -> Tuple[List[str], np.ndarray]:
    """Attenuation (dB) of each sender channel (rows) into each receiver (columns).

    Parameters
    ----------
    channels : sequence of (channel_number, channel_width)

    Returns
    -------
    labels : list of ``"<number>/<width>"``
    matrix : np.ndarray
        ``NaN`` where the pair is beyond the guard band.
    """
    descriptors = [
        EndpointDescriptor(width, channel_center_frequency(number), tx_power_dbm)
        for number, width in channels
    ]
    labels = [f"{number}/{width}" for number, width in channels]
    n = len(descriptors)
    matrix = np.full((n, n), np.nan)
    for i, sender in enumerate(descriptors):
        for j, other in enumerate(descriptors):
            res = aci_attenuation(sender, other, guard_band_mhz, normalization)
            if res.relation is not ChannelRelation.DISJOINT:
                matrix[i, j] = res.attenuation_db
    return labels, matrix
