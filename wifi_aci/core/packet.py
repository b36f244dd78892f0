"""Packets and transmission metadata carried through the channel."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum

_uids = itertools.count()


class WifiPreamble(Enum):
    LONG = "long"
    SHORT = "short"
    HT_MF = "ht-mf"
    HT_GF = "ht-gf"
    VHT = "vht"


class MpduType(Enum):
    NORMAL = "normal"
    MPDU_IN_AGGREGATE = "mpdu-in-aggregate"
    LAST_MPDU_IN_AGGREGATE = "last-mpdu-in-aggregate"


@dataclass
class WifiTxVector:
    """TXVECTOR of a transmission: mode, width, spatial streams, power level."""

    mode: str = "VhtMcs0"
    channel_width: int = 20
    nss: int = 1
    tx_power_level: int = 0


@dataclass
class Packet:
    size_bytes: int = 1500
    payload: bytes = b""
    uid: int = field(default_factory=lambda: next(_uids))
