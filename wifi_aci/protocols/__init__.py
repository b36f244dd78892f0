from .base import Protocol
from .vht import (
    VhtProtocol, VHT_CHANNELS, channel_center_frequency, channel_number_for, channels_for_width,
    validate_channel,
)

__all__ = [
    "Protocol", "VhtProtocol", "VHT_CHANNELS", "channel_center_frequency", "channel_number_for",
    "channels_for_width", "validate_channel",
]
