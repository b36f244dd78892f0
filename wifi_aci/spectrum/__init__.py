from .mask import (
    ChannelWidth, SpectralMask, UnsupportedChannelWidth, build_spectral_mask,
    MASK_OFFSETS_MHZ, MASK_ATTENUATION_DB, REFERENCE_NORMALIZATION,
)
from .integrate import trapezoid_area
from .overlap import OverlapCurve, overlap_curve
from .factor import (
    AciResult, ChannelRelation, EndpointDescriptor, aci_attenuation, classify, overlap_factor,
    GUARD_BAND_MHZ, ZERO_OVERLAP_ATTENUATION_DB,
)

__all__ = [
    "ChannelWidth", "SpectralMask", "UnsupportedChannelWidth", "build_spectral_mask",
    "MASK_OFFSETS_MHZ", "MASK_ATTENUATION_DB", "REFERENCE_NORMALIZATION",
    "trapezoid_area", "OverlapCurve", "overlap_curve",
    "AciResult", "ChannelRelation", "EndpointDescriptor", "aci_attenuation", "classify",
    "overlap_factor", "GUARD_BAND_MHZ", "ZERO_OVERLAP_ATTENUATION_DB",
]
