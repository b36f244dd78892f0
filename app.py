"""FastAPI web app for interactive adjacent-channel interference queries."""

from typing import List, Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from wifi_aci.protocols import VHT_CHANNELS, channel_center_frequency
from wifi_aci.spectrum import (
    ChannelRelation, EndpointDescriptor, UnsupportedChannelWidth, aci_attenuation, build_spectral_mask,
)
from wifi_aci.spectrum.factor import GUARD_BAND_MHZ

app = FastAPI(title="Wi-Fi ACI Calculator")

# ============================================================================
# Data models
# ============================================================================

class Endpoint(BaseModel):
    channel_width: int = 20
    center_frequency_mhz: Optional[float] = None
    channel_number: Optional[int] = None
    tx_power_dbm: float = 16.0

    def descriptor(self) -> EndpointDescriptor:
        if self.center_frequency_mhz is not None:
            freq = self.center_frequency_mhz
        elif self.channel_number is not None:
            freq = channel_center_frequency(self.channel_number)
        else:
            raise ValueError("Either center_frequency_mhz or channel_number is required")
        return EndpointDescriptor(self.channel_width, freq, self.tx_power_dbm)


class OverlapRequest(BaseModel):
    sender: Endpoint
    receiver: Endpoint
    guard_band_mhz: float = GUARD_BAND_MHZ
    normalization: Literal["exact", "reference"] = "exact"


class MaskRequest(BaseModel):
    endpoint: Endpoint
    normalization: Literal["exact", "reference"] = "exact"


class MaskPoint(BaseModel):
    frequency_mhz: float
    psd_mw_per_mhz: float


# ============================================================================
# API endpoints
# ============================================================================

@app.post("/api/overlap")
async def overlap(req: OverlapRequest):
    try:
        res = aci_attenuation(
            req.sender.descriptor(),
            req.receiver.descriptor(),
            guard_band_mhz=req.guard_band_mhz,
            normalization=req.normalization,
        )
    except (UnsupportedChannelWidth, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "relation": res.relation.value,
        "alpha": res.alpha,
        "attenuation_db": res.attenuation_db,
        "interferes": res.relation is not ChannelRelation.DISJOINT,
    }


@app.post("/api/mask")
async def mask(req: MaskRequest):
    try:
        d = req.endpoint.descriptor()
        m = build_spectral_mask(d.channel_width, d.center_frequency_mhz, d.tx_power_dbm, req.normalization)
    except (UnsupportedChannelWidth, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    points: List[MaskPoint] = [MaskPoint(frequency_mhz=f, psd_mw_per_mhz=p) for f, p in m.points()]
    return {"points": points, "area_mw": m.area(), "peak_psd_mw_per_mhz": m.peak_density}


@app.get("/api/vht-channels")
async def vht_channels():
    return {
        str(width): [{"channel": n, "center_frequency_mhz": channel_center_frequency(n)} for n in numbers]
        for width, numbers in VHT_CHANNELS.items()
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8001)
