"""Matplotlib plots of spectral masks, overlap curves and ACI tables."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..spectrum.factor import EndpointDescriptor
from ..spectrum.mask import SpectralMask, build_spectral_mask
from ..spectrum.overlap import overlap_curve


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------

def _mask_for(endpoint: EndpointDescriptor, normalization: str) -> SpectralMask:
    return build_spectral_mask(
        endpoint.channel_width, endpoint.center_frequency_mhz, endpoint.tx_power_dbm, normalization
    )


def _to_db(psd: np.ndarray) -> np.ndarray:
    return 10.0 * np.log10(np.clip(psd, 1e-30, None))


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------

def plot_masks(
    sender: EndpointDescriptor,
    receiver: EndpointDescriptor,
    normalization: str = "exact",
    save_path: Optional[str | Path] = None,
    figsize: tuple[int, int] = (10, 5),
) -> plt.Figure:  # type: ignore[name-defined]
    """Plot both masks (dBm/MHz) and shade the overlap curve."""
    mask_s = _mask_for(sender, normalization)
    mask_r = _mask_for(receiver, normalization)
    curve = overlap_curve(mask_s, mask_r)

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(mask_s.frequencies, _to_db(mask_s.densities), "o-", color="tab:red",
            label=f"Sender {sender.channel_width} MHz @ {sender.center_frequency_mhz:g}")
    ax.plot(mask_r.frequencies, _to_db(mask_r.densities), "s-", color="tab:blue",
            label=f"Receiver {receiver.channel_width} MHz @ {receiver.center_frequency_mhz:g}")
    if not curve.is_degenerate:
        floor = min(_to_db(mask_s.densities).min(), _to_db(mask_r.densities).min()) - 5.0
        ax.fill_between(curve.frequencies, floor, _to_db(curve.densities),
                        color="tab:purple", alpha=0.3, label="Overlap")
        alpha = curve.area() / mask_s.area()
        ax.set_title(f"Spectral overlap (α = {alpha:.4g})")
    else:
        ax.set_title("Spectral overlap (none)")
    ax.set_xlabel("Frequency (MHz)")
    ax.set_ylabel("PSD (dBm/MHz)")
    ax.grid(True, alpha=0.3, linestyle="--")
    ax.legend(loc="upper right", fontsize=8)
    fig.tight_layout()
    if save_path:
        fig.savefig(str(save_path), dpi=150)
    return fig


def plot_aci_matrix(
    labels: Sequence[str],
    matrix: np.ndarray,
    save_path: Optional[str | Path] = None,
    figsize: tuple[int, int] = (8, 7),
) -> plt.Figure:  # type: ignore[name-defined]
    """Heatmap of pairwise ACI attenuation (dB); NaN cells are left blank."""
    fig, ax = plt.subplots(figsize=figsize)
    im = ax.imshow(np.ma.masked_invalid(matrix), cmap="magma", vmin=-40.0, vmax=0.0)
    cbar = fig.colorbar(im, ax=ax)
    cbar.set_label("Attenuation (dB)")
    ticks = np.arange(len(labels))
    ax.set_xticks(ticks)
    ax.set_yticks(ticks)
    ax.set_xticklabels(labels, rotation=90, fontsize=7)
    ax.set_yticklabels(labels, fontsize=7)
    ax.set_xlabel("Receiver channel")
    ax.set_ylabel("Sender channel")
    ax.set_title("Adjacent-channel attenuation")
    fig.tight_layout()
    if save_path:
        fig.savefig(str(save_path), dpi=150)
    return fig
