#!/usr/bin/env python3
"""Overlap factor versus centre-frequency offset, plus an ACI table.

Saves overlap_sweep.png, masks_20_40.png and aci_matrix.png.
"""

import matplotlib.pyplot as plt
import numpy as np

from wifi_aci.analysis import aci_matrix, overlap_sweep
from wifi_aci.spectrum import EndpointDescriptor
from wifi_aci.visualization import plot_aci_matrix, plot_masks


def main() -> None:
    offsets = np.arange(0.0, 61.0, 1.0)

    fig, ax = plt.subplots(figsize=(9, 5))
    for width in (20, 40, 80):
        alphas = overlap_sweep(20, width, offsets)
        db = 10.0 * np.log10(np.clip(alphas, 1e-12, None))
        ax.plot(offsets, db, label=f"20 MHz sender → {width} MHz receiver")
    ax.set_xlabel("Centre offset (MHz)")
    ax.set_ylabel("10·log10(α) (dB)")
    ax.set_ylim(-50, 1)
    ax.grid(True, alpha=0.3, linestyle="--")
    ax.legend(fontsize=8)
    fig.tight_layout()
    fig.savefig("overlap_sweep.png", dpi=150)

    plot_masks(
        EndpointDescriptor(20, 5180.0, 16.0),
        EndpointDescriptor(40, 5210.0, 16.0),
        save_path="masks_20_40.png",
    )

    plan = [(36, 20), (40, 20), (44, 20), (48, 20), (38, 40), (46, 40), (42, 80)]
    labels, matrix = aci_matrix(plan)
    plot_aci_matrix(labels, matrix, save_path="aci_matrix.png")
    print("Saved: overlap_sweep.png, masks_20_40.png, aci_matrix.png")


if __name__ == "__main__":
    main()
