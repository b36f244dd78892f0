from .masks import plot_masks, plot_aci_matrix

__all__ = ["plot_masks", "plot_aci_matrix"]
