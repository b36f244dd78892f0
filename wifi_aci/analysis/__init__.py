from .aci_matrix import overlap_sweep, aci_matrix

__all__ = ["overlap_sweep", "aci_matrix"]
