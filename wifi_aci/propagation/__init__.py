from .pathloss import distance_m, free_space_path_loss, log_distance_path_loss
from .interference import noise_power_dbm, dbm_to_mw, mw_to_dbm, total_power_dbm
from .models import (
    FriisPropagationLoss, LogDistancePropagationLoss, ConstantSpeedPropagationDelay, make_loss_model,
)

__all__ = [
    "distance_m", "free_space_path_loss", "log_distance_path_loss",
    "noise_power_dbm", "dbm_to_mw", "mw_to_dbm", "total_power_dbm",
    "FriisPropagationLoss", "LogDistancePropagationLoss", "ConstantSpeedPropagationDelay",
    "make_loss_model",
]
