from core.services.baseline.service import BaselineService
from core.services.baseline.variance import (
    VarianceResult,
    compute_variance,
    direction_for,
    snapshot_baseline,
)

__all__ = [
    "BaselineService",
    "VarianceResult",
    "compute_variance",
    "direction_for",
    "snapshot_baseline",
]
