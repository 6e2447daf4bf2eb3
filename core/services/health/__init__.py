from core.services.health.engine import (
    DEFAULT_HEALTH_THRESHOLDS,
    HealthSignals,
    HealthThresholds,
    apply_health,
    classify_health,
    compute_health_signals,
    expected_progress,
    tier_for_signals,
)

__all__ = [
    "DEFAULT_HEALTH_THRESHOLDS",
    "HealthSignals",
    "HealthThresholds",
    "apply_health",
    "classify_health",
    "compute_health_signals",
    "expected_progress",
    "tier_for_signals",
]
