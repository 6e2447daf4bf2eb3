# infra/settings.py
from __future__ import annotations

import logging
from dataclasses import fields
from typing import Mapping

from PySide6.QtCore import QSettings

from core.services.health.engine import DEFAULT_HEALTH_THRESHOLDS, HealthThresholds
from core.services.timeline.layout import DEFAULT_ZOOM_MULTIPLIERS, ZoomScale
from infra.path import default_settings_path

logger = logging.getLogger(__name__)


def _as_float(raw: object) -> float | None:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if value != value or value < 0:  # NaN or negative
        return None
    return value


class PolicySettingsStore:
    """Adapter around QSettings for the tunable health and timeline policy."""

    _HEALTH_GROUP = "health"
    _ZOOM_GROUP = "timeline/zoom"

    def __init__(self, settings: QSettings | None = None) -> None:
        self._settings = settings or QSettings(str(default_settings_path()), QSettings.IniFormat)

    def load_health_thresholds(
        self,
        default: HealthThresholds = DEFAULT_HEALTH_THRESHOLDS,
    ) -> HealthThresholds:
        values: dict[str, float] = {}
        for field in fields(HealthThresholds):
            fallback = getattr(default, field.name)
            raw = self._settings.value(f"{self._HEALTH_GROUP}/{field.name}", fallback)
            parsed = _as_float(raw)
            if parsed is None:
                logger.warning("Ignoring invalid health threshold %s=%r", field.name, raw)
                parsed = fallback
            values[field.name] = parsed
        return HealthThresholds(**values)

    def save_health_thresholds(self, thresholds: HealthThresholds) -> None:
        for field in fields(HealthThresholds):
            self._settings.setValue(
                f"{self._HEALTH_GROUP}/{field.name}",
                float(getattr(thresholds, field.name)),
            )
        self._settings.sync()

    def load_zoom_multipliers(
        self,
        default: Mapping[ZoomScale, float] = DEFAULT_ZOOM_MULTIPLIERS,
    ) -> dict[ZoomScale, float]:
        out: dict[ZoomScale, float] = {}
        for scale in ZoomScale:
            fallback = float(default.get(scale, 1.0))
            raw = self._settings.value(f"{self._ZOOM_GROUP}/{scale.value}", fallback)
            parsed = _as_float(raw)
            # a zero multiplier would collapse every bar onto the floor width
            if parsed is None or parsed == 0:
                logger.warning("Ignoring invalid zoom multiplier %s=%r", scale.value, raw)
                parsed = fallback
            out[scale] = parsed
        return out

    def save_zoom_multipliers(self, multipliers: Mapping[ZoomScale, float]) -> None:
        for scale, value in multipliers.items():
            self._settings.setValue(f"{self._ZOOM_GROUP}/{ZoomScale(scale).value}", float(value))
        self._settings.sync()

    def reset(self) -> None:
        self._settings.remove(self._HEALTH_GROUP)
        self._settings.remove(self._ZOOM_GROUP)
        self._settings.sync()


__all__ = ["PolicySettingsStore"]
