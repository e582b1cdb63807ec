import logging

from pydantic import BaseModel, Field

from moments.domain.presets import ClusterGap, ClusteringSettings, ClusterMode, SmartSensitivity

logger = logging.getLogger(__name__)


def _preset(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(f"Unknown {enum_cls.__name__} value {value!r}, using {default.value!r}.")
        return default


class ClusteringSettingsSchema(BaseModel):
    mode: ClusterMode = ClusterMode.SMART
    gap: ClusterGap = ClusterGap.MEDIUM
    sensitivity: SmartSensitivity = SmartSensitivity.BALANCED
    min_set_size: int = Field(default=1, ge=1)

    def to_domain(self) -> ClusteringSettings:
        return ClusteringSettings(
            mode=self.mode,
            gap=self.gap,
            sensitivity=self.sensitivity,
            min_set_size=self.min_set_size,
        )

    @classmethod
    def from_domain(cls, settings: ClusteringSettings) -> "ClusteringSettingsSchema":
        return cls(
            mode=settings.mode,
            gap=settings.gap,
            sensitivity=settings.sensitivity,
            min_set_size=settings.min_set_size,
        )

    @classmethod
    def from_config(cls, config) -> "ClusteringSettingsSchema":
        """Builds the startup defaults from environment configuration; bad values fall back to defaults."""
        return cls(
            mode=_preset(ClusterMode, config.CLUSTER_MODE, ClusterMode.SMART),
            gap=_preset(ClusterGap, config.CLUSTER_GAP, ClusterGap.MEDIUM),
            sensitivity=_preset(SmartSensitivity, config.SMART_SENSITIVITY, SmartSensitivity.BALANCED),
            min_set_size=max(1, config.MIN_SET_SIZE),
        )
