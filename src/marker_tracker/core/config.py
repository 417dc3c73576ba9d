"""Application configuration via Pydantic Settings."""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackingSettings(BaseSettings):
    """Marker matching, gating, smoothing and visibility parameters."""

    model_config = SettingsConfigDict(env_prefix="TRACKING_")

    min_confidence: float = Field(default=0.3, ge=0.0, le=1.0)
    confidence_scale: int = Field(default=1000, gt=0)
    max_lost_frames: int = Field(default=50, ge=0)
    smoothing_window: int = Field(default=10, gt=0)
    position_scale: float = 100.0
    gimbal_epsilon: float = 1e-5


class CameraSettings(BaseSettings):
    """Camera capture settings."""

    model_config = SettingsConfigDict(env_prefix="CAMERA_")

    device: int | str = 0
    width: int = 320
    height: int = 240
    calibration_file: str = "data/camera_params.yml"


class DetectorSettings(BaseSettings):
    """ArUco detector settings."""

    model_config = SettingsConfigDict(env_prefix="ARUCO_")

    dictionary: str = "DICT_4X4_50"
    max_reprojection_error_px: float = Field(default=4.0, gt=0.0)
    flip_xy: bool = True


class MarkerConfig(BaseModel):
    """A marker to register at startup."""

    pattern: int
    width_m: float = Field(default=0.095, gt=0.0)
    name: str
    model: str


def _default_markers() -> list[MarkerConfig]:
    return [
        MarkerConfig(pattern=0, name="hiro", model="robot"),
        MarkerConfig(pattern=1, name="kanji", model="cow"),
    ]


class UISettings(BaseSettings):
    """Status display settings."""

    model_config = SettingsConfigDict(env_prefix="")

    show_window: bool = Field(default=True, alias="SHOW_WINDOW")
    window_name: str = Field(default="Marker Tracker", alias="WINDOW_NAME")
    status_interval_frames: int = Field(default=30, alias="STATUS_INTERVAL_FRAMES")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    tracking: TrackingSettings = Field(default_factory=TrackingSettings)
    camera: CameraSettings = Field(default_factory=CameraSettings)
    detector: DetectorSettings = Field(default_factory=DetectorSettings)
    markers: list[MarkerConfig] = Field(default_factory=_default_markers)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()
