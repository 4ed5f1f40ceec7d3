"""Hand Seals — Centralised Settings (Pydantic v2).

Single source of truth for application configuration.
Loads from .env, environment variables, or defaults.

The seal weights and thresholds are reference data and are not configurable.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HANDSEAL_",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────
    app_name: str = "Hand Seals"
    app_version: str = "0.1.0"
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    log_dir: str = "logs"

    # ── Camera ───────────────────────────────────────────────
    camera_index: int = 0
    camera_width: int = 640
    camera_height: int = 480
    mirror_input: bool = True

    # ── Hand tracking ────────────────────────────────────────
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    # ── Seal confirmation ────────────────────────────────────
    confirmation_hold_s: float = 1.0
    confirmation_threshold: float = 0.8
    debug_log_interval_s: float = 5.0

    # ── Catalogue ────────────────────────────────────────────
    jutsu_catalogue_path: str = "data/jutsu.json"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("confirmation_threshold", "min_detection_confidence", "min_tracking_confidence")
    @classmethod
    def _unit_interval(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"must be within [0, 1], got {v}")
        return v

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def catalogue_path(self) -> Path:
        path = Path(self.jutsu_catalogue_path)
        return path if path.is_absolute() else self.project_root / path


settings = Settings()
