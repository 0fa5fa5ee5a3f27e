"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

VALID_PROTEIN_REFERENCES = ("fixed", "actual")
VALID_OUTPUT_FORMATS = ("table", "json", "markdown")


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".fitmetrics"


def default_config_path() -> Path:
    """Return the default config.yaml path."""
    return _default_config_dir() / "config.yaml"


@dataclass
class EnergyConfig:
    """Energy model configuration."""

    # "fixed" bases protein on the 70 kg reference, "actual" on body weight
    protein_reference: str = "fixed"
    default_age: int = 30

    @property
    def use_actual_weight(self) -> bool:
        return self.protein_reference == "actual"


@dataclass
class AnalyticsConfig:
    """Analytics view configuration."""

    default_time_range: str = "30days"


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table", "json", "markdown"


@dataclass
class Settings:
    """Main application settings."""

    energy: EnergyConfig = field(default_factory=EnergyConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.fitmetrics/config.yaml

        Returns:
            Settings instance

        Raises:
            ValueError: If a setting has an unsupported value
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse energy config
        if "energy" in data:
            energy_data = data["energy"] or {}
            if "protein_reference" in energy_data:
                reference = str(energy_data["protein_reference"]).lower()
                if reference not in VALID_PROTEIN_REFERENCES:
                    raise ValueError(
                        f"energy.protein_reference must be one of "
                        f"{VALID_PROTEIN_REFERENCES}, got '{reference}'"
                    )
                settings.energy.protein_reference = reference
            if "default_age" in energy_data:
                settings.energy.default_age = int(energy_data["default_age"])

        # Parse analytics config
        if "analytics" in data:
            analytics_data = data["analytics"] or {}
            if "default_time_range" in analytics_data:
                settings.analytics.default_time_range = str(
                    analytics_data["default_time_range"]
                )

        # Parse defaults
        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "output_format" in def_data:
                output_format = def_data["output_format"]
                if output_format not in VALID_OUTPUT_FORMATS:
                    raise ValueError(
                        f"defaults.output_format must be one of "
                        f"{VALID_OUTPUT_FORMATS}, got '{output_format}'"
                    )
                settings.defaults.output_format = output_format

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.fitmetrics/config.yaml
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict:
        return {
            "energy": {
                "protein_reference": self.energy.protein_reference,
                "default_age": self.energy.default_age,
            },
            "analytics": {
                "default_time_range": self.analytics.default_time_range,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
            },
        }


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
