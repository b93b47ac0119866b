"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from ..state.models import CommitMode, EditorConfig
from .defaults import DefaultConfig, get_default_config
from .validation import ConfigValidator

PROFILES_FILE = "widgets.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_profiles(self) -> dict[str, Any]:
        """Load every named profile from the profiles file."""
        profiles_file = self.config_dir / PROFILES_FILE

        if not profiles_file.exists():
            return {}

        try:
            with open(profiles_file) as f:
                document = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse {profiles_file}: {e}", source=str(profiles_file)) from e

        if not isinstance(document, dict):
            raise ConfigurationError("Profiles file must contain a mapping", source=str(profiles_file))

        return document.get("profiles") or {}

    def load_profile_config(self, profile: str) -> dict[str, Any]:
        """Load profile-specific configuration overrides."""
        return self.load_profiles().get(profile) or {}

    def merge_config(
        self,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-widget overrides (highest priority)
        2. Named profile from widgets.yaml
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        if profile:
            config = self._deep_merge(config, self.load_profile_config(profile))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_editor_config(
        self,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> EditorConfig:
        """
        Merge, validate and convert configuration into an EditorConfig.

        Raises:
            ConfigurationError: If any merged value fails validation
        """
        config = self.merge_config(profile, overrides)
        errors = ConfigValidator.validate_config(config)
        if errors:
            raise ConfigurationError(
                f"Invalid configuration for profile '{profile or 'default'}'",
                errors=errors,
                source=str(self.config_dir / PROFILES_FILE)
            )
        return editor_config_from_dict(config["editor"])

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def editor_config_from_dict(params: dict[str, Any]) -> EditorConfig:
    """Convert a validated editor section into an EditorConfig."""
    return EditorConfig(
        disabled=params.get("disabled", False),
        allow_edit_while_pending=params.get("allow_edit_while_pending", False),
        mode=CommitMode(params.get("mode", CommitMode.OPTIMISTIC.value)),
        save_timeout_ms=params.get("save_timeout_ms", 2000),
        saved_duration_ms=params.get("saved_duration_ms", 700),
        error_duration_ms=params.get("error_duration_ms", 1000),
    )
