"""Settings manager for mpkg settings.yaml files.

Manages three-scope settings system:
- User global (~/.mpkg/settings.yaml)
- Project (.mpkg/settings.yaml)
- Local (.mpkg/settings.local.yaml)

Resolver options live under the ``resolver:`` key. Environment variables
override every file.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError

logger = logging.getLogger(__name__)

# Environment variable -> ResolverSettings field
ENV_OVERRIDES = {
    "MPKG_PACKAGES_DIR": "packages_dir",
    "MPKG_FALLBACK_NAMESPACE": "fallback_namespace",
    "MPKG_MANIFEST": "manifest_filename",
    "MPKG_DESCRIPTOR": "descriptor_filename",
    "MPKG_DEFAULT_ENTRY": "default_entry",
}


class ResolverSettings(BaseModel):
    """Layout conventions used by the resolver."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    packages_dir: str = "packages"
    fallback_namespace: str = "node_modules"
    manifest_filename: str = "pkg.jsonc"
    descriptor_filename: str = "package.json"
    default_entry: str = "index.js"


class SettingsManager:
    """Manages settings across user/project/local scopes."""

    def __init__(self, mpkg_dir: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            mpkg_dir: Base directory for project/local settings (for testing).
                      If None, uses .mpkg in current directory.
        """
        if mpkg_dir is None:
            mpkg_dir = Path(".mpkg")

        self.user_settings_file = Path.home() / ".mpkg" / "settings.yaml"
        self.project_settings_file = mpkg_dir / "settings.yaml"
        self.local_settings_file = mpkg_dir / "settings.local.yaml"

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings from all scopes.

        Merge order (later overrides earlier):
        1. User settings
        2. Project settings
        3. Local settings

        Returns:
            Merged settings dictionary
        """
        merged: dict[str, Any] = {}
        for path in (self.user_settings_file, self.project_settings_file, self.local_settings_file):
            data = self._read_settings(path)
            if data:
                merged = self._deep_merge(merged, data)
        return merged

    def get_resolver_settings(self, environ: dict[str, str] | None = None) -> ResolverSettings:
        """Resolver settings from files and environment.

        Args:
            environ: Environment mapping (default: os.environ)

        Returns:
            ResolverSettings with env > local > project > user > defaults
        """
        environ = os.environ if environ is None else environ

        section = self.get_merged_settings().get("resolver") or {}
        if not isinstance(section, dict):
            logger.warning(f"Ignoring non-mapping resolver settings: {section!r}")
            section = {}
        values = dict(section)

        for env_key, field in ENV_OVERRIDES.items():
            if env_value := environ.get(env_key):
                values[field] = env_value

        try:
            return ResolverSettings.model_validate(values)
        except ValidationError as e:
            logger.warning(f"Invalid resolver settings, using defaults: {e}")
            return ResolverSettings()

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Args:
            path: Path to settings file

        Returns:
            Settings dict or None if file doesn't exist or cannot be read
        """
        if not path.exists():
            return None

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {path}: top level is not a mapping")
            return None
        return data

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        result = base.copy()

        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
