"""
Configuration Loader - Corpus Run Settings from YAML.

A run is configured from three layers, later ones winning:
    1. CorpusConfig defaults
    2. An optional YAML file (--config)
    3. Values given as command-line flags

Only keys a flag actually sets are passed as overrides, so an unset flag
never hides a value from the file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from corpus_builder.config.models import CorpusConfig
from corpus_builder.validation.run_validator import ConfigurationError


def _deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge overlay into a copy of base; nested sections merge key by key."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Builds a validated CorpusConfig from a YAML file and flag overrides."""

    def __init__(self, base_path: Optional[Path] = None) -> None:
        """
        Args:
            base_path: Directory relative config paths are resolved against
        """
        self._base_path = base_path or Path(".")

    def load(
        self,
        config_path: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> CorpusConfig:
        """
        Load run settings.

        Args:
            config_path: YAML file, or None to start from the defaults
            overrides: Nested section values, e.g. {"output": {"name": "tv"}}

        Returns:
            Validated CorpusConfig

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ConfigurationError: If the file is not a YAML mapping
            ValidationError: If a setting is out of range or unknown
        """
        settings: Dict[str, Any] = {}
        if config_path is not None:
            settings = self._read_file(self._resolve(config_path))

        if overrides:
            settings = _deep_merge(settings, overrides)

        return CorpusConfig.model_validate(settings)

    def _resolve(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self._base_path / p

    @staticmethod
    def _read_file(path: Path) -> Dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            try:
                document = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Unreadable config file {path}: {e}") from e

        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ConfigurationError(
                f"Config file {path} must hold a mapping of sections, "
                f"got {type(document).__name__}"
            )
        return document


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    base_path: Optional[Path] = None,
) -> CorpusConfig:
    """Load run settings with a fresh ConfigLoader."""
    return ConfigLoader(base_path=base_path).load(config_path, overrides)
