"""Configuration management utilities."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..core.constants import CONFIG_FILE_NAMES
from ..models.config import BuildConfiguration
from ..services.exceptions import ConfigurationError


class ConfigManager:
    """Loads and saves the build configuration of a project."""

    def __init__(self, project_dir: Path, config_file: Optional[Path] = None):
        """Initialize config manager.

        Args:
            project_dir: Project root searched for a configuration file
            config_file: Explicit configuration file, overriding the search
        """
        self.project_dir = Path(project_dir)
        self.explicit_file = Path(config_file) if config_file else None

    def find_config_file(self) -> Optional[Path]:
        """Return the configuration file in use, or None if there is none."""
        if self.explicit_file is not None:
            return self.explicit_file
        for name in CONFIG_FILE_NAMES:
            candidate = self.project_dir / name
            if candidate.is_file():
                return candidate
        return None

    def load_config(self) -> BuildConfiguration:
        """Load the configuration; an absent file yields an empty configuration.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        config_file = self.find_config_file()
        if config_file is None:
            return BuildConfiguration()
        if not config_file.is_file():
            raise ConfigurationError(f"Configuration file not found: {config_file}")

        data = self._read(config_file)
        try:
            return BuildConfiguration.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {config_file}: {e}") from e

    def save_config(self, config: BuildConfiguration, config_file: Optional[Path] = None) -> Path:
        """Save the declared options of config.

        Unset options are left out so read-time defaults keep applying.
        Keys are written in camelCase.

        Returns:
            Path of the written file
        """
        target = Path(config_file or self.find_config_file() or self.project_dir / CONFIG_FILE_NAMES[0])
        data = config.model_dump(exclude_none=True, by_alias=True)
        target.parent.mkdir(parents=True, exist_ok=True)

        if target.suffix == ".json":
            target.write_text(json.dumps(data, indent=2))
        else:
            target.write_text(yaml.safe_dump(data, sort_keys=False))
        return target

    @staticmethod
    def _read(config_file: Path) -> Dict[str, Any]:
        try:
            text = config_file.read_text()
            if config_file.suffix == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read {config_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping in {config_file}")
        return data
