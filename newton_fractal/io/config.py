"""
Configuration file handling.

Render settings are stored as JSON objects whose keys are the fields of
``RenderConfig``.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from ..api import RenderConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads and saves render configuration files."""

    def load_config(self, filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a configuration file.

        Args:
            filepath: JSON file path

        Returns:
            Parsed configuration dictionary
        """
        filepath = Path(filepath)
        if filepath.suffix.lower() != '.json':
            raise ValueError(f"Unsupported configuration format '{filepath.suffix}'. Supported: .json")

        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {filepath} must contain a JSON object")

        logger.debug(f"Loaded configuration: {filepath}")
        return data

    def save_config(self, config: RenderConfig, filepath: Union[str, Path]) -> Path:
        """Write a render configuration as JSON."""
        filepath = Path(filepath)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        logger.info(f"Saved configuration: {filepath}")
        return filepath

    def load_render_config(self, filepath: Union[str, Path]) -> RenderConfig:
        config = RenderConfig.from_dict(self.load_config(filepath))
        config.validate()
        return config


def load_config_from_args(config_file: Optional[Union[str, Path]] = None) -> RenderConfig:
    """Build the render configuration, from a file when one is given."""
    if config_file is None:
        return RenderConfig()
    return ConfigManager().load_render_config(config_file)
