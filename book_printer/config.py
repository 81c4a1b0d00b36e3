"""
Configuration management for book-printer.

Handles loading and managing configuration from YAML files with sensible defaults.
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from .models import ConversionOptions

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for book-printer."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to custom config file. If None, uses default locations.
        """
        self.config_data = self._load_default_config()

        # Load user config if available
        if config_file:
            self._load_config_file(config_file)
        else:
            self._load_user_config()

    def _load_default_config(self) -> Dict[str, Any]:
        """Load default configuration values."""
        return {
            "paper": {
                "command": ["paperconf"],
                "env_var": "PAPER",
                "default": "a4",
                "timeout": 5
            },
            "pandoc": {
                "executable": "pandoc",
                "input_format": "markdown",
                "timeout": 120,
                "no_highlight_arg": "--no-highlight",
                "extra_args": []
            },
            "conversion": {
                "accept_targets_as_text": ["sidebar"],
                "codes_in_verbatim": False
            }
        }

    def _load_user_config(self) -> None:
        """Load user configuration from standard locations."""
        possible_paths = [
            Path.home() / ".book-printer.yml",
            Path.home() / ".book-printer.yaml",
            Path.home() / ".config" / "book-printer" / "config.yml",
            Path.home() / ".config" / "book-printer" / "config.yaml",
            Path("book-printer.yml"),
            Path("book-printer.yaml")
        ]

        for config_path in possible_paths:
            if config_path.exists():
                self._load_config_file(str(config_path))
                break

    def _load_config_file(self, config_file: str) -> None:
        """
        Load configuration from a YAML file.

        Args:
            config_file: Path to the configuration file.
        """
        try:
            config_path = Path(config_file).expanduser()
            if config_path.exists():
                with open(config_path, 'r', encoding='utf-8') as f:
                    user_config = yaml.safe_load(f)
                    if user_config:
                        self._merge_config(user_config)
                logger.debug("Loaded configuration from %s", config_path)
        except (OSError, yaml.YAMLError) as e:
            # Keep the defaults rather than abort the build
            logger.warning("Could not load config file %s: %s", config_file, e)

    def load_user_config(self, config_file: str) -> None:
        """Reset to defaults and apply an explicit configuration file."""
        self.config_data = self._load_default_config()
        self._load_config_file(config_file)

    def _merge_config(self, user_config: Dict[str, Any]) -> None:
        """
        Merge user configuration with defaults.

        Args:
            user_config: User configuration dictionary.
        """
        def deep_merge(default: Dict, user: Dict) -> Dict:
            """Recursively merge user config into default config."""
            result = default.copy()
            for key, value in user.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value
            return result

        self.config_data = deep_merge(self.config_data, user_config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'pandoc.timeout' or 'paper.env_var')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self.config_data

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'paper.default')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config_data

        # Navigate to the parent of the target key
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_paper_config(self) -> Dict[str, Any]:
        """
        Get paper size resolution settings.

        Returns:
            Dictionary with the query command, environment variable and fallback
        """
        return self.get('paper', {})

    def get_pandoc_config(self) -> Dict[str, Any]:
        """
        Get Pandoc configuration.

        Returns:
            Dictionary of Pandoc settings
        """
        return self.get('pandoc', {})

    def get_conversion_options(self) -> ConversionOptions:
        """Build the per-file conversion options from the ``conversion`` section."""
        return ConversionOptions.from_dict(self.get('conversion', {}))


# Global configuration instance
_config = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
