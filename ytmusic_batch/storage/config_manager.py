"""
Manages loading and saving of the optional INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ytmusic_batch.exceptions import ConfigurationError
from ytmusic_batch.models.config import BatchConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser()

    def load_config(self, cli_options: dict[str, Any] | None = None) -> BatchConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        A missing file is not an error; built-in defaults are used instead.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated BatchConfig object.

        Raises:
            ConfigurationError: If the config file cannot be parsed or validation
            fails.
        """
        config_from_file: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e
            config_from_file = self._get_config_as_dict()
        else:
            log.debug(f"No config file at '{self.config_file_path}', using defaults.")

        # Override with CLI options
        if cli_options:
            config_from_file.update(cli_options)

        try:
            config_dir = self.config_file_path.parent
            return BatchConfig(**config_from_file, config_path=str(config_dir))
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any] | None = None) -> None:
        """
        Creates and saves a complete configuration file.

        Args:
            settings: Values to store instead of the model defaults.
        """
        settings = settings or {}
        config = configparser.ConfigParser()
        config["DEFAULT"] = {}

        defaults = BatchConfig()
        for key in sorted(BatchConfig.get_ini_keys()):
            value = settings.get(key, getattr(defaults, key))
            # configparser uses % for interpolation, so we must escape it
            config["DEFAULT"][key] = str(value).replace("%", "%%")

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser["DEFAULT"]
        defaults = BatchConfig()
        try:
            return {
                "audio_format": section.get("audio_format", defaults.audio_format),
                "audio_quality": section.get("audio_quality", defaults.audio_quality),
                "output_template": section.get(
                    "output_template", defaults.output_template
                ),
                "request_delay": section.getfloat(
                    "request_delay", defaults.request_delay
                ),
                "tools_dir": section.get("tools_dir", defaults.tools_dir),
            }
        except (ValueError, configparser.Error) as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e
