# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Configuration loading and validation for umlgraph."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".umlgraph.yml"

OUTPUT_FORMATS = ("dot", "json")


class Config:
    """Configuration for umlgraph analysis runs.

    Loads configuration from .umlgraph.yml with validation and defaults.
    """

    DEFAULTS = {
        "graph_name": "ast",
        "file_extensions": [".rs"],
        "ignore_patterns": [],
        "max_file_lines": 10000,
        "max_file_size_kb": 10240,
        "include_outer_relations": True,
        "output_format": "dot",
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_path: Path to configuration file. If None, uses default location.
        """
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME

        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load and validate configuration from file."""
        if not self.config_path.exists():
            logger.info(f"Configuration file not found at {self.config_path}, using defaults")
            self._config = self._defaults()
            return

        try:
            with open(self.config_path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f)

            if loaded_config is None:
                logger.warning("Configuration file is empty, using defaults")
                self._config = self._defaults()
                return

            if not isinstance(loaded_config, dict):
                logger.warning(
                    f"Configuration file must contain a YAML dictionary, "
                    f"got {type(loaded_config)}, using defaults"
                )
                self._config = self._defaults()
                return

            self._config = self._defaults()
            self._validate_and_merge(loaded_config)

        except yaml.YAMLError as e:
            logger.warning(
                f"Error parsing configuration file {self.config_path}: {e}, using defaults"
            )
            self._config = self._defaults()
        except OSError as e:
            logger.warning(
                f"Could not read configuration file {self.config_path}: {e}, using defaults"
            )
            self._config = self._defaults()
        except Exception as e:
            logger.warning(
                f"Unexpected error loading configuration file "
                f"{self.config_path}: {e}, using defaults"
            )
            self._config = self._defaults()

    def _defaults(self) -> Dict[str, Any]:
        # List defaults are copied so callers never mutate DEFAULTS
        return {
            key: list(value) if isinstance(value, list) else value
            for key, value in self.DEFAULTS.items()
        }

    def _validate_and_merge(self, loaded_config: Dict[str, Any]) -> None:
        """Validate loaded configuration and merge with defaults.

        Invalid parameters are logged as warnings and defaults are used.
        """
        for key, value in loaded_config.items():
            if key not in self.DEFAULTS:
                logger.warning(f"Unknown configuration parameter '{key}', ignoring")
                continue

            if not self._validate_parameter(key, value):
                logger.warning(
                    f"Invalid value for '{key}': {value}, using default {self.DEFAULTS[key]}"
                )
                continue

            self._config[key] = value

    def _validate_parameter(self, key: str, value: Any) -> bool:
        """Validate a configuration parameter.

        Returns:
            True if valid, False if invalid
        """
        expected_type = type(self.DEFAULTS[key])
        # bool is an int subclass; reject it for numeric keys
        if expected_type is int and isinstance(value, bool):
            return False
        if not isinstance(value, expected_type):
            return False

        if key in ("max_file_lines", "max_file_size_kb"):
            return value > 0
        elif key == "graph_name":
            return bool(value.strip())
        elif key == "output_format":
            return value in OUTPUT_FORMATS
        elif key == "file_extensions":
            return bool(value) and all(
                isinstance(ext, str) and ext.startswith(".") for ext in value
            )
        elif key == "ignore_patterns":
            return all(isinstance(pattern, str) for pattern in value)

        return True

    @property
    def graph_name(self) -> str:
        """Name of the top-level rendered digraph."""
        value = self._config["graph_name"]
        assert isinstance(value, str)
        return value

    @property
    def file_extensions(self) -> List[str]:
        """Source file extensions picked up when analyzing a directory."""
        value = self._config["file_extensions"]
        assert isinstance(value, list)
        return value

    @property
    def ignore_patterns(self) -> List[str]:
        """fnmatch patterns for files to skip, matched against relative paths and names."""
        value = self._config["ignore_patterns"]
        assert isinstance(value, list)
        return value

    @property
    def max_file_lines(self) -> int:
        """Files with more lines are skipped."""
        value = self._config["max_file_lines"]
        assert isinstance(value, int)
        return value

    @property
    def max_file_size_kb(self) -> int:
        """Files larger than this are skipped."""
        value = self._config["max_file_size_kb"]
        assert isinstance(value, int)
        return value

    @property
    def include_outer_relations(self) -> bool:
        """Whether cross-module edges are rendered."""
        value = self._config["include_outer_relations"]
        assert isinstance(value, bool)
        return value

    @property
    def output_format(self) -> str:
        """Default output format, "dot" or "json"."""
        value = self._config["output_format"]
        assert isinstance(value, str)
        return value
