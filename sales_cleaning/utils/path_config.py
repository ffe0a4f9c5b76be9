# -*- coding: utf-8 -*-
"""Centralized path configuration for the sales cleaning pipeline.

Reads paths from pipeline.toml so the orchestrator never hardcodes where the
raw sales file lives or where cleaned outputs go.
"""

import logging
from pathlib import Path
from typing import Optional

import tomllib

from sales_cleaning.utils import get_workspace_root

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5


class PathConfig:
    """Centralized path configuration.

    Usage:
        path_config = PathConfig()
        raw_file = path_config.get_input_file("sales")
        staging_dir = path_config.get_staging_output_dir("sales")
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize PathConfig from pipeline.toml.

        Args:
            config_path: Path to pipeline.toml. If None, uses default location.

        Raises:
            FileNotFoundError: If config file not found.
        """
        if config_path is None:
            config_path = get_workspace_root() / "pipeline.toml"

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            self._config = tomllib.load(f)

        self.raw_data_dir = Path(self._config["dirs"]["raw_data"])
        self.staging_data_dir = Path(self._config["dirs"]["staging"])
        self.top_n = int(
            self._config.get("aggregation", {}).get("top_n", DEFAULT_TOP_N)
        )

    def get_input_file(self, source_key: str) -> Path:
        """Get the raw input file for a source.

        Args:
            source_key: Source key from pipeline.toml (e.g., "sales").

        Returns:
            Path to the raw CSV file.

        Raises:
            KeyError: If source_key not found in config.
        """
        return self.raw_data_dir / self._config["sources"][source_key]["input_file"]

    def get_staging_output_dir(self, source_key: str) -> Path:
        """Get staging output directory for a source.

        Raises:
            KeyError: If source_key not found in config.
        """
        subdir = self._config["sources"][source_key].get("output_subdir", "")
        return self.staging_data_dir / subdir

    def get_output_filename(self, source_key: str) -> str:
        """Get the cleaned export filename for a source.

        Raises:
            KeyError: If source_key not found in config.
        """
        return self._config["sources"][source_key]["output_file"]
