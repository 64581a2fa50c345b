"""YAML file operations service."""

import yaml
from pathlib import Path
from typing import Any, Dict
import logging

from certfactory.models.config import AppConfig

logger = logging.getLogger("certfactory")


class YAMLService:
    """Service for YAML file operations."""

    @staticmethod
    def load_yaml(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML file and return as dictionary.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML content as dictionary

        Raises:
            FileNotFoundError: If file doesn't exist
            yaml.YAMLError: If file is not valid YAML
        """
        if not file_path.exists():
            raise FileNotFoundError(f"YAML file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
                logger.debug(f"Loaded YAML from: {file_path}")
                return data or {}
            except yaml.YAMLError as e:
                logger.error(f"Error parsing YAML file {file_path}: {e}")
                raise

    @staticmethod
    def load_app_config(file_path: Path) -> AppConfig:
        """
        Load application configuration, falling back to defaults.

        Args:
            file_path: Path to config YAML file

        Returns:
            Application configuration

        Raises:
            yaml.YAMLError: If file is not valid YAML
            pydantic.ValidationError: If the file content does not match AppConfig
        """
        if not file_path.exists():
            logger.warning(f"Config file not found: {file_path}, using defaults")
            return AppConfig()

        return AppConfig(**YAMLService.load_yaml(file_path))
