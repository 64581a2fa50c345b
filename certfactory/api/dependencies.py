"""FastAPI dependencies."""

import logging
import os
from pathlib import Path

from certfactory.models.config import AppConfig
from certfactory.services.issuer_service import CertificateIssuer
from certfactory.services.record_service import CertificateRecordReader
from certfactory.services.yaml_service import YAMLService

logger = logging.getLogger("certfactory")


def get_config_path() -> Path:
    """
    Get configuration file path.

    Returns:
        Path from CERTFACTORY_CONFIG, or config.yaml in the working directory
    """
    return Path(os.environ.get("CERTFACTORY_CONFIG", "config.yaml"))


def get_config() -> AppConfig:
    """
    Get application configuration.

    Returns:
        Application configuration
    """
    return YAMLService.load_app_config(get_config_path())


def get_issuer() -> CertificateIssuer:
    """Get certificate issuer."""
    return CertificateIssuer()


def get_record_reader() -> CertificateRecordReader:
    """Get certificate record reader."""
    return CertificateRecordReader()
