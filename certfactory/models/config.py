"""Application configuration models."""

from pydantic import BaseModel


class AppSettings(BaseModel):
    """Application settings."""

    title: str = "Certificate Factory"
    version: str = "1.0.0"
    debug: bool = False


class LoggingSettings(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str = ""  # no file handler when empty


class AppConfig(BaseModel):
    """Main application configuration."""

    app: AppSettings = AppSettings()
    logging: LoggingSettings = LoggingSettings()
