"""
Configuration Exceptions
========================

Errors raised while loading the firm pay-cycle and normalization file.

Each exception keeps the path of the file being loaded, when known, so a
report's error envelope can point at the file to fix.
"""

from pathlib import Path


class ConfigurationException(Exception):
    """Base exception for firm configuration errors."""

    def __init__(self, message: str, config_path: Path | str | None = None):
        super().__init__(message)
        self.message = message
        self.config_path = str(config_path) if config_path is not None else None


class ConfigurationFileNotFoundException(ConfigurationException):
    """Raised when the firm configuration file does not exist."""

    def __init__(self, config_path: Path | str):
        super().__init__(f"Firm configuration file not found: {config_path}", config_path)


class ConfigurationLoadException(ConfigurationException):
    """Raised when the firm configuration file cannot be read or is not YAML."""

    def __init__(self, message: str, config_path: Path | str | None = None):
        super().__init__(message, config_path)


class ConfigurationValidationException(ConfigurationException):
    """Raised when a firm entry or normalization rule is missing or malformed."""

    def __init__(self, message: str, config_path: Path | str | None = None):
        super().__init__(message, config_path)


class FirmConfigurationNotFoundException(ConfigurationException):
    """Raised when a normalization rule maps names onto a firm with no pay cycle."""

    def __init__(self, firm_name: str, config_path: Path | str | None = None):
        super().__init__(f"Normalization rule refers to unconfigured firm '{firm_name}'", config_path)
        self.firm_name = firm_name
