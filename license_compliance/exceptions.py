"""Custom exceptions for license-compliance."""


class LicenseComplianceError(Exception):
    """Base exception for all license-compliance errors."""

    pass


class ConfigurationError(LicenseComplianceError):
    """Exception raised when configuration cannot be loaded."""

    pass


class NotFoundError(ConfigurationError):
    """Exception raised when no configuration file exists in a directory."""

    pass


class UnsupportedFormatError(ConfigurationError):
    """Exception raised when a configuration file type is not recognized."""

    pass


class ParseError(ConfigurationError):
    """Exception raised when a configuration document is malformed."""

    pass


class MissingRequiredFieldError(ConfigurationError):
    """Exception raised when an app configuration lacks a required property."""

    def __init__(self, app_name: str, field: str) -> None:
        self.app_name = app_name
        self.field = field
        super().__init__(f"App {app_name} is missing required property {field}")
