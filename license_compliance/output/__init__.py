"""Output formatters for license-compliance."""

from license_compliance.output.apps import AppsFormatter, AppsJsonFormatter

__all__ = [
    "AppsFormatter",
    "AppsJsonFormatter",
]
