"""Pydantic data models for license-compliance."""

from license_compliance.models.config import AppConfiguration
from license_compliance.models.dependency import Dependency

__all__ = [
    "AppConfiguration",
    "Dependency",
]
