"""Dependency record consumed by review and ignore checks."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Dependency(BaseModel):
    """A dependency detected by one of the source types.

    Only ``type`` and ``name`` take part in configuration checks.
    """

    type: str = Field(description="Source type that detected the dependency")
    name: str = Field(description="Dependency name, possibly path-like")
    version: Optional[str] = Field(default=None, description="Detected version")
