"""Registry of dependency source types.

Detection itself lives outside this package; configuration only needs to
know which source type names exist to decide which of them are enabled.
"""

from __future__ import annotations

_registered: list[str] = []


def register_source(source_type: str) -> str:
    """Register a source type name.

    Registering the same name twice has no effect.

    Args:
        source_type: Source type name, e.g. "npm" or "bundler".

    Returns:
        The registered name.
    """
    if source_type not in _registered:
        _registered.append(source_type)
    return source_type


def registered_source_types() -> list[str]:
    """Return registered source type names in registration order."""
    return list(_registered)


def clear_registered_sources() -> None:
    """Forget all registered source types."""
    _registered.clear()


__all__ = [
    "clear_registered_sources",
    "register_source",
    "registered_source_types",
]
