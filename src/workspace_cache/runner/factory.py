# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Backend factory for creating backend instances from configuration.

Uses the Registry pattern to map type strings to backend classes,
allowing extensibility without modifying factory code.
"""

from __future__ import annotations

from typing import ClassVar

from workspace_cache.backends import Backend, InMemoryBackend, SQLiteBackend

from .schema import BackendConfigSchema


class BackendFactoryError(Exception):
    """Raised when backend creation fails."""

    pass


class BackendFactory:
    """Creates backend instances from configuration.

    The ``"none"`` type is handled specially: it yields ``None``, which
    runs the cache in memory-only mode.

    Example:
        backend = BackendFactory.create(BackendConfigSchema(type="sqlite", path="ws.db"))
    """

    _registry: ClassVar[dict[str, type[Backend]]] = {
        "memory": InMemoryBackend,
        "sqlite": SQLiteBackend,
    }

    _unavailable_type: ClassVar[str] = "none"

    @classmethod
    def register(cls, type_name: str, backend_class: type[Backend]) -> None:
        """Register a custom backend type.

        Args:
            type_name: Type string to use in configuration
            backend_class: Backend class to instantiate

        Raises:
            ValueError: If type_name is reserved
        """
        if type_name == cls._unavailable_type:
            raise ValueError(f"Backend type '{type_name}' is reserved")
        cls._registry[type_name] = backend_class

    @classmethod
    def registered_types(cls) -> list[str]:
        """Return list of registered backend type names."""
        return [*cls._registry.keys(), cls._unavailable_type]

    @classmethod
    def create(cls, config: BackendConfigSchema) -> Backend | None:
        """Create a backend from configuration.

        Args:
            config: Backend configuration

        Returns:
            Backend instance, or ``None`` for the "none" type

        Raises:
            BackendFactoryError: If the type is unknown or creation fails
        """
        if config.type == cls._unavailable_type:
            return None

        backend_class = cls._registry.get(config.type)
        if not backend_class:
            available = ", ".join(sorted(cls.registered_types()))
            raise BackendFactoryError(
                f"Unknown backend type: '{config.type}'. Available types: {available}"
            )

        if backend_class is SQLiteBackend:
            if not config.path:
                raise BackendFactoryError("SQLite backend requires 'path' configuration")
            return SQLiteBackend(config.path, capacity=config.capacity)

        try:
            return backend_class(capacity=config.capacity)  # type: ignore[call-arg]
        except TypeError as e:
            raise BackendFactoryError(
                f"Failed to create backend of type '{config.type}': {e}"
            ) from e
