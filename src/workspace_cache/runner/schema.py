# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Data transfer objects for runner input/output.

These Pydantic models define the JSON contract of
``python -m workspace_cache.runner``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from workspace_cache.config import CacheConfig


class BackendConfigSchema(BaseModel):
    """Backend configuration.

    Attributes:
        type: Backend type ("memory", "sqlite" or "none")
        path: Path to SQLite database file (for sqlite type)
        capacity: Optional capacity in characters
    """

    type: str = "memory"
    path: str = ""
    capacity: int | None = Field(default=None, ge=0)


class OperationSchema(BaseModel):
    """Single cache operation.

    Attributes:
        op: Operation name
        key: Storage key (ignored by "flush")
        value: Value to save (for "save")
        fallback: Value returned by "load" when nothing is stored
        immediate: Commit a "save" inline instead of debouncing it
    """

    op: Literal["save", "load", "remove", "flush"]
    key: str = ""
    value: Any = None
    fallback: Any = None
    immediate: bool = False


class RunnerInput(BaseModel):
    """Complete input read from stdin.

    Attributes:
        backend: Backend the cache writes through to
        cache: Cache tunables
        legacy: Optional backend to migrate known keys from first
        hydrate: Seed the write-cache memo from the backend first
        operations: Operations to apply, in order
    """

    backend: BackendConfigSchema = Field(default_factory=BackendConfigSchema)
    cache: CacheConfig = Field(default_factory=lambda: CacheConfig(flush_on_exit=False))
    legacy: BackendConfigSchema | None = None
    hydrate: bool = False
    operations: list[OperationSchema] = Field(default_factory=list)


class OperationResultSchema(BaseModel):
    """Outcome of one operation.

    Attributes:
        op: Operation name
        key: Storage key
        value: Loaded value (for "load")
    """

    op: str
    key: str = ""
    value: Any = None


class BootstrapStatusSchema(BaseModel):
    """Hydration/migration summary."""

    recovered: bool = False
    warnings: list[str] = Field(default_factory=list)


class RunnerOutput(BaseModel):
    """Complete output written to stdout.

    The runner always outputs valid JSON matching this schema,
    even on errors.

    Attributes:
        success: Whether every operation ran
        results: Per-operation results, in input order
        pending_keys: Keys still not durably committed after the final flush
        bootstrap: Hydration/migration summary
        error: Error message (on failure)
        error_type: Error class name (on failure)
    """

    success: bool
    results: list[OperationResultSchema] = Field(default_factory=list)
    pending_keys: list[str] = Field(default_factory=list)
    bootstrap: BootstrapStatusSchema = Field(default_factory=BootstrapStatusSchema)
    error: str = ""
    error_type: str = ""
