# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Executor for applying a batch of cache operations.

Orchestrates the full execution flow:
1. Create backends from configuration
2. Build a DurableCache over the primary backend
3. Optionally migrate from a legacy backend and hydrate
4. Apply operations in order
5. Flush pending writes
6. Return structured result
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from workspace_cache.cache import DurableCache

from .factory import BackendFactory, BackendFactoryError
from .schema import (
    BootstrapStatusSchema,
    OperationResultSchema,
    OperationSchema,
    RunnerInput,
    RunnerOutput,
)

if TYPE_CHECKING:
    from workspace_cache.backends import Backend


class ExecutionError(Exception):
    """Raised when an operation is malformed."""

    pass


class Executor:
    """Applies cache operations described by a :class:`RunnerInput`.

    Responsibilities:
    - Create backends from configuration
    - Build the cache, migrate and hydrate when asked
    - Run operations, then flush
    - Translate results to output schema

    Pass a backend to the constructor to override creation from config.
    An injected backend is never closed by the executor.

    Example:
        executor = Executor()
        output = await executor.execute(input_data)

        # For testing with an inspectable backend:
        backend = InMemoryBackend()
        executor = Executor(backend=backend)
    """

    def __init__(self, backend: Backend | None = None) -> None:
        self._injected_backend = backend

    async def execute(self, input_data: RunnerInput) -> RunnerOutput:
        """Execute the full batch.

        Note:
            This method catches all exceptions and returns them as
            RunnerOutput errors, ensuring valid JSON is always returned.
        """
        try:
            return await self._execute_internal(input_data)
        except BackendFactoryError as e:
            return RunnerOutput(success=False, error=str(e), error_type="BackendFactoryError")
        except ExecutionError as e:
            return RunnerOutput(success=False, error=str(e), error_type="ExecutionError")
        except Exception as e:
            return RunnerOutput(success=False, error=str(e), error_type=type(e).__name__)

    async def _execute_internal(self, input_data: RunnerInput) -> RunnerOutput:
        """Internal execution logic.

        Separated from execute() to allow exception propagation
        for testing while execute() catches all errors.
        """
        owned: list[Backend] = []
        if self._injected_backend is not None:
            backend: Backend | None = self._injected_backend
        else:
            backend = BackendFactory.create(input_data.backend)
            if backend is not None:
                owned.append(backend)

        try:
            legacy = None
            if input_data.legacy is not None:
                legacy = BackendFactory.create(input_data.legacy)
                if legacy is not None:
                    owned.append(legacy)

            with DurableCache(backend, config=input_data.cache) as cache:
                if legacy is not None:
                    cache.migrate_from(legacy)
                if input_data.hydrate:
                    cache.hydrate()

                results = [self._apply(cache, operation) for operation in input_data.operations]
                cache.flush_pending_writes()

                status = cache.bootstrap_status
                return RunnerOutput(
                    success=True,
                    results=results,
                    pending_keys=cache.pending_keys(),
                    bootstrap=BootstrapStatusSchema(
                        recovered=status.recovered,
                        warnings=list(status.warnings),
                    ),
                )
        finally:
            for owned_backend in owned:
                owned_backend.close()

    def _apply(self, cache: DurableCache, operation: OperationSchema) -> OperationResultSchema:
        """Run one operation against *cache*."""
        if operation.op != "flush" and not operation.key:
            raise ExecutionError(f"Operation '{operation.op}' requires a 'key'")

        value: Any = None
        if operation.op == "save":
            cache.save(operation.key, operation.value, immediate=operation.immediate)
        elif operation.op == "load":
            value = cache.load(operation.key, operation.fallback)
        elif operation.op == "remove":
            cache.remove(operation.key)
        else:
            cache.flush_pending_writes()

        return OperationResultSchema(op=operation.op, key=operation.key, value=value)
