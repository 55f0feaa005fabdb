# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Runner submodule for applying cache operations from JSON.

Usage:
    python -m workspace_cache.runner < input.json > output.json

Exports:
    Executor: Applies a batch of operations to a configured cache
    BackendFactory: Creates backend instances from configuration
    RunnerInput: Input schema
    RunnerOutput: Output schema
"""

from .executor import ExecutionError, Executor
from .factory import BackendFactory, BackendFactoryError
from .schema import (
    BackendConfigSchema,
    BootstrapStatusSchema,
    OperationResultSchema,
    OperationSchema,
    RunnerInput,
    RunnerOutput,
)

__all__ = [
    "BackendConfigSchema",
    "BackendFactory",
    "BackendFactoryError",
    "BootstrapStatusSchema",
    "ExecutionError",
    "Executor",
    "OperationResultSchema",
    "OperationSchema",
    "RunnerInput",
    "RunnerOutput",
]
