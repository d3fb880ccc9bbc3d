"""Multi-model orchestrator.

Routes tasks to backend model capabilities by declared strengths, cost and
latency, falls back once on failure, and learns from observed outcomes.
"""

from model_orchestrator.llm.errors import (
    DuplicateCapabilityError,
    ExecutionExhaustedError,
    NoCapabilityForCategoryError,
    OrchestratorError,
    ProviderExecutionError,
    ProviderNotConfiguredError,
)
from model_orchestrator.llm.executor import Executor
from model_orchestrator.llm.performance import PerformanceStore
from model_orchestrator.llm.registry import CapabilityRegistry, build_default_registry
from model_orchestrator.llm.router import RankedCapability, Router
from model_orchestrator.llm.task_types import TaskType
from model_orchestrator.orchestrator import ModelOrchestrator
from model_orchestrator.providers.base import ProviderAdapter
from model_orchestrator.schemas import (
    Capability,
    ExecutionResult,
    ModelProvider,
    PerformanceRecord,
    Task,
    TaskConstraints,
    Usage,
)

__all__ = [
    "Capability",
    "CapabilityRegistry",
    "DuplicateCapabilityError",
    "ExecutionExhaustedError",
    "ExecutionResult",
    "Executor",
    "ModelOrchestrator",
    "ModelProvider",
    "NoCapabilityForCategoryError",
    "OrchestratorError",
    "PerformanceRecord",
    "PerformanceStore",
    "ProviderAdapter",
    "ProviderExecutionError",
    "ProviderNotConfiguredError",
    "RankedCapability",
    "Router",
    "Task",
    "TaskConstraints",
    "TaskType",
    "Usage",
    "build_default_registry",
]
