"""Multi-model orchestration: route tasks to the best capability, with feedback."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from model_orchestrator.constants import CAPABILITY_CONFIG_PATH
from model_orchestrator.llm.executor import Executor
from model_orchestrator.llm.performance import PerformanceStore
from model_orchestrator.llm.registry import CapabilityRegistry, build_default_registry
from model_orchestrator.llm.router import RankedCapability, Router
from model_orchestrator.providers.base import ProviderAdapter
from model_orchestrator.providers.defaults import build_default_providers
from model_orchestrator.schemas import Capability, ExecutionResult, PerformanceRecord, Task

logger = logging.getLogger(__name__)


class ModelOrchestrator:
    """Owns one registry, one performance store and the adapters keyed by provider name."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        providers: Mapping[str, ProviderAdapter],
        performance: PerformanceStore | None = None,
    ) -> None:
        self.registry = registry
        self.providers = dict(providers)
        self.performance = performance if performance is not None else PerformanceStore()
        self.router = Router(registry, self.performance)
        self.executor = Executor(self.router, self.performance, self.providers)

        unserved = sorted({cap.provider for cap in registry} - set(self.providers))
        if unserved:
            logger.warning("No adapter configured for provider(s): %s", ", ".join(unserved))

    @classmethod
    def from_env(cls) -> ModelOrchestrator:
        registry = build_default_registry(CAPABILITY_CONFIG_PATH or None)
        return cls(registry, build_default_providers())

    def route(self, task: Task) -> Capability:
        return self.router.route(task).capability

    def rank(self, task: Task) -> list[RankedCapability]:
        return self.router.rank(task)

    async def execute(self, task: Task) -> ExecutionResult:
        return await self.executor.execute(task)

    def get_performance_metrics(self) -> dict[str, PerformanceRecord]:
        return self.performance.snapshot()
