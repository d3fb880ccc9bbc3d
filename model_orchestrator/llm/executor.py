from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from uuid import uuid4

from model_orchestrator.llm.errors import (
    ExecutionExhaustedError,
    ProviderExecutionError,
    ProviderNotConfiguredError,
)
from model_orchestrator.llm.performance import PerformanceStore
from model_orchestrator.llm.router import Router
from model_orchestrator.providers.base import ProviderAdapter
from model_orchestrator.schemas import Capability, ExecutionResult, Task

logger = logging.getLogger(__name__)


class Executor:
    """Runs a task on the best capability, with exactly one fallback on failure."""

    def __init__(
        self,
        router: Router,
        performance: PerformanceStore,
        providers: Mapping[str, ProviderAdapter],
    ) -> None:
        self.router = router
        self.performance = performance
        self.providers = providers

    async def _attempt(self, task: Task, capability: Capability) -> ExecutionResult:
        """One attempt. Always records the outcome before returning or raising."""
        start_time = time.perf_counter()
        adapter = self.providers.get(capability.provider)
        if adapter is None:
            self.performance.record(capability, _elapsed_ms(start_time), success=False)
            raise ProviderNotConfiguredError(capability.id, capability.provider)

        try:
            result = await adapter.execute(task, capability.model)
        except Exception as e:
            latency_ms = _elapsed_ms(start_time)
            self.performance.record(capability, latency_ms, success=False)
            raise ProviderExecutionError(capability.id, f"{type(e).__name__}: {e}") from e

        latency_ms = _elapsed_ms(start_time)
        min_confidence = task.constraints.min_confidence
        if (
            min_confidence is not None
            and result.confidence is not None
            and result.confidence < min_confidence
        ):
            self.performance.record(capability, latency_ms, success=False)
            raise ProviderExecutionError(
                capability.id,
                f"confidence {result.confidence:.2f} below required {min_confidence:.2f}",
            )

        self.performance.record(capability, latency_ms, success=True)
        logger.info("Task %s completed on %s in %.0fms", task.id, capability.id, latency_ms)
        return result

    async def execute(self, task: Task) -> ExecutionResult:
        if not task.id:
            task = task.model_copy(update={"id": uuid4().hex})
        task_id = task.id or ""

        primary = self.router.route(task).capability
        try:
            return await self._attempt(task, primary)
        except ProviderExecutionError as e:
            original_error = e
            logger.warning("Primary attempt failed for task %s: %s", task_id, e)

        # Re-rank after the failure was recorded; the primary is excluded outright.
        remaining = self.router.rank(task, exclude={primary.id})
        if not remaining:
            logger.error("Task %s failed and no fallback is available", task_id)
            raise ExecutionExhaustedError(
                task_id, original_error, original_error
            ) from original_error

        fallback = remaining[0].capability
        logger.warning("Falling back from %s to %s for task %s", primary.id, fallback.id, task_id)
        try:
            result = await self._attempt(task, fallback)
        except ProviderExecutionError as e:
            logger.error("Fallback attempt failed for task %s: %s", task_id, e)
            raise ExecutionExhaustedError(task_id, original_error, e) from e

        return result.model_copy(
            update={"metadata": {**result.metadata, "fallback_from": primary.id}}
        )


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000.0
