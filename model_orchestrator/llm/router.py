from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass

from model_orchestrator.constants import (
    BASE_SCORE,
    COST_PENALTY,
    DIRECT_STRENGTH_BONUS,
    LATENCY_HEADROOM_DIVISOR,
    LATENCY_PENALTY,
    SUCCESS_RATE_WEIGHT,
    TOKEN_LIMIT_PENALTY,
)
from model_orchestrator.llm.errors import NoCapabilityForCategoryError
from model_orchestrator.llm.performance import PerformanceStore
from model_orchestrator.llm.registry import CapabilityRegistry
from model_orchestrator.schemas import Capability, Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RankedCapability:
    capability: Capability
    score: float


class Router:
    """Ranks registry candidates for a task. Reads state, never writes it."""

    def __init__(self, registry: CapabilityRegistry, performance: PerformanceStore) -> None:
        self.registry = registry
        self.performance = performance

    def candidates(self, task: Task) -> list[Capability]:
        candidates = self.registry.candidates_for(task.type)
        required = task.constraints.required_provider
        if required:
            candidates = [cap for cap in candidates if cap.provider == required]
        return candidates

    def score(self, capability: Capability, task: Task) -> float:
        constraints = task.constraints
        score = BASE_SCORE

        if constraints.max_latency_ms:
            latency = self.performance.effective_latency(capability)
            if latency > constraints.max_latency_ms:
                score -= LATENCY_PENALTY
            else:
                score += (constraints.max_latency_ms - latency) / LATENCY_HEADROOM_DIVISOR

        if constraints.max_cost_per_million:
            if capability.cost_per_million > constraints.max_cost_per_million:
                score -= COST_PENALTY
            else:
                score += constraints.max_cost_per_million - capability.cost_per_million

        if task.estimated_tokens and capability.max_tokens < task.estimated_tokens:
            score -= TOKEN_LIMIT_PENALTY

        score += self.performance.success_rate(capability) * SUCCESS_RATE_WEIGHT

        if capability.has_strength(task.type.value):
            score += DIRECT_STRENGTH_BONUS

        return score

    def rank(self, task: Task, exclude: Collection[str] = ()) -> list[RankedCapability]:
        """Candidates best-first. `exclude` holds capability ids to skip.

        sorted() is stable, so equal scores keep registration order.
        """
        scored = [
            RankedCapability(capability=cap, score=self.score(cap, task))
            for cap in self.candidates(task)
            if cap.id not in exclude
        ]
        return sorted(scored, key=lambda r: r.score, reverse=True)

    def route(self, task: Task) -> RankedCapability:
        ranked = self.rank(task)
        if not ranked:
            raise NoCapabilityForCategoryError(task.type, task.constraints.required_provider)
        chosen = ranked[0]
        logger.info(
            "Router: task=%s type=%s → capability=%s (score=%.1f, %d candidates)",
            task.id,
            task.type,
            chosen.capability.id,
            chosen.score,
            len(ranked),
        )
        return chosen
