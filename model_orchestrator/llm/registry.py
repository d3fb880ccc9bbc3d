from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from model_orchestrator.config.loader import load_capability_config
from model_orchestrator.llm.errors import DuplicateCapabilityError
from model_orchestrator.llm.task_types import TaskType, serves
from model_orchestrator.schemas import Capability, ModelProvider

logger = logging.getLogger(__name__)

DEFAULT_CAPABILITIES: tuple[Capability, ...] = (
    # Cultural analysis: needs nuance and long context
    Capability(
        model="claude-3-opus-20240229",
        provider=ModelProvider.ANTHROPIC,
        strengths=("cultural_analysis", "nuanced_reasoning", "long_context"),
        cost_per_million=15.0,
        average_latency_ms=2000,
        max_tokens=200_000,
        context_window=200_000,
    ),
    # Real-time trend detection: needs speed
    Capability(
        model="llama-3.3-70b-versatile",
        provider=ModelProvider.GROQ,
        strengths=("trend_detection", "real_time", "pattern_recognition"),
        cost_per_million=0.59,
        average_latency_ms=300,
        max_tokens=8000,
        context_window=32_768,
    ),
    Capability(
        model="gpt-4-turbo",
        provider=ModelProvider.OPENAI,
        strengths=("creative_generation", "ideation", "storytelling"),
        cost_per_million=10.0,
        average_latency_ms=1500,
        max_tokens=4096,
        context_window=128_000,
    ),
    Capability(
        model="deepseek-r1",
        provider=ModelProvider.DEEPINFRA,
        strengths=("strategic_reasoning", "logical_analysis", "planning"),
        cost_per_million=2.0,
        average_latency_ms=1000,
        max_tokens=4096,
        context_window=32_768,
    ),
    Capability(
        model="gpt-4-vision-preview",
        provider=ModelProvider.OPENAI,
        strengths=("visual_analysis", "trend_spotting", "creative_audit"),
        cost_per_million=20.0,
        average_latency_ms=2500,
        max_tokens=4096,
        context_window=128_000,
    ),
    # Quick iterations: ultra fast, near free
    Capability(
        model="llama-3.1-8b-instant",
        provider=ModelProvider.GROQ,
        strengths=("quick_iteration", "brainstorming", "validation"),
        cost_per_million=0.05,
        average_latency_ms=100,
        max_tokens=8000,
        context_window=32_768,
    ),
)


class CapabilityRegistry:
    """Add-only catalog of capabilities, kept in registration order.

    Built once at startup; reads need no locking afterwards.
    """

    def __init__(self, capabilities: Iterable[Capability] = ()) -> None:
        self._capabilities: list[Capability] = []
        self._by_id: dict[str, Capability] = {}
        for capability in capabilities:
            self.register(capability)

    def register(self, capability: Capability) -> None:
        if capability.id in self._by_id:
            raise DuplicateCapabilityError(capability.provider, capability.model)
        self._capabilities.append(capability)
        self._by_id[capability.id] = capability
        logger.debug("Registered capability %s", capability.id)

    def candidates_for(self, category: TaskType) -> list[Capability]:
        return [cap for cap in self._capabilities if serves(cap.strengths, category)]

    def get(self, capability_id: str) -> Capability | None:
        return self._by_id.get(capability_id)

    def __contains__(self, capability_id: object) -> bool:
        return capability_id in self._by_id

    def __iter__(self) -> Iterator[Capability]:
        return iter(tuple(self._capabilities))

    def __len__(self) -> int:
        return len(self._capabilities)

    @classmethod
    def from_config(cls, config_path: str | None) -> CapabilityRegistry | None:
        capabilities = load_capability_config(config_path)
        if capabilities is None:
            return None
        return cls(capabilities)


def build_default_registry(config_path: str | None = None) -> CapabilityRegistry:
    """YAML catalog if one loads, otherwise the built-in defaults."""
    if config_path:
        registry = CapabilityRegistry.from_config(config_path)
        if registry is not None:
            return registry
        logger.warning("Falling back to built-in capability catalog")
    return CapabilityRegistry(DEFAULT_CAPABILITIES)
