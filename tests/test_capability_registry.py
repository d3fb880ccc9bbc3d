import pytest
from pydantic import ValidationError

from model_orchestrator.llm.errors import DuplicateCapabilityError
from model_orchestrator.llm.registry import (
    DEFAULT_CAPABILITIES,
    CapabilityRegistry,
    build_default_registry,
)
from model_orchestrator.llm.task_types import TaskType, serves
from model_orchestrator.schemas import Capability


def _make_capability(
    model: str = "model-a",
    provider: str = "openai",
    strengths: tuple[str, ...] = ("quick_iteration",),
    cost_per_million: float = 1.0,
    average_latency_ms: float = 500,
    max_tokens: int = 8000,
    context_window: int = 32_000,
) -> Capability:
    return Capability(
        model=model,
        provider=provider,
        strengths=strengths,
        cost_per_million=cost_per_million,
        average_latency_ms=average_latency_ms,
        max_tokens=max_tokens,
        context_window=context_window,
    )


class TestCapability:
    def test_id_combines_provider_and_model(self):
        assert _make_capability("gpt-4-turbo", "openai").id == "openai:gpt-4-turbo"

    def test_frozen(self):
        cap = _make_capability()
        with pytest.raises(ValidationError):
            cap.cost_per_million = 0.0  # type: ignore[misc]

    def test_strengths_list_coerced_to_tuple(self):
        cap = Capability.model_validate(
            {
                "model": "m",
                "provider": "groq",
                "strengths": ["a", "b"],
                "cost_per_million": 1,
                "average_latency_ms": 100,
                "max_tokens": 10,
                "context_window": 10,
            }
        )
        assert cap.strengths == ("a", "b")

    def test_negative_cost_rejected(self):
        with pytest.raises(ValidationError):
            _make_capability(cost_per_million=-1.0)


class TestRegister:
    def test_register_and_lookup(self):
        registry = CapabilityRegistry()
        cap = _make_capability()
        registry.register(cap)
        assert len(registry) == 1
        assert cap.id in registry
        assert registry.get(cap.id) is cap

    def test_duplicate_pair_rejected(self):
        registry = CapabilityRegistry([_make_capability("m", "openai")])
        with pytest.raises(DuplicateCapabilityError) as exc_info:
            registry.register(_make_capability("m", "openai", cost_per_million=5.0))
        assert exc_info.value.provider == "openai"
        assert exc_info.value.model == "m"

    def test_duplicate_does_not_disturb_existing(self):
        original = _make_capability("m", "openai", cost_per_million=1.0)
        registry = CapabilityRegistry([original])
        with pytest.raises(DuplicateCapabilityError):
            registry.register(_make_capability("m", "openai", cost_per_million=9.0))
        assert len(registry) == 1
        assert registry.get("openai:m") is original

    def test_same_model_different_provider_allowed(self):
        registry = CapabilityRegistry(
            [_make_capability("llama", "groq"), _make_capability("llama", "deepinfra")]
        )
        assert len(registry) == 2

    def test_iteration_keeps_registration_order(self):
        caps = [_make_capability(f"m{i}") for i in range(4)]
        registry = CapabilityRegistry(caps)
        assert [c.model for c in registry] == ["m0", "m1", "m2", "m3"]


class TestCandidatesFor:
    def test_direct_strength_match(self):
        registry = CapabilityRegistry([_make_capability(strengths=("quick_iteration",))])
        assert len(registry.candidates_for(TaskType.QUICK_ITERATION)) == 1

    def test_compatible_strength_match(self):
        cap = _make_capability(strengths=("pattern_recognition",))
        registry = CapabilityRegistry([cap])
        assert registry.candidates_for(TaskType.TREND_DETECTION) == [cap]

    def test_no_match_returns_empty(self):
        registry = CapabilityRegistry([_make_capability(strengths=("validation",))])
        assert registry.candidates_for(TaskType.CULTURAL_ANALYSIS) == []

    def test_empty_registry_returns_empty(self):
        assert CapabilityRegistry().candidates_for(TaskType.QUICK_ITERATION) == []

    def test_preserves_registration_order(self):
        a = _make_capability("a", strengths=("ideation",))
        b = _make_capability("b", strengths=("creative_generation",))
        c = _make_capability("c", strengths=("validation",))
        registry = CapabilityRegistry([a, b, c])
        assert registry.candidates_for(TaskType.CREATIVE_GENERATION) == [a, b]

    def test_every_category_with_a_server_has_candidates(self):
        registry = build_default_registry()
        for category in TaskType:
            if any(serves(cap.strengths, category) for cap in registry):
                assert registry.candidates_for(category), category


class TestDefaultRegistry:
    def test_default_catalog_loaded(self):
        registry = build_default_registry()
        assert len(registry) == len(DEFAULT_CAPABILITIES)
        assert "groq:llama-3.1-8b-instant" in registry
        assert "anthropic:claude-3-opus-20240229" in registry

    def test_trend_detection_served_by_groq_70b(self):
        registry = build_default_registry()
        ids = [c.id for c in registry.candidates_for(TaskType.TREND_DETECTION)]
        assert ids == ["groq:llama-3.3-70b-versatile"]

    def test_strategic_reasoning_has_direct_and_compatible_candidates(self):
        registry = build_default_registry()
        ids = {c.id for c in registry.candidates_for(TaskType.STRATEGIC_REASONING)}
        assert ids == {"anthropic:claude-3-opus-20240229", "deepinfra:deepseek-r1"}

    def test_missing_config_falls_back_to_defaults(self):
        registry = build_default_registry("/nonexistent/capabilities.yaml")
        assert len(registry) == len(DEFAULT_CAPABILITIES)

    def test_performance_prediction_has_no_default_server(self):
        registry = build_default_registry()
        assert registry.candidates_for(TaskType.PERFORMANCE_PREDICTION) == []
