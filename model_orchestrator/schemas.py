from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from model_orchestrator.llm.task_types import TaskType


class ModelProvider(StrEnum):
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GROQ = "groq"
    DEEPINFRA = "deepinfra"
    PERPLEXITY = "perplexity"
    CUSTOM = "custom"


class Capability(BaseModel):
    """One deployable (provider, model) pair and its declared metrics."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(min_length=1)
    provider: str = Field(min_length=1)
    strengths: tuple[str, ...] = ()
    cost_per_million: float = Field(ge=0.0)
    average_latency_ms: float = Field(ge=0.0)
    max_tokens: int = Field(gt=0)
    context_window: int = Field(gt=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def id(self) -> str:
        return f"{self.provider}:{self.model}"

    def has_strength(self, tag: str) -> bool:
        return tag in self.strengths


class TaskConstraints(BaseModel):
    max_latency_ms: float | None = Field(default=None, gt=0)
    max_cost_per_million: float | None = Field(default=None, gt=0)
    min_confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    required_provider: str | None = None


class Task(BaseModel):
    id: str | None = None
    type: TaskType
    prompt: str
    context: str | None = None
    system_prompt: str | None = None
    estimated_tokens: int | None = Field(default=None, gt=0)
    constraints: TaskConstraints = Field(default_factory=TaskConstraints)
    metadata: dict[str, Any] = Field(default_factory=dict)


class Usage(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


class ExecutionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    task_id: str
    model: str
    provider: str
    content: str
    usage: Usage = Field(default_factory=Usage)
    latency_ms: float = 0.0
    cost: float = 0.0
    confidence: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class PerformanceRecord(BaseModel):
    """Point-in-time copy of one capability's rolling statistics."""

    model_config = ConfigDict(frozen=True)

    capability_id: str
    total_calls: int = 0
    successful_calls: int = 0
    total_latency_ms: float = 0.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success_rate(self) -> float | None:
        """None until observed; PerformanceStore supplies the default for scoring."""
        if self.total_calls == 0:
            return None
        return self.successful_calls / self.total_calls

    @computed_field  # type: ignore[prop-decorator]
    @property
    def average_latency_ms(self) -> float | None:
        if self.total_calls == 0:
            return None
        return self.total_latency_ms / self.total_calls
