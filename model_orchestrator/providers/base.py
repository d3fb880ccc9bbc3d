"""Adapter interface the executor uses to reach a backend provider."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from model_orchestrator.schemas import ExecutionResult, Task


@runtime_checkable
class ProviderAdapter(Protocol):
    """Protocol implemented by provider adapters.

    Adapters own transport, authentication and timeouts. Any exception raised
    from execute() is treated as a failed attempt.
    """

    name: str

    async def execute(self, task: Task, model: str) -> ExecutionResult:
        """Run the task against `model` and return the result."""

    def validate_model(self, model: str) -> bool:
        """Return True if this adapter can serve `model`."""

    def available_models(self) -> list[str]:
        """List the model identifiers this adapter supports."""
