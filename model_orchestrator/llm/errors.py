from __future__ import annotations


class OrchestratorError(Exception):
    pass


class NoCapabilityForCategoryError(OrchestratorError):
    def __init__(self, category: str, required_provider: str | None = None) -> None:
        self.category = category
        self.required_provider = required_provider
        message = f"No capability registered for task type: {category}"
        if required_provider:
            message += f" (required provider: {required_provider})"
        super().__init__(message)


class DuplicateCapabilityError(OrchestratorError):
    def __init__(self, provider: str, model: str) -> None:
        self.provider = provider
        self.model = model
        super().__init__(f"Capability already registered: {provider}:{model}")


class ProviderExecutionError(OrchestratorError):
    """A single attempt against one capability failed."""

    def __init__(self, capability_id: str, message: str) -> None:
        self.capability_id = capability_id
        super().__init__(f"{capability_id}: {message}")


class ProviderNotConfiguredError(ProviderExecutionError):
    def __init__(self, capability_id: str, provider: str) -> None:
        self.provider = provider
        super().__init__(capability_id, f"provider {provider!r} has no registered adapter")


class ExecutionExhaustedError(OrchestratorError):
    """Primary and fallback attempts both failed, or no fallback existed."""

    def __init__(
        self,
        task_id: str,
        original_error: ProviderExecutionError,
        last_error: ProviderExecutionError,
    ) -> None:
        self.task_id = task_id
        self.original_error = original_error
        self.last_error = last_error
        if original_error is last_error:
            detail = f"no fallback available after: {original_error}"
        else:
            detail = f"primary failed ({original_error}); fallback failed ({last_error})"
        super().__init__(f"Task {task_id} exhausted all attempts: {detail}")
