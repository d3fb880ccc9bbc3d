import logging
import time
from typing import Any

import httpx
from anthropic import (
    APIConnectionError,
    APITimeoutError,
    AsyncAnthropic,
    InternalServerError,
    RateLimitError,
)
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from model_orchestrator.constants import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_TEMPERATURE,
    PROVIDER_MAX_RETRIES,
)
from model_orchestrator.providers.pricing import estimate_cost_usd
from model_orchestrator.providers.prompts import system_prompt_for, user_text
from model_orchestrator.schemas import ExecutionResult, Task, Usage

logger = logging.getLogger(__name__)

_TRANSIENT_ERRORS = (
    httpx.TimeoutException,
    httpx.ConnectError,
    RateLimitError,
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
)

ANTHROPIC_MODELS: list[str] = [
    "claude-3-opus-20240229",
    "claude-3-sonnet-20240229",
    "claude-3-haiku-20240307",
]

# Messages API exposes no useful completion signal; Claude output is scored flat.
CLAUDE_CONFIDENCE = 0.85


def _first_text(content: list[Any]) -> str:
    for block in content:
        if getattr(block, "type", None) == "text":
            return block.text
    return ""


class AnthropicProvider:
    """Adapter for Claude models over the Anthropic Messages API."""

    name = "anthropic"

    def __init__(
        self,
        client: AsyncAnthropic,
        models: list[str] | None = None,
        max_retries: int = PROVIDER_MAX_RETRIES,
    ) -> None:
        self.client = client
        self._models = list(models if models is not None else ANTHROPIC_MODELS)
        self.max_retries = max_retries

    def validate_model(self, model: str) -> bool:
        return model in self._models

    def available_models(self) -> list[str]:
        return list(self._models)

    async def _create_message(self, **kwargs: Any) -> Any:
        async for attempt in AsyncRetrying(
            wait=wait_random_exponential(min=1, max=30),
            stop=stop_after_attempt(self.max_retries),
            retry=retry_if_exception_type(_TRANSIENT_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self.client.messages.create(**kwargs)

    async def execute(self, task: Task, model: str) -> ExecutionResult:
        max_tokens = task.metadata.get("max_tokens") or DEFAULT_MAX_OUTPUT_TOKENS
        temperature = task.metadata.get("temperature", DEFAULT_TEMPERATURE)
        logger.info("anthropic request starting (model=%s, max_tokens=%s)", model, max_tokens)
        start_time = time.perf_counter()
        try:
            response = await self._create_message(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt_for(task),
                messages=[{"role": "user", "content": user_text(task)}],
            )
        except Exception as e:
            elapsed = time.perf_counter() - start_time
            logger.error(
                "anthropic request failed after %.2fs: %s: %s", elapsed, type(e).__name__, e
            )
            raise
        elapsed = time.perf_counter() - start_time
        logger.info("anthropic request completed in %.2fs", elapsed)

        usage = Usage(
            prompt_tokens=response.usage.input_tokens,
            completion_tokens=response.usage.output_tokens,
        )
        return ExecutionResult(
            task_id=task.id or f"{self.name}-{int(time.time() * 1000)}",
            model=model,
            provider=self.name,
            content=_first_text(response.content),
            usage=usage,
            latency_ms=elapsed * 1000.0,
            cost=estimate_cost_usd(usage.prompt_tokens, usage.completion_tokens, model),
            confidence=CLAUDE_CONFIDENCE,
            metadata={"stop_reason": getattr(response, "stop_reason", None)},
        )
