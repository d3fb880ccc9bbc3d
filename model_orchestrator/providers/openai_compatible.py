import logging
import time
from typing import Any

import httpx
from openai import (
    APIConnectionError,
    APITimeoutError,
    AsyncOpenAI,
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
    PROVIDER_TIMEOUT_SECONDS,
)
from model_orchestrator.providers.pricing import estimate_cost_usd
from model_orchestrator.providers.prompts import system_prompt_for, user_text
from model_orchestrator.schemas import ExecutionResult, Task, Usage

logger = logging.getLogger(__name__)

PROVIDER_TIMEOUT = httpx.Timeout(
    connect=30.0, read=float(PROVIDER_TIMEOUT_SECONDS), write=30.0, pool=30.0
)

_TRANSIENT_ERRORS = (
    httpx.TimeoutException,
    httpx.ConnectError,
    RateLimitError,
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
)

DEFAULT_MODELS: dict[str, list[str]] = {
    "openai": ["gpt-4-turbo", "gpt-4-turbo-2024-04-09", "gpt-4-vision-preview", "gpt-3.5-turbo"],
    "groq": ["llama-3.3-70b-versatile", "llama-3.1-8b-instant"],
    "deepinfra": ["deepseek-r1"],
    "perplexity": [],
}

# finish_reason -> confidence
_CONFIDENCE_BY_FINISH_REASON: dict[str, float] = {"stop": 0.9, "length": 0.7}
_DEFAULT_CONFIDENCE = 0.8


def _build_messages(task: Task, model: str) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = [{"role": "system", "content": system_prompt_for(task)}]

    images = task.metadata.get("images")
    if images and "vision" in model:
        content: list[dict[str, Any]] = [{"type": "text", "text": task.prompt}]
        content.extend({"type": "image_url", "image_url": {"url": url}} for url in images)
        messages.append({"role": "user", "content": content})
    else:
        messages.append({"role": "user", "content": user_text(task)})
    return messages


def estimate_confidence(finish_reason: str | None) -> float:
    if finish_reason is None:
        return _DEFAULT_CONFIDENCE
    return _CONFIDENCE_BY_FINISH_REASON.get(finish_reason, _DEFAULT_CONFIDENCE)


class OpenAICompatibleProvider:
    """Adapter for any endpoint speaking the OpenAI chat completions API."""

    def __init__(
        self,
        name: str,
        client: AsyncOpenAI,
        models: list[str],
        max_retries: int = PROVIDER_MAX_RETRIES,
    ) -> None:
        self.name = name
        self.client = client
        self._models = list(models)
        self.max_retries = max_retries

    def validate_model(self, model: str) -> bool:
        return model in self._models

    def available_models(self) -> list[str]:
        return list(self._models)

    async def _create_completion(self, **kwargs: Any) -> Any:
        async for attempt in AsyncRetrying(
            wait=wait_random_exponential(min=1, max=30),
            stop=stop_after_attempt(self.max_retries),
            retry=retry_if_exception_type(_TRANSIENT_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self.client.chat.completions.create(**kwargs)

    async def execute(self, task: Task, model: str) -> ExecutionResult:
        max_tokens = task.metadata.get("max_tokens") or DEFAULT_MAX_OUTPUT_TOKENS
        temperature = task.metadata.get("temperature", DEFAULT_TEMPERATURE)
        logger.info(
            "%s request starting (model=%s, max_tokens=%s)", self.name, model, max_tokens
        )
        start_time = time.perf_counter()
        try:
            completion = await self._create_completion(
                model=model,
                messages=_build_messages(task, model),
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except Exception as e:
            elapsed = time.perf_counter() - start_time
            logger.error(
                "%s request failed after %.2fs: %s: %s", self.name, elapsed, type(e).__name__, e
            )
            raise
        elapsed = time.perf_counter() - start_time
        logger.info("%s request completed in %.2fs", self.name, elapsed)

        if not completion.choices:
            raise ValueError(f"{self.name} returned no choices")
        choice = completion.choices[0]
        content = choice.message.content or ""

        usage = Usage()
        if completion.usage:
            usage = Usage(
                prompt_tokens=completion.usage.prompt_tokens,
                completion_tokens=completion.usage.completion_tokens,
            )

        return ExecutionResult(
            task_id=task.id or f"{self.name}-{int(time.time() * 1000)}",
            model=model,
            provider=self.name,
            content=content,
            usage=usage,
            latency_ms=elapsed * 1000.0,
            cost=estimate_cost_usd(usage.prompt_tokens, usage.completion_tokens, model),
            confidence=estimate_confidence(choice.finish_reason),
            metadata={"finish_reason": choice.finish_reason},
        )

