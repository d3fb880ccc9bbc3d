import logging
import os

from anthropic import AsyncAnthropic
from dotenv import load_dotenv
from openai import AsyncOpenAI

from model_orchestrator.constants import ANTHROPIC_ENDPOINT, PROVIDER_ENDPOINTS
from model_orchestrator.providers.anthropic_messages import AnthropicProvider
from model_orchestrator.providers.base import ProviderAdapter
from model_orchestrator.providers.openai_compatible import (
    DEFAULT_MODELS,
    PROVIDER_TIMEOUT,
    OpenAICompatibleProvider,
)

load_dotenv()

logger = logging.getLogger(__name__)


def build_default_providers() -> dict[str, ProviderAdapter]:
    """One adapter per provider whose API key is set."""
    providers: dict[str, ProviderAdapter] = {}
    for name, (base_url, api_key_env) in PROVIDER_ENDPOINTS.items():
        api_key = os.environ.get(api_key_env, "")
        if not api_key:
            logger.debug("Skipping provider %s: %s not set", name, api_key_env)
            continue
        client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=PROVIDER_TIMEOUT)
        providers[name] = OpenAICompatibleProvider(name, client, DEFAULT_MODELS.get(name, []))

    base_url, api_key_env = ANTHROPIC_ENDPOINT
    api_key = os.environ.get(api_key_env, "")
    if api_key:
        client = AsyncAnthropic(api_key=api_key, base_url=base_url, timeout=PROVIDER_TIMEOUT)
        providers[AnthropicProvider.name] = AnthropicProvider(client)
    else:
        logger.debug("Skipping provider anthropic: %s not set", api_key_env)

    logger.info("Configured %d provider adapter(s): %s", len(providers), sorted(providers))
    return providers
