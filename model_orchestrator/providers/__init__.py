from model_orchestrator.providers.anthropic_messages import AnthropicProvider
from model_orchestrator.providers.base import ProviderAdapter
from model_orchestrator.providers.defaults import build_default_providers
from model_orchestrator.providers.openai_compatible import OpenAICompatibleProvider

__all__ = [
    "AnthropicProvider",
    "OpenAICompatibleProvider",
    "ProviderAdapter",
    "build_default_providers",
]
