"""Configuration constants with trade-off documentation.

Each constant has a rationale explaining why this specific value was chosen.
Scoring weights are fixed; operational knobs are read from the environment.
"""

import os

# =============================================================================
# Environment Variable Helpers
# =============================================================================


def _parse_int_env(name: str, default: int, min_val: int, max_val: int) -> int:
    """Parse an integer environment variable with bounds clamping.

    Returns default if env var is unset or unparseable. Clamps to [min_val, max_val].
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(min_val, min(max_val, value))


def _parse_float_env(name: str, default: float, min_val: float, max_val: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return max(min_val, min(max_val, value))


# =============================================================================
# Scoring Weights
# =============================================================================

BASE_SCORE = 100.0
# Why 100: Every penalty below is a fixed subtraction. Starting at 100 keeps
# all realistic scores positive, which makes log output easy to eyeball.

LATENCY_PENALTY = 50.0
# Why 50: Missing the latency ceiling is the most user-visible failure, so it
# is the heaviest penalty. Still a penalty, not an exclusion: a slow model is
# better than no model.

LATENCY_HEADROOM_DIVISOR = 100.0
# Why 100: Headroom is in milliseconds. 1000ms of headroom is worth 10 points,
# enough to break ties but never enough to outweigh a direct strength match.

COST_PENALTY = 30.0
# Why 30: Budget overruns are recoverable (a bill), latency overruns are not.

TOKEN_LIMIT_PENALTY = 40.0
# Why 40: A model whose input limit is below the estimate will likely truncate.
# Heavier than cost, lighter than latency, because estimates are often rough.

SUCCESS_RATE_WEIGHT = 20.0
# Why 20: A capability that always fails loses 20 points versus a healthy one,
# enough to flip a ranking between two otherwise comparable candidates.

DIRECT_STRENGTH_BONUS = 30.0
# Why 30: A model that names the task type as a strength beats one that only
# serves it through the compatibility map.

DEFAULT_SUCCESS_RATE = _parse_float_env(
    "ORCHESTRATOR_DEFAULT_SUCCESS_RATE", default=1.0, min_val=0.0, max_val=1.0
)
# Why 1.0: Optimistic cold start. An unseen capability gets the full success
# bonus so that it is tried at least once. Lower it to favor proven models.

# =============================================================================
# Provider Configuration
# =============================================================================

PROVIDER_TIMEOUT_SECONDS = _parse_int_env(
    "PROVIDER_TIMEOUT_SECONDS", default=120, min_val=5, max_val=600
)
# Why 120: Long-form generation on large models takes 30-90s. The router does
# not cancel calls itself, so the adapter's read timeout is the only bound.

PROVIDER_MAX_RETRIES = _parse_int_env("PROVIDER_MAX_RETRIES", default=3, min_val=1, max_val=10)
# Why 3: Transient transport errors (429, connection reset) usually clear
# within 1-2 retries. Anything beyond that is better handled by fallback.

DEFAULT_MAX_OUTPUT_TOKENS = 4096
# Why 4096: Matches the smallest output limit in the default catalog, so the
# same request works against every OpenAI-compatible endpoint.

DEFAULT_TEMPERATURE = 0.7

PROVIDER_ENDPOINTS: dict[str, tuple[str, str]] = {
    "openai": (os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"), "OPENAI_API_KEY"),
    "groq": (os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1"), "GROQ_API_KEY"),
    "deepinfra": (
        os.getenv("DEEPINFRA_BASE_URL", "https://api.deepinfra.com/v1/openai"),
        "DEEPINFRA_API_KEY",
    ),
    "perplexity": (
        os.getenv("PERPLEXITY_BASE_URL", "https://api.perplexity.ai"),
        "PERPLEXITY_API_KEY",
    ),
}
# (base_url, api_key_env) per OpenAI-compatible provider. Providers whose key
# env var is unset are skipped by build_default_providers().

ANTHROPIC_ENDPOINT: tuple[str, str] = (
    os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com"),
    "ANTHROPIC_API_KEY",
)
# Claude speaks the Messages API, not chat completions, so it gets its own adapter.

# =============================================================================
# Capability Catalog
# =============================================================================

CAPABILITY_CONFIG_PATH = os.getenv("CAPABILITY_CONFIG_PATH", "")
# Path to a YAML capability catalog. If set and valid, it replaces the built-in
# default catalog. Example: CAPABILITY_CONFIG_PATH=config/capabilities.yaml
