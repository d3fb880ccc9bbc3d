# USD per 1M tokens (input, output). Updated 2024-06.
PRICING_TABLE: dict[str, tuple[float, float]] = {
    "gpt-4-turbo": (10.00, 30.00),
    "gpt-4-vision-preview": (10.00, 30.00),
    "gpt-4o": (2.50, 10.00),
    "gpt-4o-mini": (0.15, 0.60),
    "gpt-3.5-turbo": (0.50, 1.50),
    "llama-3.3-70b-versatile": (0.59, 0.79),
    "llama-3.1-8b-instant": (0.05, 0.08),
    "deepseek-r1": (0.75, 2.40),
    "claude-3-opus": (15.00, 75.00),
    "claude-3-sonnet": (3.00, 15.00),
    "claude-3-haiku": (0.25, 1.25),
}

_DEFAULT_PRICE: tuple[float, float] = (2.50, 10.00)


def get_price(model: str) -> tuple[float, float]:
    """Exact match first, then the longest table key contained in the name."""
    model_lower = model.lower()
    price = PRICING_TABLE.get(model_lower)
    if price:
        return price
    best_key = ""
    for key, val in PRICING_TABLE.items():
        if key in model_lower and len(key) > len(best_key):
            best_key = key
            price = val
    return price or _DEFAULT_PRICE


def estimate_cost_usd(prompt_tokens: int, completion_tokens: int, model: str) -> float:
    input_price, output_price = get_price(model)
    input_cost = (prompt_tokens / 1_000_000) * input_price
    output_cost = (completion_tokens / 1_000_000) * output_price
    return round(input_cost + output_cost, 6)
