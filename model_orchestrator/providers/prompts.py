from model_orchestrator.schemas import Task

DEFAULT_SYSTEM_PROMPTS: dict[str, str] = {
    "creative_generation": (
        "You are an award-winning creative director known for breakthrough campaigns. "
        "Generate innovative, culturally resonant ideas that keep a clear strategic focus."
    ),
    "visual_analysis": (
        "You are an expert in visual culture, design trends and semiotics. Analyze visual "
        "content for cultural signals, emerging aesthetics and brand opportunities."
    ),
    "trend_detection": (
        "You are a trend forecaster. Identify emerging patterns, weak signals and nascent "
        "movements before they reach the mainstream."
    ),
    "strategic_reasoning": (
        "You are a strategic advisor with expertise in business strategy, market "
        "positioning and competitive dynamics."
    ),
    "cultural_analysis": (
        "You are an expert cultural analyst. Identify cultural tensions, movements and "
        "ideological opportunities."
    ),
}
FALLBACK_SYSTEM_PROMPT = "You are a helpful AI assistant with expertise in marketing and culture."


def system_prompt_for(task: Task) -> str:
    """The task's own system prompt, else the default for its type."""
    return task.system_prompt or DEFAULT_SYSTEM_PROMPTS.get(
        task.type.value, FALLBACK_SYSTEM_PROMPT
    )


def user_text(task: Task) -> str:
    return f"{task.context}\n\n{task.prompt}" if task.context else task.prompt
