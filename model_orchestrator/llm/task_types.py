from __future__ import annotations

from enum import StrEnum


class TaskType(StrEnum):
    CULTURAL_ANALYSIS = "cultural_analysis"
    TREND_DETECTION = "trend_detection"
    CREATIVE_GENERATION = "creative_generation"
    STRATEGIC_REASONING = "strategic_reasoning"
    VISUAL_ANALYSIS = "visual_analysis"
    QUICK_ITERATION = "quick_iteration"
    CONCEPT_DEVELOPMENT = "concept_development"
    VIRAL_ANALYSIS = "viral_analysis"
    RISK_ASSESSMENT = "risk_assessment"
    PERFORMANCE_PREDICTION = "performance_prediction"


# Strengths that serve task types other than their own name.
STRENGTH_COMPATIBILITY: dict[str, frozenset[TaskType]] = {
    "nuanced_reasoning": frozenset({TaskType.CULTURAL_ANALYSIS, TaskType.STRATEGIC_REASONING}),
    "pattern_recognition": frozenset({TaskType.TREND_DETECTION, TaskType.VIRAL_ANALYSIS}),
    "ideation": frozenset({TaskType.CREATIVE_GENERATION, TaskType.CONCEPT_DEVELOPMENT}),
    "logical_analysis": frozenset({TaskType.STRATEGIC_REASONING, TaskType.RISK_ASSESSMENT}),
}


def is_compatible_strength(strength: str, task_type: TaskType) -> bool:
    return task_type in STRENGTH_COMPATIBILITY.get(strength, frozenset())


def serves(strengths: tuple[str, ...] | list[str], task_type: TaskType) -> bool:
    """True if any strength matches the task type directly or via compatibility."""
    return task_type.value in strengths or any(
        is_compatible_strength(s, task_type) for s in strengths
    )
