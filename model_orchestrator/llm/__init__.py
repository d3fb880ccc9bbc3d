"""Routing layer for the model orchestrator.

Capability registry + scoring + single-fallback execution + performance feedback.
"""

from model_orchestrator.llm.task_types import STRENGTH_COMPATIBILITY, TaskType

__all__ = ["STRENGTH_COMPATIBILITY", "TaskType"]
