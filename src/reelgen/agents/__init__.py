"""AI agents for scene planning, repair and template generation."""

from .base import BaseAgent
from .planner import PlannerInput, ScenePlanner
from .repairer import RepairInput, SceneRepairer
from .template_builder import TemplateGenerator, TemplateInput

__all__ = [
    "BaseAgent",
    "PlannerInput",
    "ScenePlanner",
    "RepairInput",
    "SceneRepairer",
    "TemplateGenerator",
    "TemplateInput",
]
