"""Task definitions - models, loading and validation."""

from waveplan.plan.models import ImportDep, TaskDefinition, Touches
from waveplan.plan.loader import load_tasks
from waveplan.plan.validator import ValidationResult, validate_task_set

__all__ = [
    "ImportDep",
    "TaskDefinition",
    "Touches",
    "ValidationResult",
    "load_tasks",
    "validate_task_set",
]
