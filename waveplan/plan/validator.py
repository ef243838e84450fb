"""Task-set consistency checks against a manifest."""

from collections import Counter
from typing import Any

from loguru import logger

from waveplan.manifest.models import Manifest
from waveplan.plan.models import TaskDefinition
from waveplan.scheduler.models import Hazard, HazardType


class ValidationResult:
    """Outcome of validating a task set."""

    def __init__(
        self,
        errors: list[str] | None = None,
        warnings: list[str] | None = None,
    ):
        self.errors = errors or []
        self.warnings = warnings or []

    @property
    def valid(self) -> bool:
        """True when no errors were found."""
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "valid": self.valid,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def validate_task_set(
    tasks: list[TaskDefinition],
    manifest: Manifest,
    hazards: list[Hazard] | None = None,
) -> ValidationResult:
    """
    Validate a task set against the manifest.

    Errors: duplicate task ids, and touches naming components the manifest
    does not declare. Warnings: one per WAW hazard, when hazards are given.
    Never raises.
    """
    result = ValidationResult()
    known = set(manifest.components)

    counts = Counter(task.id for task in tasks)
    for task_id, count in counts.items():
        if count > 1:
            result.errors.append(f"Duplicate task ID: {task_id}")

    for task in tasks:
        for comp in sorted(task.reads - known):
            result.errors.append(f'Task {task.id}: unknown read component "{comp}"')
        for comp in sorted(task.writes - known):
            result.errors.append(f'Task {task.id}: unknown write component "{comp}"')

    for hazard in hazards or []:
        if hazard.type == HazardType.WAW:
            result.warnings.append(
                f"WAW hazard: tasks {hazard.source_task_id} and {hazard.target_task_id} "
                f'both write to "{hazard.component}"'
            )

    logger.debug(
        f"Validated {len(tasks)} tasks: {len(result.errors)} errors, "
        f"{len(result.warnings)} warnings"
    )
    return result
