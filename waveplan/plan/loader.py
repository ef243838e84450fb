"""Task-set loading from YAML or JSON files.

The document holds a top-level ``tasks`` list::

    tasks:
      - id: T1
        touches: {writes: [auth]}
      - id: T2
        touches: {reads: [auth]}
        mutexes: [port-8080]
"""

from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from waveplan.core.errors import PlanFileError
from waveplan.core.yamlio import read_yaml
from waveplan.plan.models import TaskDefinition


def load_tasks(plan_path: str | Path) -> list[TaskDefinition]:
    """
    Load task definitions in file order.

    Args:
        plan_path: Path to the YAML/JSON task-set file.

    Returns:
        List of TaskDefinition, preserving declaration order.

    Raises:
        PlanFileError: If the file is unreadable or malformed.
    """
    path = Path(plan_path)

    try:
        raw = read_yaml(path)
    except OSError as e:
        raise PlanFileError(f"Cannot read task file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise PlanFileError(f"Invalid task file {path}: {e}") from e

    if not isinstance(raw, dict) or not isinstance(raw.get("tasks"), list):
        raise PlanFileError(f"Task file {path} must contain a 'tasks' list")

    tasks: list[TaskDefinition] = []
    for index, entry in enumerate(raw["tasks"]):
        try:
            tasks.append(TaskDefinition.model_validate(entry))
        except ValidationError as e:
            raise PlanFileError(f"Invalid task at index {index} in {path}: {e}") from e

    logger.debug(f"Loaded {len(tasks)} tasks from {path}")
    return tasks
