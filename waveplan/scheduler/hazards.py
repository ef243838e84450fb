"""
Hazard detection between declared tasks.

For every pair (A, B) with A before B in the input order:

- RAW: A writes a component B reads
- WAR: A reads a component B writes
- WAW: both write the same component
- MUTEX: both hold the same mutex token

Each shared component or token yields its own hazard record.
"""

from collections import Counter

from loguru import logger

from waveplan.core.errors import SchedulingError
from waveplan.plan.models import TaskDefinition
from waveplan.scheduler.models import Hazard, HazardType


def ensure_unique_ids(tasks: list[TaskDefinition]) -> None:
    """Raise SchedulingError if any task id occurs more than once."""
    counts = Counter(task.id for task in tasks)
    duplicates = [task_id for task_id, count in counts.items() if count > 1]
    if duplicates:
        raise SchedulingError(
            f"Duplicate task ids: {', '.join(duplicates)}",
            duplicates,
        )


def _pair_hazards(a: TaskDefinition, b: TaskDefinition) -> list[Hazard]:
    """Hazards for one ordered pair, grouped RAW, WAR, WAW, MUTEX."""
    checks = (
        (HazardType.RAW, a.writes & b.reads),
        (HazardType.WAR, a.reads & b.writes),
        (HazardType.WAW, a.writes & b.writes),
        (HazardType.MUTEX, a.mutexes & b.mutexes),
    )
    return [
        Hazard(type=hazard_type, source_task_id=a.id, target_task_id=b.id, component=comp)
        for hazard_type, shared in checks
        for comp in sorted(shared)
    ]


def detect_hazards(tasks: list[TaskDefinition]) -> list[Hazard]:
    """
    Find every pairwise hazard in a task set.

    Args:
        tasks: Task definitions in scheduling order.

    Returns:
        Hazards in a stable order: by pair (input order), then type, then
        component name.

    Raises:
        SchedulingError: If task ids are not unique.

    Example:
        >>> t1 = TaskDefinition(id="T1", touches=Touches(writes=["auth"]))
        >>> t2 = TaskDefinition(id="T2", touches=Touches(reads=["auth"]))
        >>> [str(h) for h in detect_hazards([t1, t2])]
        ['RAW T1 -> T2 (auth)']
    """
    ensure_unique_ids(tasks)

    hazards: list[Hazard] = []
    for i, a in enumerate(tasks):
        for b in tasks[i + 1 :]:
            hazards.extend(_pair_hazards(a, b))

    if hazards:
        counts = Counter(h.type.value for h in hazards)
        summary = ", ".join(f"{counts[t.value]} {t.value}" for t in HazardType if counts[t.value])
        logger.info(f"Detected {len(hazards)} hazards across {len(tasks)} tasks ({summary})")
    else:
        logger.info(f"No hazards across {len(tasks)} tasks")

    return hazards
