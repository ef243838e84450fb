"""Critical path - the longest chain of RAW-dependent tasks."""

from loguru import logger

from waveplan.plan.models import TaskDefinition
from waveplan.scheduler.graph import TaskGraph
from waveplan.scheduler.models import CriticalPath, Hazard, HazardType


def compute_critical_path(
    tasks: list[TaskDefinition],
    hazards: list[Hazard],
) -> CriticalPath:
    """
    Compute the longest RAW dependency chain.

    Length counts tasks, not time: an empty task set has length 0, and a
    task set without RAW hazards has length 1. Non-RAW hazards are ignored.
    Among equally long chains the one ending at the earliest task (in input
    order) wins, and each step back prefers the earliest predecessor.

    Args:
        tasks: Task definitions in scheduling order.
        hazards: Hazards for the task set; only RAW entries are used.

    Returns:
        CriticalPath with ordered task ids and chain length.

    Raises:
        CycleError: If the RAW hazards form a cycle.
        SchedulingError: If a RAW hazard names an unknown task.
    """
    if not tasks:
        return CriticalPath()

    graph = TaskGraph.from_hazards(tasks, hazards, {HazardType.RAW})
    order = graph.topological_order(graph_name="RAW")

    length = [1] * len(graph)
    previous: list[int | None] = [None] * len(graph)

    for node in order:
        for pred in graph.predecessors(node):
            if length[pred] + 1 > length[node]:
                length[node] = length[pred] + 1
                previous[node] = pred

    end = max(range(len(graph)), key=lambda i: (length[i], -i))

    path: list[str] = []
    cursor: int | None = end
    while cursor is not None:
        path.append(graph.task_ids[cursor])
        cursor = previous[cursor]
    path.reverse()

    logger.debug(f"Critical path ({len(path)}): {' -> '.join(path)}")
    return CriticalPath(task_ids=path, length=len(path))
