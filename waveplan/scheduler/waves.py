"""Wave planning - groups tasks into ordered parallel execution waves.

RAW, WAW and MUTEX hazards order their source task into a strictly earlier
wave than their target. WAR hazards do not separate waves unless
``war_separates`` is set, in which case the reader is placed strictly
before the writer like the other ordering hazards.

Every task lands in the earliest wave its predecessors allow.
"""

from loguru import logger

from waveplan.plan.models import TaskDefinition
from waveplan.scheduler.critical_path import compute_critical_path
from waveplan.scheduler.graph import TaskGraph
from waveplan.scheduler.models import ORDERING_HAZARDS, Hazard, HazardType, WavePlan


def compute_waves(
    tasks: list[TaskDefinition],
    hazards: list[Hazard],
    *,
    war_separates: bool = False,
    critical_first: bool = True,
) -> WavePlan:
    """
    Partition tasks into ordered waves.

    Within a wave, critical-path tasks come first (when ``critical_first``)
    and the rest follow input order.

    Args:
        tasks: Task definitions in scheduling order.
        hazards: Hazards for the task set, usually from detect_hazards.
        war_separates: Treat WAR hazards as ordering constraints.
        critical_first: Put critical-path tasks at the front of each wave.

    Returns:
        WavePlan whose waves list task ids.

    Raises:
        CycleError: Naming the tasks on a cycle in the ordering graph.
        SchedulingError: If task ids repeat or hazards name unknown tasks.

    Example:
        >>> compute_waves([t1, t2], detect_hazards([t1, t2])).waves
        [['T1'], ['T2']]
    """
    if not tasks:
        return WavePlan()

    edge_types = set(ORDERING_HAZARDS)
    if war_separates:
        edge_types.add(HazardType.WAR)

    graph = TaskGraph.from_hazards(tasks, hazards, edge_types)
    levels = graph.levels()

    critical: set[str] = set()
    if critical_first:
        critical = set(compute_critical_path(tasks, hazards).task_ids)

    grouped: list[list[int]] = [[] for _ in range(max(levels) + 1)]
    for node, level in enumerate(levels):
        grouped[level].append(node)

    waves: list[list[str]] = []
    for members in grouped:
        members.sort(key=lambda i: (graph.task_ids[i] not in critical, i))
        waves.append([graph.task_ids[i] for i in members])

    logger.info(f"Organized {len(tasks)} tasks into {len(waves)} waves")
    for i, wave in enumerate(waves):
        logger.debug(f"Wave {i}: {', '.join(wave)}")

    return WavePlan(waves=waves)
