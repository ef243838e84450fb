"""
Restart strategy derivation after a task failure.

Decision procedure, first match wins:

1. Failed task writes nothing -> isolated_retry
2. No completed or dispatched task reads what it writes -> isolated_retry
3. Some completed task read it -> escalate
4. Otherwise (only dispatched readers) -> cascade_restart
"""

from collections.abc import Iterable

from loguru import logger

from waveplan.enforcement.models import RestartStrategy, RestartStrategyKind
from waveplan.plan.models import TaskDefinition


def _fmt(items: Iterable[str]) -> str:
    return "[" + ", ".join(items) + "]"


def derive_restart_strategy(
    failed_task: TaskDefinition,
    all_tasks: list[TaskDefinition],
    completed_task_ids: Iterable[str],
    dispatched_task_ids: Iterable[str],
) -> RestartStrategy:
    """
    Decide how to recover from a failed task.

    A task id in both snapshots counts as completed. Affected tasks are
    listed in task-set order. Never raises: every input maps to exactly one
    strategy.

    Args:
        failed_task: The task that failed.
        all_tasks: Full task set.
        completed_task_ids: Ids of tasks confirmed done.
        dispatched_task_ids: Ids of tasks in flight.

    Returns:
        RestartStrategy with a reason naming the components and tasks involved.
    """
    failed_writes = failed_task.writes
    completed = set(completed_task_ids)
    active = completed | set(dispatched_task_ids)

    if not failed_writes:
        result = RestartStrategy(
            strategy=RestartStrategyKind.ISOLATED_RETRY,
            reason=f"Task {failed_task.id} has no write set - retry is safe",
        )
        logger.info(f"Restart {failed_task.id}: {result.strategy.value}")
        return result

    affected: list[str] = []
    consumed: set[str] = set()
    for task in all_tasks:
        if task.id == failed_task.id or task.id not in active or task.id in affected:
            continue
        shared = task.reads & failed_writes
        if shared:
            affected.append(task.id)
            consumed |= shared

    writes_str = _fmt(sorted(failed_writes))

    if not affected:
        result = RestartStrategy(
            strategy=RestartStrategyKind.ISOLATED_RETRY,
            reason=(
                f"Task {failed_task.id} write set {writes_str} is disjoint from "
                f"the read sets of all completed and dispatched tasks"
            ),
        )
        logger.info(f"Restart {failed_task.id}: {result.strategy.value}")
        return result

    consumed_str = _fmt(sorted(consumed))
    completed_affected = [task_id for task_id in affected if task_id in completed]

    if completed_affected:
        result = RestartStrategy(
            strategy=RestartStrategyKind.ESCALATE,
            reason=(
                f"Completed tasks {_fmt(completed_affected)} consumed {consumed_str} "
                f"from failed task {failed_task.id} - possible planning problem"
            ),
            affected_tasks=affected,
        )
        logger.warning(f"Restart {failed_task.id}: escalate ({result.reason})")
        return result

    result = RestartStrategy(
        strategy=RestartStrategyKind.CASCADE_RESTART,
        reason=(
            f"Dispatched tasks {_fmt(affected)} read {consumed_str} written by "
            f"failed task {failed_task.id} - cascade restart required"
        ),
        affected_tasks=affected,
    )
    logger.info(f"Restart {failed_task.id}: {result.strategy.value} {_fmt(affected)}")
    return result
