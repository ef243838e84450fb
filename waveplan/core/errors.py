"""Exception hierarchy for Waveplan.

Configuration and scheduling problems are raised; capability violations
and restart decisions are returned as data and never raised.
"""


class WaveplanError(Exception):
    """Base class for all Waveplan errors."""


class ManifestError(WaveplanError, ValueError):
    """Raised when a manifest file is malformed."""


class PlanFileError(WaveplanError, ValueError):
    """Raised when a task-set file cannot be read into task definitions."""


class SchedulingError(WaveplanError, ValueError):
    """Raised when a task set cannot be scheduled.

    Attributes:
        task_ids: Ids of the tasks involved, in task-set order.
    """

    def __init__(self, message: str, task_ids: list[str] | None = None) -> None:
        super().__init__(message)
        self.task_ids: list[str] = list(task_ids or [])

    def to_dict(self) -> dict:
        """Convert error to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": str(self),
            "task_ids": self.task_ids,
        }


class CycleError(SchedulingError):
    """Raised when the hazard graph contains a cycle."""

    def __init__(self, task_ids: list[str], graph: str = "hazard") -> None:
        super().__init__(
            f"Cycle detected in {graph} graph involving tasks: {', '.join(task_ids)}",
            task_ids,
        )
        self.graph = graph
