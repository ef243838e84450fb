"""Pydantic models for scheduler output."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HazardType(str, Enum):
    """Kind of conflict between two tasks."""

    RAW = "RAW"  # Source writes, target reads - true dependency
    WAR = "WAR"  # Source reads, target writes - anti-dependency
    WAW = "WAW"  # Both write - output dependency
    MUTEX = "MUTEX"  # Both hold the same exclusion token


# Hazard types that force the target into a strictly later wave
ORDERING_HAZARDS = frozenset({HazardType.RAW, HazardType.WAW, HazardType.MUTEX})


class Hazard(BaseModel):
    """Ordered conflict record between two tasks.

    For MUTEX hazards ``component`` holds the shared mutex token.
    """

    model_config = ConfigDict(frozen=True)

    type: HazardType
    source_task_id: str
    target_task_id: str
    component: str

    def __str__(self) -> str:
        return f"{self.type.value} {self.source_task_id} -> {self.target_task_id} ({self.component})"


class WavePlan(BaseModel):
    """Ordered execution waves.

    Each wave lists task ids that may run in parallel; every wave runs after
    all earlier waves.
    """

    model_config = ConfigDict(frozen=True)

    waves: list[list[str]] = Field(default_factory=list)

    @property
    def depth(self) -> int:
        """Number of waves."""
        return len(self.waves)

    def wave_of(self, task_id: str) -> int:
        """Index of the wave containing ``task_id``.

        Raises:
            KeyError: If the task is not scheduled.
        """
        for index, wave in enumerate(self.waves):
            if task_id in wave:
                return index
        raise KeyError(task_id)


class CriticalPath(BaseModel):
    """Longest chain of RAW-dependent tasks."""

    model_config = ConfigDict(frozen=True)

    task_ids: list[str] = Field(default_factory=list)
    length: int = 0
