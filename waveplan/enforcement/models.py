"""Pydantic models for capability checks and restart decisions."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Violation(BaseModel):
    """A file modified outside the task's declared write scope."""

    model_config = ConfigDict(frozen=True)

    path: str
    actual_component: str | None = Field(
        default=None,
        description="Owning component, or None when the file is outside all components",
    )

    def __str__(self) -> str:
        owner = self.actual_component or "outside all components"
        return f"{self.path} ({owner})"


class CapabilityReport(BaseModel):
    """Result of verifying a task's modified files."""

    model_config = ConfigDict(frozen=True)

    violations: list[Violation] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True when every modified file is within the declared writes."""
        return not self.violations


class RestartStrategyKind(str, Enum):
    """Recovery action after a task failure."""

    ISOLATED_RETRY = "isolated_retry"  # Retry the failed task alone
    CASCADE_RESTART = "cascade_restart"  # Restart dispatched consumers too
    ESCALATE = "escalate"  # Completed consumers - defer to a human


class RestartStrategy(BaseModel):
    """Recovery decision for one failed task."""

    model_config = ConfigDict(frozen=True)

    strategy: RestartStrategyKind
    reason: str
    affected_tasks: list[str] = Field(default_factory=list)
