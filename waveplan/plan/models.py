"""Pydantic models for task definitions.

A TaskDefinition is the minimal projection of an orchestrator's task that
the scheduler needs: an id, the components it reads and writes, and any
mutex tokens it holds while running.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def _as_set(v: Any) -> Any:
    if v is None:
        return frozenset()
    if isinstance(v, str):
        return frozenset([v])
    return v


class Touches(BaseModel):
    """Declared read and write component sets of a task.

    Duplicates collapse and order is irrelevant; a component may appear in
    both sets.

    Example:
        >>> Touches(reads=["db", "db"], writes=["auth"]).reads
        frozenset({'db'})
    """

    model_config = ConfigDict(frozen=True)

    reads: frozenset[str] = Field(
        default_factory=frozenset,
        description="Components the task depends on",
    )
    writes: frozenset[str] = Field(
        default_factory=frozenset,
        description="Components the task may modify",
    )

    @field_validator("reads", "writes", mode="before")
    @classmethod
    def coerce_set(cls, v: Any) -> Any:
        """Accept None, a single name, or any iterable of names."""
        return _as_set(v)

    @field_serializer("reads", "writes")
    def serialize_sorted(self, v: frozenset[str]) -> list[str]:
        return sorted(v)


class ImportDep(BaseModel):
    """A static import edge between two components."""

    model_config = ConfigDict(frozen=True)

    from_component: str
    to_component: str


class TaskDefinition(BaseModel):
    """Schedulable task declaration.

    Example:
        >>> task = TaskDefinition(
        ...     id="T1",
        ...     touches=Touches(writes=["auth"]),
        ...     mutexes=["port-8080"],
        ... )
        >>> task.writes
        frozenset({'auth'})
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Task identifier, unique within a task set",
    )
    touches: Touches = Field(
        default_factory=Touches,
        description="Declared read/write component sets",
    )
    mutexes: frozenset[str] = Field(
        default_factory=frozenset,
        description="Exclusion tokens for non-data resources",
    )
    description: str = Field(
        default="",
        description="Human-readable summary",
    )

    @field_validator("mutexes", mode="before")
    @classmethod
    def coerce_mutexes(cls, v: Any) -> Any:
        """Accept None, a single token, or any iterable of tokens."""
        return _as_set(v)

    @field_serializer("mutexes")
    def serialize_mutexes(self, v: frozenset[str]) -> list[str]:
        return sorted(v)

    @property
    def reads(self) -> frozenset[str]:
        """Components this task reads."""
        return self.touches.reads

    @property
    def writes(self) -> frozenset[str]:
        """Components this task writes."""
        return self.touches.writes
