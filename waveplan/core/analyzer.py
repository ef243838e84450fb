"""
PlanAnalyzer - the entry point an orchestrator calls.

Bundles hazard detection, wave planning and critical-path analysis into a
single analysis, and exposes capability verification and restart
derivation against the same task set. Holds no execution state: every
call works on the arguments it is given.
"""

from collections.abc import Iterable
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from waveplan.core.config import Settings, get_settings
from waveplan.core.errors import SchedulingError
from waveplan.enforcement.capabilities import verify_capabilities
from waveplan.enforcement.models import CapabilityReport, RestartStrategy
from waveplan.enforcement.restart import derive_restart_strategy
from waveplan.manifest.models import Manifest
from waveplan.plan.models import TaskDefinition
from waveplan.scheduler.critical_path import compute_critical_path
from waveplan.scheduler.hazards import detect_hazards
from waveplan.scheduler.models import CriticalPath, Hazard, WavePlan
from waveplan.scheduler.waves import compute_waves


class PlanAnalysis(BaseModel):
    """Hazards, waves and critical path for one task set."""

    model_config = ConfigDict(frozen=True)

    hazards: list[Hazard] = Field(default_factory=list)
    waves: WavePlan = Field(default_factory=WavePlan)
    critical_path: CriticalPath = Field(default_factory=CriticalPath)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return self.model_dump(mode="json")


class PlanAnalyzer:
    """
    Run scheduler analyses with settings-driven options.

    Usage:
        analyzer = PlanAnalyzer()
        analysis = analyzer.analyze(tasks)

        for wave in analysis.waves.waves:
            dispatch(wave)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def analyze(self, tasks: list[TaskDefinition]) -> PlanAnalysis:
        """
        Detect hazards, plan waves and compute the critical path.

        Raises:
            SchedulingError: If the task set cannot be scheduled.
        """
        logger.info(f"Analyzing {len(tasks)} tasks")

        hazards = detect_hazards(tasks)
        waves = compute_waves(
            tasks,
            hazards,
            war_separates=self.settings.waveplan_war_separates_waves,
            critical_first=self.settings.waveplan_critical_first,
        )
        critical_path = compute_critical_path(tasks, hazards)

        logger.info(
            f"Analysis complete: {len(hazards)} hazards, {waves.depth} waves, "
            f"critical path length {critical_path.length}"
        )
        return PlanAnalysis(hazards=hazards, waves=waves, critical_path=critical_path)

    def verify(
        self,
        task: TaskDefinition,
        modified_files: list[str],
        manifest: Manifest,
    ) -> CapabilityReport:
        """Verify the files a task modified against its declared writes."""
        logger.info(f"Verifying {len(modified_files)} modified files for task {task.id}")
        return verify_capabilities(modified_files, task.writes, manifest)

    def restart(
        self,
        failed_task_id: str,
        tasks: list[TaskDefinition],
        completed_task_ids: Iterable[str],
        dispatched_task_ids: Iterable[str],
    ) -> RestartStrategy:
        """
        Derive the restart strategy for a failed task in ``tasks``.

        Raises:
            SchedulingError: If ``failed_task_id`` is not in the task set.
        """
        failed = next((t for t in tasks if t.id == failed_task_id), None)
        if failed is None:
            raise SchedulingError(
                f"Failed task {failed_task_id} is not in the task set",
                [failed_task_id],
            )
        return derive_restart_strategy(failed, tasks, completed_task_ids, dispatched_task_ids)
