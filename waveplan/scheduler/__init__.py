"""
Scheduler - hazard detection, wave planning and critical-path analysis.

All functions are pure: they allocate fresh results per call and never
touch shared state.
"""

from waveplan.scheduler.models import (
    ORDERING_HAZARDS,
    CriticalPath,
    Hazard,
    HazardType,
    WavePlan,
)
from waveplan.scheduler.hazards import detect_hazards
from waveplan.scheduler.graph import TaskGraph
from waveplan.scheduler.critical_path import compute_critical_path
from waveplan.scheduler.waves import compute_waves

__all__ = [
    "ORDERING_HAZARDS",
    "CriticalPath",
    "Hazard",
    "HazardType",
    "TaskGraph",
    "WavePlan",
    "compute_critical_path",
    "compute_waves",
    "detect_hazards",
]
