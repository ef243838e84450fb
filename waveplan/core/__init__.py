"""Core module - analyzer facade, configuration, logging and errors."""

from waveplan.core.config import Settings, clear_settings_cache, get_settings
from waveplan.core.errors import (
    CycleError,
    ManifestError,
    PlanFileError,
    SchedulingError,
    WaveplanError,
)
from waveplan.core.log import configure_logging
from waveplan.core.analyzer import PlanAnalysis, PlanAnalyzer

__all__ = [
    "CycleError",
    "ManifestError",
    "PlanAnalysis",
    "PlanAnalyzer",
    "PlanFileError",
    "SchedulingError",
    "Settings",
    "WaveplanError",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
