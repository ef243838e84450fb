"""Enforcement - capability verification and restart strategies."""

from waveplan.enforcement.models import (
    CapabilityReport,
    RestartStrategy,
    RestartStrategyKind,
    Violation,
)
from waveplan.enforcement.capabilities import verify_capabilities
from waveplan.enforcement.restart import derive_restart_strategy

__all__ = [
    "CapabilityReport",
    "RestartStrategy",
    "RestartStrategyKind",
    "Violation",
    "derive_restart_strategy",
    "verify_capabilities",
]
