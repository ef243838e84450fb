"""
Waveplan - hazard analysis and wave scheduling for parallel task execution.

Answers, for a declared task set: which tasks conflict and why, how to
group them into parallel waves, and how to recover when one of them fails.
"""

__version__ = "0.1.0"

from waveplan.core.analyzer import PlanAnalysis, PlanAnalyzer

__all__ = ["PlanAnalysis", "PlanAnalyzer", "__version__"]
