"""Capability verification - modified files must stay within declared writes."""

from collections.abc import Iterable

from loguru import logger

from waveplan.enforcement.models import CapabilityReport, Violation
from waveplan.manifest.models import Manifest
from waveplan.manifest.ownership import build_component_paths, find_owning_component


def verify_capabilities(
    modified_files: list[str],
    writes: Iterable[str],
    manifest: Manifest,
) -> CapabilityReport:
    """
    Check modified files against a task's declared write components.

    A file is a violation when it belongs to no component, or to one not in
    ``writes``. Violations are reported, never raised.

    Args:
        modified_files: Paths the task actually changed.
        writes: Component names the task declared as write targets.
        manifest: Component manifest.

    Returns:
        CapabilityReport listing violations in input order.

    Example:
        >>> report = verify_capabilities(["/project/src/api/routes.py"], ["auth"], manifest)
        >>> report.violations[0].actual_component
        'api'
    """
    write_set = set(writes)
    component_paths = build_component_paths(manifest)
    violations: list[Violation] = []

    for file_path in modified_files:
        owner = find_owning_component(file_path, manifest, component_paths)
        if owner is None or owner not in write_set:
            violations.append(Violation(path=file_path, actual_component=owner))

    if violations:
        logger.warning(
            f"{len(violations)} of {len(modified_files)} modified files outside "
            f"declared writes [{', '.join(sorted(write_set))}]"
        )
    else:
        logger.debug(f"All {len(modified_files)} modified files within declared writes")

    return CapabilityReport(violations=violations)
