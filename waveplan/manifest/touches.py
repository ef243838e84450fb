"""Suggest a touches declaration from the files a task will change."""

from waveplan.manifest.models import Manifest
from waveplan.manifest.ownership import build_component_paths, find_owning_component
from waveplan.plan.models import ImportDep, Touches


def suggest_touches(
    file_paths: list[str],
    manifest: Manifest,
    import_deps: list[ImportDep],
) -> Touches:
    """
    Derive reads/writes from file paths and component import edges.

    Every owned file puts its component in ``writes``. An import edge from a
    written component to one that is not written puts the target in
    ``reads``. Files outside all components are ignored.

    Example:
        >>> suggest_touches(
        ...     ["/project/src/api/routes.py"],
        ...     manifest,
        ...     [ImportDep(from_component="api", to_component="auth")],
        ... )
        Touches(reads=frozenset({'auth'}), writes=frozenset({'api'}))
    """
    component_paths = build_component_paths(manifest)

    writes: set[str] = set()
    for file_path in file_paths:
        owner = find_owning_component(file_path, manifest, component_paths)
        if owner:
            writes.add(owner)

    reads = {
        dep.to_component
        for dep in import_deps
        if dep.from_component in writes and dep.to_component not in writes
    }

    return Touches(reads=reads, writes=writes)
