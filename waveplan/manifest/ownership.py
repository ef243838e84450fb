"""Ownership resolution - maps file paths to the components that own them."""

import os
from pathlib import PurePath
from typing import NamedTuple

from waveplan.manifest.models import Manifest


class ComponentPathEntry(NamedTuple):
    """A single (component, path prefix) pair used for lookup."""

    name: str
    path: PurePath


def normalize_path(path: str, base: str | None = None) -> PurePath:
    """Lexically normalise a path to an absolute PurePath.

    Relative paths are joined to ``base`` (or the working directory).
    The filesystem is never touched, so symlinks are not resolved.
    """
    if base is not None and not os.path.isabs(path):
        path = os.path.join(base, path)
    return PurePath(os.path.abspath(path))


def build_component_paths(manifest: Manifest) -> list[ComponentPathEntry]:
    """
    Build the ordered prefix table for ownership lookup.

    Entries are sorted by descending prefix length so the most specific
    prefix matches first; equal-length prefixes fall back to component
    name order. Build once and pass to find_owning_component for batch
    lookups.

    Args:
        manifest: Component manifest.

    Returns:
        List of ComponentPathEntry in match order.
    """
    entries = [
        ComponentPathEntry(name, normalize_path(prefix, manifest.root))
        for name, component in manifest.components.items()
        for prefix in component.paths
    ]
    entries.sort(key=lambda e: (-len(str(e.path)), e.name))
    return entries


def find_owning_component(
    file_path: str,
    manifest: Manifest,
    component_paths: list[ComponentPathEntry] | None = None,
) -> str | None:
    """
    Find which component owns a file via longest-prefix match.

    A prefix owns a path when the path equals it or is nested under it,
    compared segment by segment.

    Args:
        file_path: Path of the file to resolve.
        manifest: Component manifest.
        component_paths: Optional pre-built table from build_component_paths.

    Returns:
        Owning component name, or None when the file is outside all components.

    Example:
        >>> find_owning_component("/project/src/auth/login.py", manifest)
        'auth'
    """
    target = normalize_path(file_path, manifest.root)
    entries = component_paths if component_paths is not None else build_component_paths(manifest)

    for entry in entries:
        if target == entry.path or target.is_relative_to(entry.path):
            return entry.name

    return None
