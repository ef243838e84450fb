"""Manifest loading from the flat YAML format.

The ``waveplan`` key holds the format version; every other top-level key
is a component name::

    waveplan: "0.1.0"
    auth:
      path: src/auth
      docs: [docs/auth.md]
    api:
      paths: [src/api, src/routes]
      deps: [auth]
"""

import os
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from waveplan.core.errors import ManifestError
from waveplan.core.yamlio import read_yaml
from waveplan.manifest.models import Component, Manifest

VERSION_KEY = "waveplan"


def _within(base: str, path: str) -> bool:
    rel = os.path.relpath(path, base)
    return not (rel == ".." or rel.startswith(".." + os.sep) or os.path.isabs(rel))


def load_manifest(manifest_path: str | Path) -> Manifest:
    """
    Load and validate a manifest file.

    Relative component paths and doc paths are resolved against the
    manifest's directory and must stay inside it.

    Args:
        manifest_path: Path to the manifest YAML file.

    Returns:
        Validated Manifest rooted at the manifest's directory.

    Raises:
        ManifestError: If the file is unreadable or malformed.
    """
    path = Path(manifest_path)
    base_dir = os.path.dirname(os.path.abspath(path))

    try:
        raw = read_yaml(path)
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid manifest YAML in {path}: {e}") from e

    if not isinstance(raw, dict) or VERSION_KEY not in raw:
        raise ManifestError(f"Invalid manifest: missing '{VERSION_KEY}' key")

    version = raw[VERSION_KEY]
    if not isinstance(version, str):
        raise ManifestError(f"Invalid manifest: '{VERSION_KEY}' must be a string")

    components: list[Component] = []
    for name, value in raw.items():
        if name == VERSION_KEY:
            continue
        if not isinstance(value, dict):
            raise ManifestError(f"Component '{name}' must be a mapping")

        try:
            component = Component.model_validate({**value, "name": str(name)})
        except ValidationError as e:
            raise ManifestError(f"Invalid component '{name}': {e}") from e

        resolved_paths = []
        for prefix in component.paths:
            resolved = os.path.normpath(os.path.join(base_dir, prefix))
            if not _within(base_dir, resolved):
                raise ManifestError(
                    f"Component '{name}' path escapes manifest directory: {resolved}"
                )
            resolved_paths.append(resolved)

        resolved_docs = []
        for doc in component.docs:
            resolved = os.path.normpath(os.path.join(base_dir, doc))
            if not _within(base_dir, resolved):
                raise ManifestError(f"Doc path escapes manifest directory: {doc}")
            resolved_docs.append(resolved)

        components.append(
            component.model_copy(update={"paths": resolved_paths, "docs": resolved_docs})
        )

    try:
        manifest = Manifest.from_components(components, root=base_dir)
    except ValueError as e:
        raise ManifestError(str(e)) from e

    manifest = manifest.model_copy(update={"version": version})
    logger.debug(f"Loaded manifest {path} with {len(manifest.components)} components")
    return manifest
