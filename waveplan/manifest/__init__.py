"""Component manifest - models, loading and file ownership."""

from waveplan.manifest.models import Component, Manifest
from waveplan.manifest.ownership import (
    ComponentPathEntry,
    build_component_paths,
    find_owning_component,
)
from waveplan.manifest.loader import load_manifest
from waveplan.manifest.touches import suggest_touches

__all__ = [
    "Component",
    "ComponentPathEntry",
    "Manifest",
    "build_component_paths",
    "find_owning_component",
    "load_manifest",
    "suggest_touches",
]
