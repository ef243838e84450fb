"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import yaml

# Set test environment
os.environ.setdefault("WAVEPLAN_LOG_LEVEL", "DEBUG")
os.environ.setdefault("WAVEPLAN_DEBUG", "false")

from waveplan.manifest.models import Component, Manifest  # noqa: E402
from waveplan.plan.models import TaskDefinition, Touches  # noqa: E402


def make_task(
    task_id: str,
    reads: list[str] | None = None,
    writes: list[str] | None = None,
    mutexes: list[str] | None = None,
) -> TaskDefinition:
    """Build a TaskDefinition with terse arguments."""
    return TaskDefinition(
        id=task_id,
        touches=Touches(reads=reads or [], writes=writes or []),
        mutexes=mutexes or [],
    )


@pytest.fixture
def clean_settings() -> Generator:
    """Clear cached settings before and after the test."""
    from waveplan.core.config import clear_settings_cache

    clear_settings_cache()

    yield

    clear_settings_cache()


@pytest.fixture
def manifest() -> Manifest:
    """Provide a manifest with nested components under /project."""
    return Manifest.from_components(
        [
            Component(name="auth", paths=["/project/src/auth"]),
            Component(name="api", paths=["/project/src/api"], deps=["auth"]),
            Component(name="src", paths=["/project/src"]),
            Component(name="web", paths=["/project/web", "/project/public"]),
        ]
    )


@pytest.fixture
def sample_tasks() -> list[TaskDefinition]:
    """Provide a small task set with RAW, WAR, WAW and MUTEX hazards."""
    return [
        make_task("schema", writes=["db"]),
        make_task("auth", reads=["db"], writes=["auth"]),
        make_task("api", reads=["auth", "db"], writes=["api"], mutexes=["port-8080"]),
        make_task("web", reads=["api"], writes=["web"], mutexes=["port-8080"]),
        make_task("docs", reads=["api"]),
    ]


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, object], Path]:
    """Write a document to a YAML file under tmp_path and return its path."""

    def _write(name: str, data: object) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path

    return _write


@pytest.fixture
def task_factory() -> Callable[..., TaskDefinition]:
    """Provide the make_task helper to tests."""
    return make_task
