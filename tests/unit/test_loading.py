"""Unit tests for manifest and task-set loading, validation and settings."""

from pathlib import Path

import pytest

from waveplan.core.config import Settings, get_settings
from waveplan.core.errors import ManifestError, PlanFileError
from waveplan.manifest.loader import load_manifest
from waveplan.manifest.ownership import find_owning_component
from waveplan.plan.loader import load_tasks
from waveplan.plan.models import TaskDefinition, Touches
from waveplan.plan.validator import validate_task_set
from waveplan.scheduler.hazards import detect_hazards

# =============================================================================
# TEST load_manifest
# =============================================================================


class TestLoadManifest:
    """Tests for the flat YAML manifest loader."""

    def test_loads_components(self, write_yaml, tmp_path: Path) -> None:
        """Test components resolve relative to the manifest directory."""
        path = write_yaml(
            "waveplan.yaml",
            {
                "waveplan": "0.1.0",
                "auth": {"path": "src/auth", "docs": ["docs/auth.md"]},
                "api": {"paths": ["src/api", "src/routes"], "deps": ["auth"]},
            },
        )

        manifest = load_manifest(path)

        assert manifest.version == "0.1.0"
        assert manifest.component_names == ["api", "auth"]
        assert manifest.components["auth"].paths == [str(tmp_path / "src" / "auth")]
        assert manifest.components["auth"].docs == [str(tmp_path / "docs" / "auth.md")]
        assert manifest.components["api"].deps == ["auth"]
        assert find_owning_component(str(tmp_path / "src/routes/x.py"), manifest) == "api"

    def test_missing_version_key(self, write_yaml) -> None:
        """Test the version key is required."""
        with pytest.raises(ManifestError, match="missing 'waveplan' key"):
            load_manifest(write_yaml("m.yaml", {"auth": {"path": "src"}}))

    def test_empty_path_list(self, write_yaml) -> None:
        """Test a component with no paths is rejected."""
        with pytest.raises(ManifestError, match="auth"):
            load_manifest(write_yaml("m.yaml", {"waveplan": "1", "auth": {"paths": []}}))

    def test_path_escaping_directory(self, write_yaml) -> None:
        """Test component paths may not leave the manifest directory."""
        with pytest.raises(ManifestError, match="escapes"):
            load_manifest(write_yaml("m.yaml", {"waveplan": "1", "auth": {"path": "../x"}}))

    def test_duplicate_component_key(self, tmp_path: Path) -> None:
        """Test duplicate component names in YAML are rejected."""
        path = tmp_path / "m.yaml"
        path.write_text('waveplan: "1"\nauth:\n  path: a\nauth:\n  path: b\n')

        with pytest.raises(ManifestError, match="duplicate key"):
            load_manifest(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test an unreadable file raises ManifestError."""
        with pytest.raises(ManifestError):
            load_manifest(tmp_path / "absent.yaml")


# =============================================================================
# TEST load_tasks
# =============================================================================


class TestLoadTasks:
    """Tests for task-set file loading."""

    def test_loads_in_order(self, write_yaml) -> None:
        """Test tasks are loaded in declaration order with set semantics."""
        path = write_yaml(
            "plan.yaml",
            {
                "tasks": [
                    {"id": "T2", "touches": {"reads": ["auth", "auth"]}},
                    {"id": "T1", "touches": {"writes": ["auth"]}, "mutexes": ["port"]},
                ]
            },
        )

        tasks = load_tasks(path)

        assert [t.id for t in tasks] == ["T2", "T1"]
        assert tasks[0].reads == frozenset({"auth"})
        assert tasks[1].mutexes == frozenset({"port"})

    def test_json_file(self, tmp_path: Path) -> None:
        """Test JSON documents load through the same path."""
        path = tmp_path / "plan.json"
        path.write_text('{"tasks": [{"id": "T1", "touches": {"writes": ["a"]}}]}')
        assert load_tasks(path)[0].writes == frozenset({"a"})

    def test_missing_tasks_list(self, write_yaml) -> None:
        """Test a document without a tasks list is rejected."""
        with pytest.raises(PlanFileError):
            load_tasks(write_yaml("plan.yaml", {"steps": []}))

    def test_invalid_task(self, write_yaml) -> None:
        """Test an entry without an id is rejected with its index."""
        with pytest.raises(PlanFileError, match="index 1"):
            load_tasks(write_yaml("plan.yaml", {"tasks": [{"id": "ok"}, {"touches": {}}]}))


class TestTaskModels:
    """Tests for TaskDefinition normalisation."""

    def test_none_and_single_values(self) -> None:
        """Test None and single names coerce to sets."""
        task = TaskDefinition(id="T", touches=Touches(reads=None, writes="auth"), mutexes=None)
        assert task.reads == frozenset()
        assert task.writes == frozenset({"auth"})
        assert task.mutexes == frozenset()

    def test_serialized_sorted(self) -> None:
        """Test sets serialize as sorted lists."""
        task = TaskDefinition(id="T", touches=Touches(writes=["b", "a"]), mutexes=["z", "y"])
        dumped = task.model_dump(mode="json")
        assert dumped["touches"]["writes"] == ["a", "b"]
        assert dumped["mutexes"] == ["y", "z"]


# =============================================================================
# TEST validate_task_set
# =============================================================================


class TestValidateTaskSet:
    """Tests for task-set validation against a manifest."""

    def test_valid(self, manifest, task_factory) -> None:
        """Test known components and unique ids pass."""
        tasks = [task_factory("T1", writes=["auth"]), task_factory("T2", reads=["auth"])]
        result = validate_task_set(tasks, manifest)
        assert result.valid
        assert result.to_dict() == {"valid": True, "errors": [], "warnings": []}

    def test_unknown_components(self, manifest, task_factory) -> None:
        """Test unknown read and write components are errors."""
        result = validate_task_set([task_factory("T1", reads=["ghost"], writes=["nope"])], manifest)
        assert result.errors == [
            'Task T1: unknown read component "ghost"',
            'Task T1: unknown write component "nope"',
        ]

    def test_duplicate_ids(self, manifest, task_factory) -> None:
        """Test duplicate task ids are errors."""
        result = validate_task_set([task_factory("T1"), task_factory("T1")], manifest)
        assert result.errors == ["Duplicate task ID: T1"]

    def test_waw_warnings(self, manifest, task_factory) -> None:
        """Test WAW hazards become warnings."""
        tasks = [task_factory("T1", writes=["api"]), task_factory("T2", writes=["api"])]
        result = validate_task_set(tasks, manifest, detect_hazards(tasks))
        assert result.valid
        assert result.warnings == ['WAW hazard: tasks T1 and T2 both write to "api"']


# =============================================================================
# TEST Settings
# =============================================================================


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, clean_settings, monkeypatch) -> None:
        """Test wave options default to WAR overlap and critical-first."""
        monkeypatch.delenv("WAVEPLAN_WAR_SEPARATES_WAVES", raising=False)
        monkeypatch.delenv("WAVEPLAN_CRITICAL_FIRST", raising=False)
        settings = Settings(_env_file=None)
        assert settings.waveplan_war_separates_waves is False
        assert settings.waveplan_critical_first is True

    def test_env_override(self, clean_settings, monkeypatch) -> None:
        """Test environment variables override defaults through the cache."""
        monkeypatch.setenv("WAVEPLAN_WAR_SEPARATES_WAVES", "true")
        monkeypatch.setenv("WAVEPLAN_LOG_LEVEL", "WARNING")
        settings = get_settings()
        assert settings.waveplan_war_separates_waves is True
        assert settings.waveplan_log_level == "WARNING"
