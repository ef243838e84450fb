"""
Unit tests for hazard detection.

Covers each hazard type, multiplicity, ordering and the pairwise
coverage properties of detect_hazards.
"""

import itertools

import pytest

from waveplan.core.errors import SchedulingError
from waveplan.scheduler.hazards import detect_hazards
from waveplan.scheduler.models import Hazard, HazardType


def as_tuples(hazards: list[Hazard]) -> set[tuple[str, str, str, str]]:
    return {(h.type.value, h.source_task_id, h.target_task_id, h.component) for h in hazards}


class TestHazardTypes:
    """Tests for each hazard type in isolation."""

    def test_detects_raw(self, task_factory) -> None:
        """Test writer before reader yields RAW."""
        hazards = detect_hazards(
            [task_factory("T1", writes=["auth"]), task_factory("T2", reads=["auth"])]
        )
        assert as_tuples(hazards) == {("RAW", "T1", "T2", "auth")}

    def test_detects_war(self, task_factory) -> None:
        """Test reader before writer yields WAR."""
        hazards = detect_hazards(
            [task_factory("T1", reads=["auth"]), task_factory("T2", writes=["auth"])]
        )
        assert as_tuples(hazards) == {("WAR", "T1", "T2", "auth")}

    def test_detects_waw(self, task_factory) -> None:
        """Test two writers yield WAW."""
        hazards = detect_hazards(
            [task_factory("T1", writes=["auth"]), task_factory("T2", writes=["auth"])]
        )
        assert as_tuples(hazards) == {("WAW", "T1", "T2", "auth")}

    def test_detects_mutex(self, task_factory) -> None:
        """Test a shared mutex token yields MUTEX naming the token."""
        hazards = detect_hazards(
            [
                task_factory("T1", mutexes=["port-8080"]),
                task_factory("T2", mutexes=["port-8080", "gpu"]),
            ]
        )
        assert as_tuples(hazards) == {("MUTEX", "T1", "T2", "port-8080")}

    def test_no_hazards_for_independent_tasks(self, task_factory) -> None:
        """Test disjoint touches produce nothing."""
        hazards = detect_hazards(
            [task_factory("T1", writes=["auth"]), task_factory("T2", reads=["api"])]
        )
        assert hazards == []

    def test_reads_only_never_conflict(self, task_factory) -> None:
        """Test two readers of the same component do not conflict."""
        hazards = detect_hazards(
            [task_factory("T1", reads=["auth"]), task_factory("T2", reads=["auth"])]
        )
        assert hazards == []


class TestHazardMultiplicity:
    """Tests for multiple hazards between one pair."""

    def test_all_types_between_one_pair(self, task_factory) -> None:
        """Test a read+write overlap yields RAW, WAR and WAW individually."""
        a = task_factory("A", reads=["x"], writes=["x"])
        b = task_factory("B", reads=["x"], writes=["x"])

        assert as_tuples(detect_hazards([a, b])) == {
            ("RAW", "A", "B", "x"),
            ("WAR", "A", "B", "x"),
            ("WAW", "A", "B", "x"),
        }

    def test_one_hazard_per_component(self, task_factory) -> None:
        """Test each shared component is reported separately."""
        hazards = detect_hazards(
            [
                task_factory("T1", writes=["a", "b", "c"]),
                task_factory("T2", reads=["c", "a"]),
            ]
        )
        assert [h.component for h in hazards] == ["a", "c"]

    def test_emission_order(self, task_factory) -> None:
        """Test hazards are grouped by pair, then RAW/WAR/WAW/MUTEX, then name."""
        tasks = [
            task_factory("A", reads=["r"], writes=["w", "x"], mutexes=["m"]),
            task_factory("B", reads=["x", "w"], writes=["r", "w"], mutexes=["m"]),
            task_factory("C", reads=["w"]),
        ]

        assert [str(h) for h in detect_hazards(tasks)] == [
            "RAW A -> B (w)",
            "RAW A -> B (x)",
            "WAR A -> B (r)",
            "WAW A -> B (w)",
            "MUTEX A -> B (m)",
            "RAW A -> C (w)",
            "RAW B -> C (w)",
        ]

    def test_deterministic(self, sample_tasks) -> None:
        """Test repeated calls return identical lists."""
        assert detect_hazards(sample_tasks) == detect_hazards(sample_tasks)


class TestHazardProperties:
    """Tests for the pairwise coverage properties."""

    def test_no_self_hazards(self, task_factory) -> None:
        """Test a task that reads and writes the same component alone is clean."""
        assert detect_hazards([task_factory("T1", reads=["x"], writes=["x"], mutexes=["m"])]) == []

    def test_iff_membership(self, sample_tasks) -> None:
        """Test every hazard matches the set intersections exactly."""
        hazards = as_tuples(detect_hazards(sample_tasks))

        expected = set()
        for i, a in enumerate(sample_tasks):
            for b in sample_tasks[i + 1 :]:
                expected |= {("RAW", a.id, b.id, c) for c in a.writes & b.reads}
                expected |= {("WAR", a.id, b.id, c) for c in a.reads & b.writes}
                expected |= {("WAW", a.id, b.id, c) for c in a.writes & b.writes}
                expected |= {("MUTEX", a.id, b.id, c) for c in a.mutexes & b.mutexes}

        assert hazards == expected

    def test_sample_hazards(self, sample_tasks) -> None:
        """Test the sample task set yields the expected hazards."""
        assert as_tuples(detect_hazards(sample_tasks)) == {
            ("RAW", "schema", "auth", "db"),
            ("RAW", "schema", "api", "db"),
            ("RAW", "auth", "api", "auth"),
            ("RAW", "api", "web", "api"),
            ("MUTEX", "api", "web", "port-8080"),
            ("RAW", "api", "docs", "api"),
        }

    @pytest.mark.parametrize("order", list(itertools.permutations(range(3))))
    def test_coverage_symmetric_under_reordering(self, task_factory, order) -> None:
        """Test reordering keeps the same (pair, component) coverage."""
        tasks = [
            task_factory("A", writes=["x"], mutexes=["m"]),
            task_factory("B", reads=["x"], writes=["y"]),
            task_factory("C", reads=["y"], mutexes=["m"]),
        ]
        reordered = [tasks[i] for i in order]

        def coverage(hazards):
            return {
                (frozenset({h.source_task_id, h.target_task_id}), h.component)
                for h in hazards
            }

        assert coverage(detect_hazards(reordered)) == coverage(detect_hazards(tasks))

    def test_swap_turns_raw_into_war(self, task_factory) -> None:
        """Test swapping a writer/reader pair swaps direction and declared type."""
        writer = task_factory("W", writes=["x"])
        reader = task_factory("R", reads=["x"])

        assert as_tuples(detect_hazards([writer, reader])) == {("RAW", "W", "R", "x")}
        assert as_tuples(detect_hazards([reader, writer])) == {("WAR", "R", "W", "x")}


class TestHazardErrors:
    """Tests for invalid task sets."""

    def test_duplicate_ids_rejected(self, task_factory) -> None:
        """Test duplicate task ids raise SchedulingError naming them."""
        with pytest.raises(SchedulingError) as exc_info:
            detect_hazards([task_factory("T1"), task_factory("T1")])

        assert exc_info.value.task_ids == ["T1"]

    def test_empty_task_set(self) -> None:
        """Test an empty task set has no hazards."""
        assert detect_hazards([]) == []
