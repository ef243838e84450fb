"""Task dependency graph used by wave and critical-path computation.

Tasks live in an arena indexed by their position in the task set; edges are
(source, target) index pairs meaning *source must finish before target*.
All traversals are iterative.
"""

from collections import deque
from collections.abc import Iterable

from waveplan.core.errors import CycleError, SchedulingError
from waveplan.plan.models import TaskDefinition
from waveplan.scheduler.hazards import ensure_unique_ids
from waveplan.scheduler.models import Hazard, HazardType


class TaskGraph:
    """
    Directed graph over a task set.

    Example:
        >>> graph = TaskGraph.from_hazards(tasks, hazards, {HazardType.RAW})
        >>> graph.levels()
        [0, 1]
    """

    def __init__(self, task_ids: list[str]) -> None:
        self.task_ids = list(task_ids)
        self.index: dict[str, int] = {task_id: i for i, task_id in enumerate(self.task_ids)}
        self.edges: list[tuple[int, int]] = []
        self._edge_set: set[tuple[int, int]] = set()
        self._successors: list[list[int]] = [[] for _ in self.task_ids]
        self._predecessors: list[list[int]] = [[] for _ in self.task_ids]

    def __len__(self) -> int:
        return len(self.task_ids)

    @classmethod
    def from_hazards(
        cls,
        tasks: list[TaskDefinition],
        hazards: Iterable[Hazard],
        edge_types: Iterable[HazardType],
    ) -> "TaskGraph":
        """
        Build a graph from the hazards of the given types.

        Raises:
            SchedulingError: If task ids repeat or a hazard names an unknown task.
        """
        ensure_unique_ids(tasks)
        graph = cls([task.id for task in tasks])
        wanted = set(edge_types)

        unknown: list[str] = []
        for hazard in hazards:
            if hazard.type not in wanted:
                continue
            for task_id in (hazard.source_task_id, hazard.target_task_id):
                if task_id not in graph.index and task_id not in unknown:
                    unknown.append(task_id)
            if not unknown:
                graph.add_edge(hazard.source_task_id, hazard.target_task_id)

        if unknown:
            raise SchedulingError(
                f"Hazards reference tasks outside the task set: {', '.join(unknown)}",
                unknown,
            )
        return graph

    def add_edge(self, source_id: str, target_id: str) -> None:
        """Add ``source -> target``; repeated edges collapse."""
        edge = (self.index[source_id], self.index[target_id])
        if edge in self._edge_set:
            return
        self._edge_set.add(edge)
        self.edges.append(edge)
        self._successors[edge[0]].append(edge[1])
        self._predecessors[edge[1]].append(edge[0])

    def predecessors(self, node: int) -> list[int]:
        """Predecessor indices in task-set order."""
        return sorted(self._predecessors[node])

    def successors(self, node: int) -> list[int]:
        """Successor indices in task-set order."""
        return sorted(self._successors[node])

    def _kahn(self) -> tuple[list[int], list[int]]:
        indegree = [len(preds) for preds in self._predecessors]
        level = [0] * len(self)
        queue = deque(i for i in range(len(self)) if indegree[i] == 0)
        order: list[int] = []

        while queue:
            node = queue.popleft()
            order.append(node)
            for succ in self.successors(node):
                level[succ] = max(level[succ], level[node] + 1)
                indegree[succ] -= 1
                if indegree[succ] == 0:
                    queue.append(succ)

        return order, level

    def topological_order(self, graph_name: str = "hazard") -> list[int]:
        """
        Indices in a dependency-respecting order.

        Raises:
            CycleError: Naming every task that lies on a cycle.
        """
        order, _ = self._kahn()
        if len(order) < len(self):
            self._raise_cycle(set(order), graph_name)
        return order

    def levels(self, graph_name: str = "hazard") -> list[int]:
        """
        Earliest level of each node: 0 for roots, else one past its deepest
        predecessor.

        Raises:
            CycleError: Naming every task that lies on a cycle.
        """
        order, level = self._kahn()
        if len(order) < len(self):
            self._raise_cycle(set(order), graph_name)
        return level

    def _reaches(self, start: int, goal: int, allowed: set[int]) -> bool:
        stack = [s for s in self._successors[start] if s in allowed]
        seen: set[int] = set()
        while stack:
            node = stack.pop()
            if node == goal:
                return True
            if node in seen:
                continue
            seen.add(node)
            stack.extend(s for s in self._successors[node] if s in allowed)
        return False

    def cycle_members(self, remaining: set[int]) -> list[int]:
        """Nodes among ``remaining`` that can reach themselves."""
        return [node for node in sorted(remaining) if self._reaches(node, node, remaining)]

    def _raise_cycle(self, processed: set[int], graph_name: str) -> None:
        remaining = set(range(len(self))) - processed
        members = self.cycle_members(remaining)
        raise CycleError([self.task_ids[i] for i in members], graph=graph_name)
