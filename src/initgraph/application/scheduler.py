"""Application layer - Initialization order computation."""

import heapq
from typing import Dict, List, Optional, Tuple

from initgraph.application.circular_detector import CircularDependencyDetector
from initgraph.domain import CircularDependencyError, DependencyGraph, ICycleDetector, IScheduler


class TopologicalScheduler(IScheduler):
    """Computes a build order with Kahn's algorithm.

    Among the components ready to be built, the one registered first is
    dequeued first, so identical registrations always yield the same order.

    Attributes:
        _detector: Used to describe the cycles when no complete order exists.
    """

    def __init__(self, detector: Optional[ICycleDetector] = None) -> None:
        self._detector = detector or CircularDependencyDetector()

    def order(self, graph: DependencyGraph) -> List[str]:
        """Return the component names in a valid build order.

        Args:
            graph: The dependency graph to sort.

        Returns:
            Names such that for every edge ``B -> A``, B precedes A.

        Raises:
            CircularDependencyError: If the order cannot cover every node.

        Example:
            >>> TopologicalScheduler().order(graph)
            ['A', 'B', 'C']
        """
        position = {name: index for index, name in enumerate(graph.nodes)}
        in_degree: Dict[str, int] = dict(graph.in_degree)

        ready: List[Tuple[int, str]] = [(position[name], name) for name in graph.nodes if in_degree[name] == 0]
        heapq.heapify(ready)

        order: List[str] = []
        while ready:
            _, current = heapq.heappop(ready)
            order.append(current)
            for dependent in graph.dependents.get(current, []):
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    heapq.heappush(ready, (position[dependent], dependent))

        if len(order) < len(graph.nodes):
            placed = set(order)
            leftover = [name for name in graph.nodes if name not in placed]
            raise CircularDependencyError(self._detector.detect(graph, leftover))

        return order
