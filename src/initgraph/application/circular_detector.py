"""Application layer - Circular dependency detection."""

import logging
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from initgraph.domain import DependencyGraph, ICycleDetector

logger = logging.getLogger(__name__)


class CircularDependencyDetector(ICycleDetector):
    """Detects circular dependencies before anything is instantiated.

    Runs a depth-first search from every unvisited node, following declared
    dependencies. The search keeps an explicit stack of pending dependency
    iterators, so graph depth is not bounded by the recursion limit. When the
    search reaches a node already on the current path, the path slice from that
    node's first occurrence, closed by the node itself, is one cycle. Scanning
    continues so independent cycles are all reported in a single pass.
    """

    def detect(self, graph: DependencyGraph, nodes: Optional[Iterable[str]] = None) -> List[List[str]]:
        """Return every cycle reachable from ``nodes``.

        Args:
            graph: The dependency graph to scan.
            nodes: Start nodes, in order. Defaults to every node in registration order.

        Returns:
            The detected cycles, or an empty list when the graph is acyclic.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.detect(graph)
            [['X', 'Y', 'X']]
        """
        visited: Set[str] = set()
        on_stack: Set[str] = set()
        path: List[str] = []
        cycles: List[List[str]] = []

        for start in graph.nodes if nodes is None else nodes:
            if start in visited:
                continue

            visited.add(start)
            on_stack.add(start)
            path.append(start)
            stack: List[Tuple[str, Iterator[str]]] = [(start, iter(graph.node_dependencies(start)))]
            while stack:
                node, dependencies = stack[-1]
                for dependency in dependencies:
                    if dependency in on_stack:
                        cycle_start_index = path.index(dependency)
                        cycles.append(path[cycle_start_index:] + [dependency])
                    elif dependency not in visited:
                        visited.add(dependency)
                        on_stack.add(dependency)
                        path.append(dependency)
                        stack.append((dependency, iter(graph.node_dependencies(dependency))))
                        break
                else:
                    stack.pop()
                    path.pop()
                    on_stack.discard(node)

        if cycles:
            logger.error("Circular dependencies detected: %s", cycles)
        return cycles
