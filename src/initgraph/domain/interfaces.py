from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence

from initgraph.domain.models import (
    ComponentFactory,
    DependencyGraph,
    ExternalRoot,
    GraphSnapshot,
    Initializer,
    TeardownFailure,
)


class IComponentRegistry(ABC):
    """Abstract interface for component registry operations."""

    @abstractmethod
    def register(
        self,
        name: str,
        factory: ComponentFactory,
        dependencies: Optional[Sequence[str]] = None,
        config: Optional[Dict[str, Any]] = None,
        initializer: Optional[Initializer] = None,
        destroy_hook: Optional[Any] = None,
    ) -> None:
        """Declare a component.

        Args:
            name: Unique component name.
            factory: Called as ``factory(context, resolved_dependencies_and_config)``.
            dependencies: Names of the components this one needs.
            config: Configuration merged with the resolved dependencies.
            initializer: Optional initialization step.
            destroy_hook: Optional callable run with the instance during teardown.
        """

    @abstractmethod
    async def build(self, external_root: Optional[ExternalRoot] = None) -> None:
        """Construct every declared component in dependency order.

        Args:
            external_root: Optional pre-built instance other components may depend on.
        """

    @abstractmethod
    def get(self, name: str) -> Optional[Any]:
        """Return the built instance named ``name``, or None."""

    @abstractmethod
    def get_all(self) -> Dict[str, Any]:
        """Return a snapshot of every built instance keyed by name."""

    @abstractmethod
    def destroy(self) -> List[TeardownFailure]:
        """Release every built instance in reverse build order."""

    @abstractmethod
    def get_dependency_graph(self, external_root: Optional[str] = None) -> GraphSnapshot:
        """Return the declared dependency graph for diagnostics."""


class ICycleDetector(ABC):
    """Abstract interface for cycle detection over a dependency graph."""

    @abstractmethod
    def detect(self, graph: DependencyGraph, nodes: Optional[Iterable[str]] = None) -> List[List[str]]:
        """Return every detected cycle, or an empty list when the graph is acyclic.

        Args:
            graph: The dependency graph to scan.
            nodes: Start nodes, in order. Defaults to every node of the graph.
        """


class IScheduler(ABC):
    """Abstract interface for computing an initialization order."""

    @abstractmethod
    def order(self, graph: DependencyGraph) -> List[str]:
        """Return the component names in a valid build order.

        Raises:
            CircularDependencyError: If no complete order exists.
        """
