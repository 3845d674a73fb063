import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from initgraph.application.circular_detector import CircularDependencyDetector
from initgraph.application.declaration_store import DeclarationStore
from initgraph.application.graph_builder import DependencyGraphBuilder
from initgraph.application.instantiation_engine import InstantiationEngine
from initgraph.application.scheduler import TopologicalScheduler
from initgraph.application.wiring import PostInitWiring, bind_components
from initgraph.domain import (
    CircularDependencyError,
    ComponentFactory,
    ComponentInstance,
    ComponentState,
    DependencyEdge,
    DuplicateComponentError,
    ExternalRoot,
    GraphNode,
    GraphSnapshot,
    IComponentRegistry,
    ICycleDetector,
    Initializer,
    IScheduler,
    RegistryConfig,
    RegistryState,
    RegistryStateError,
    TeardownFailure,
    WiringRule,
)

logger = logging.getLogger(__name__)


class ComponentRegistry(IComponentRegistry):
    """Main component registry.

    Orchestrates registration, dependency ordering, construction and teardown
    of named singleton components. A registry is an explicitly constructed
    object; hand it to whoever needs its components.

    Attributes:
        _context: Opaque object passed to every factory.
        _config: Registry options, including the post-init wiring rules.
        _store: Component declarations in registration order.
        _graph_builder: Turns declarations into a dependency graph.
        _circular_detector: Finds cycles before anything is built.
        _scheduler: Computes the build order.
        _engine: Constructs and initializes one component at a time.
        _wiring: Post-init wiring pass.
        _instances: Component records of the current build, in build order.
        _order: Build order of the current build.
        _external_root: External root supplied to the current build.
        _state: Registry lifecycle state.
    """

    def __init__(self, context: Any = None, config: Optional[RegistryConfig] = None) -> None:
        """Initialize an empty registry.

        Args:
            context: Opaque object handed to every factory as its first argument.
            config: Registry options. Defaults to ``RegistryConfig()``.
        """
        self._context = context
        self._config = config or RegistryConfig()
        self._store = DeclarationStore()
        self._graph_builder = DependencyGraphBuilder()
        self._circular_detector: ICycleDetector = CircularDependencyDetector()
        self._scheduler: IScheduler = TopologicalScheduler(self._circular_detector)
        self._engine = InstantiationEngine(context)
        self._wiring = PostInitWiring(self._config.wiring_rules)
        self._instances: Dict[str, ComponentInstance] = {}
        self._order: List[str] = []
        self._external_root: Optional[ExternalRoot] = None
        self._external_root_name: Optional[str] = None
        self._state = RegistryState.EMPTY

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def context(self) -> Any:
        return self._context

    @property
    def config(self) -> RegistryConfig:
        return self._config

    @property
    def initialization_order(self) -> List[str]:
        """Build order computed by the last build that got past ordering."""
        return list(self._order)

    def register(
        self,
        name: str,
        factory: ComponentFactory,
        dependencies: Optional[Sequence[str]] = None,
        config: Optional[Dict[str, Any]] = None,
        initializer: Optional[Initializer] = None,
        destroy_hook: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        """Declare a component.

        Components may be registered in any order. Registration closes as soon
        as a build starts.

        Args:
            name: Unique component name.
            factory: Called as ``factory(context, resolved_dependencies_and_config)``.
            dependencies: Names of the components this one needs. When omitted,
                ``factory.get_dependencies()`` is used if the factory provides it.
            config: Configuration merged with the resolved dependencies.
            initializer: Optional initialization step, e.g. ``Initializer.async_(lambda m: m.init())``.
            destroy_hook: Optional callable run with the instance during teardown.

        Raises:
            DuplicateComponentError: If ``name`` is already registered.
            RegistryStateError: If a build has already started.

        Example:
            >>> registry = ComponentRegistry(context=scene)
            >>> registry.register("statistics", StatisticsManager)
            >>> registry.register(
            ...     "achievements",
            ...     AchievementManager,
            ...     ["statistics"],
            ...     initializer=Initializer.async_(lambda m: m.init()),
            ... )
        """
        self._store.register(name, factory, dependencies, config, initializer, destroy_hook)

    def add_wiring_rule(self, rule: WiringRule) -> None:
        """Append a post-init wiring rule.

        Raises:
            RegistryStateError: If a build has already started.
        """
        if self._store.frozen:
            raise RegistryStateError("Wiring rules are fixed once a build has started")
        self._wiring.add_rule(rule)

    async def build(self, external_root: Optional[ExternalRoot] = None) -> None:
        """Construct every declared component in dependency order.

        Cycles are detected before any factory runs; on a cycle, or any other
        failure before the build order is known, the registry is left exactly
        as it was. Otherwise components are built one at a time,
        each awaiting its initializer before the next starts. A failure aborts
        the rest of the build, keeps what was already built and leaves the
        registry in the FAILED state until ``destroy()`` or ``reset()``.

        Args:
            external_root: Optional pre-built instance that components may
                depend on by name without the registry constructing it.

        Raises:
            RegistryStateError: If the registry is building, built or partially built.
            DuplicateComponentError: If the external root's name is also a declared component.
            CircularDependencyError: If the declared dependencies contain a cycle.
            MissingDependencyError: If a dependency is neither built nor the external root.
            ConfigConflictError: If a dependency name is also a key of the component's config.
            ComponentInitError: If a factory, initializer or wiring rule raises.

        Example:
            >>> await registry.build(ExternalRoot(name="party", instance=party_manager))
            >>> registry.get("combat")
        """
        if self._state not in (RegistryState.EMPTY, RegistryState.DESTROYED):
            raise RegistryStateError(
                f"Cannot build registry '{self._config.name}' in state '{self._state.value}'; "
                "call destroy() or reset() first"
            )
        if external_root is not None and self._store.contains(external_root.name):
            raise DuplicateComponentError(external_root.name)

        previous_state = self._state
        was_frozen = self._store.frozen
        previous_root_name = self._external_root_name
        self._state = RegistryState.BUILDING
        self._store.freeze()
        self._external_root_name = external_root.name if external_root is not None else None

        try:
            graph = self._graph_builder.build(self._store.declarations(), self._external_root_name)
            cycles = self._circular_detector.detect(graph)
            if cycles:
                raise CircularDependencyError(cycles)
            order = self._scheduler.order(graph)
        except BaseException:
            self._state = previous_state
            self._external_root_name = previous_root_name
            if not was_frozen:
                self._store.thaw()
            raise

        self._order = order
        self._external_root = external_root
        self._instances = {name: ComponentInstance(name=name) for name in order}
        if external_root is None:
            logger.debug("[%s] No external root supplied", self._config.name)
        logger.info("[%s] Initialization order: %s", self._config.name, " -> ".join(order))

        try:
            for name in order:
                await self._engine.instantiate(
                    self._instances[name],
                    self._store.get_declaration(name),
                    self._instances,
                    external_root,
                )
            self._wiring.apply(self.get)
        except BaseException:
            self._state = RegistryState.FAILED
            raise

        self._state = RegistryState.BUILT
        logger.info("[%s] All %d components initialized successfully", self._config.name, len(order))

    def get(self, name: str) -> Optional[Any]:
        """Return the built instance named ``name``, or None.

        Components that are pending, failed or destroyed are reported as None.
        The external root supplied to the current build is returned by its name.
        """
        record = self._instances.get(name)
        if record is not None and record.is_ready:
            return record.instance
        if self._external_root is not None and name == self._external_root.name:
            return self._external_root.instance
        return None

    def get_all(self) -> Dict[str, Any]:
        """Return a snapshot of every available instance keyed by name.

        The returned dict is a copy; mutating it does not affect the registry.
        """
        result: Dict[str, Any] = {}
        if self._external_root is not None:
            result[self._external_root.name] = self._external_root.instance
        for name, record in self._instances.items():
            if record.is_ready:
                result[name] = record.instance
        return result

    def get_component_state(self, name: str) -> Optional[ComponentState]:
        """Return the lifecycle state of a component of the current build, or None."""
        record = self._instances.get(name)
        return record.state if record is not None else None

    def get_dependency_graph(self, external_root: Optional[str] = None) -> GraphSnapshot:
        """Return the declared dependency graph for diagnostics and visualization.

        Computed from the current declarations, so it is available before a build.
        Dependencies on the external root appear as edges from the root to each
        dependent, so a visualization shows it; the build order never depends
        on them.

        Args:
            external_root: Name of the external root to show. Defaults to the
                root of the current build, if any.

        Example:
            >>> snapshot = registry.get_dependency_graph("party")
            >>> [(edge.source, edge.target) for edge in snapshot.edges]
            [('party', 'statistics'), ('statistics', 'achievements')]
        """
        root_name = external_root if external_root is not None else self._external_root_name
        graph = self._graph_builder.build(self._store.declarations(), root_name)

        edges: List[DependencyEdge] = []
        root_dependents: List[str] = []
        for name in graph.nodes:
            for dependency in graph.dependencies[name]:
                if dependency not in graph.in_degree and dependency != root_name:
                    continue
                edges.append(DependencyEdge(source=dependency, target=name))
                if dependency not in graph.in_degree:
                    root_dependents.append(name)

        nodes = {
            name: GraphNode(
                name=name,
                dependencies=list(graph.dependencies[name]),
                dependents=list(graph.dependents[name]),
            )
            for name in graph.nodes
        }
        if root_dependents:
            nodes[root_name] = GraphNode(name=root_name, dependents=root_dependents)

        return GraphSnapshot(
            nodes=list(graph.nodes),
            edges=edges,
            graph=nodes,
            external_root=root_name,
        )

    def bind_handlers(self, handlers: Mapping[str, Any], bindings: Mapping[str, Sequence[str]]) -> int:
        """Copy component references onto handler objects.

        For every handler named in ``bindings`` and present in ``handlers``, one
        attribute per listed component name is set to that component (None when
        it is not available).

        Returns:
            The number of attributes set.

        Example:
            >>> registry.bind_handlers(
            ...     {"combat_handler": combat_handler},
            ...     {"combat_handler": ["combat", "party", "world"]},
            ... )
            3
        """
        count = 0
        for handler_name, names in bindings.items():
            handler = handlers.get(handler_name)
            if handler is None:
                continue
            count += bind_components(handler, names, self.get)
        return count

    def destroy(self) -> List[TeardownFailure]:
        """Release every built component in reverse build order.

        Each component's declared destroy hook is called with its instance;
        without one, the instance's own ``destroy()`` is called if it has one.
        A failing hook is logged and collected but never stops the teardown.
        Declarations are kept, so the registry can be built again.

        Returns:
            One entry per destroy hook that raised, in teardown order.
        """
        if self._state == RegistryState.EMPTY and not self._instances:
            return []

        failures: List[TeardownFailure] = []
        for name in reversed(self._order):
            record = self._instances.get(name)
            if record is None or not record.is_ready:
                continue
            declaration = self._store.get_declaration(name)
            try:
                if declaration is not None and declaration.destroy_hook is not None:
                    declaration.destroy_hook(record.instance)
                else:
                    own_destroy = getattr(record.instance, "destroy", None)
                    if callable(own_destroy):
                        own_destroy()
            except Exception as e:
                logger.warning("[%s] Error destroying %s", self._config.name, name, exc_info=True)
                failures.append(TeardownFailure(name=name, error=e))
            finally:
                record.state = ComponentState.DESTROYED
                record.instance = None

        self._external_root = None
        self._state = RegistryState.DESTROYED
        logger.info("[%s] All components destroyed", self._config.name)
        return failures

    def reset(self) -> None:
        """Destroy every component and clear all declarations.

        Returns the registry to the EMPTY state, ready for a new registration phase.
        """
        self.destroy()
        self._store.clear()
        self._wiring = PostInitWiring(self._config.wiring_rules)
        self._instances = {}
        self._order = []
        self._external_root_name = None
        self._state = RegistryState.EMPTY
