from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from initgraph.domain.enums import ComponentState, InitializerKind

ComponentFactory = Callable[[Any, Dict[str, Any]], Any]


class Initializer(BaseModel):
    """Declared initialization capability of a component.

    A tagged variant: ``NONE`` carries no hook, ``SYNC`` hooks are called and
    ``ASYNC`` hooks are awaited. The kind is always declared by the caller.

    Attributes:
        kind: Which variant this is.
        hook: Callable receiving the constructed instance.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: InitializerKind = Field(default=InitializerKind.NONE, description="The initializer variant.")
    hook: Optional[Callable[[Any], Any]] = Field(
        default=None,
        description="Callable run with the constructed instance.",
    )

    @model_validator(mode="after")
    def check_hook(self) -> "Initializer":
        if self.kind == InitializerKind.NONE and self.hook is not None:
            raise ValueError("Initializer of kind 'none' cannot carry a hook")
        if self.kind != InitializerKind.NONE and self.hook is None:
            raise ValueError(f"Initializer of kind '{self.kind.value}' requires a hook")
        return self

    @classmethod
    def none(cls) -> "Initializer":
        return cls(kind=InitializerKind.NONE)

    @classmethod
    def sync(cls, hook: Callable[[Any], Any]) -> "Initializer":
        return cls(kind=InitializerKind.SYNC, hook=hook)

    @classmethod
    def async_(cls, hook: Callable[[Any], Any]) -> "Initializer":
        return cls(kind=InitializerKind.ASYNC, hook=hook)


class ComponentDeclaration(BaseModel):
    """Value object holding the recipe for one component.

    Attributes:
        name: Unique component name.
        factory: Called as ``factory(context, resolved_dependencies_and_config)``.
        dependencies: Ordered names of the components this one needs.
        config: Opaque configuration merged with resolved dependencies.
        initializer: Optional initialization step run after construction.
        destroy_hook: Optional callable run with the instance during teardown.
        registration_index: Position in registration order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, description="Unique component name.")
    factory: ComponentFactory = Field(..., description="Factory building the component instance.")
    dependencies: Tuple[str, ...] = Field(default=(), description="Declared dependency names.")
    config: Dict[str, Any] = Field(default_factory=dict, description="Component configuration bag.")
    initializer: Initializer = Field(default_factory=Initializer.none, description="Initialization step.")
    destroy_hook: Optional[Callable[[Any], Any]] = Field(default=None, description="Teardown hook.")
    registration_index: int = Field(default=0, ge=0, description="Position in registration order.")


class ExternalRoot(BaseModel):
    """A pre-built instance supplied to a build under a designated name."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, description="Name dependents declare.")
    instance: Any = Field(..., description="The pre-built instance.")


class DependencyEdge(BaseModel):
    """Directed edge meaning ``source`` must be built before ``target``."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str


class DependencyGraph(BaseModel):
    """Adjacency and in-degree view of the declared components.

    Attributes:
        nodes: Declared component names in registration order.
        dependencies: Declared dependency names per component, verbatim.
        dependents: Adjacency list; ``dependents[b]`` holds every ``a`` with an edge b -> a.
        in_degree: Number of incoming edges per node.
        edges: Every edge, in declaration order.
        external_root: Name recognised as supplied at build time, if any.
        unresolved: Dependency names that are neither declared nor the external root.
    """

    model_config = ConfigDict(frozen=True)

    nodes: List[str] = Field(default_factory=list)
    dependencies: Dict[str, List[str]] = Field(default_factory=dict)
    dependents: Dict[str, List[str]] = Field(default_factory=dict)
    in_degree: Dict[str, int] = Field(default_factory=dict)
    edges: List[DependencyEdge] = Field(default_factory=list)
    external_root: Optional[str] = None
    unresolved: Dict[str, List[str]] = Field(default_factory=dict)

    def node_dependencies(self, name: str) -> List[str]:
        """Return the dependencies of ``name`` that are themselves declared nodes."""
        return [dependency for dependency in self.dependencies.get(name, []) if dependency in self.in_degree]


class ComponentInstance(BaseModel):
    """Tracks one component through its lifecycle.

    Attributes:
        name: Component name.
        instance: The constructed object, once the factory returned.
        state: Current lifecycle state.
        error: The failure that moved the component to FAILED, if any.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    instance: Optional[Any] = None
    state: ComponentState = ComponentState.PENDING
    error: Optional[BaseException] = None

    @property
    def is_ready(self) -> bool:
        return self.state == ComponentState.READY


class WiringRule(BaseModel):
    """Late-bound cross reference applied after every component exists.

    When both ``target`` and ``source`` were built, ``target.<attribute>`` is set
    to the source instance and, if given, ``source.<reverse_attribute>`` to the
    target instance. ``attribute`` may be a dotted path through existing attributes.
    """

    model_config = ConfigDict(frozen=True)

    target: str = Field(..., min_length=1)
    attribute: str = Field(..., min_length=1)
    source: str = Field(..., min_length=1)
    reverse_attribute: Optional[str] = None


class RegistryConfig(BaseModel):
    """Construction options of a component registry.

    Attributes:
        name: Label used in log records.
        wiring_rules: Post-initialization wiring rules, applied in order.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="components", min_length=1)
    wiring_rules: Tuple[WiringRule, ...] = Field(default=())


class GraphNode(BaseModel):
    """Diagnostic view of one node of the dependency graph."""

    name: str
    dependencies: List[str] = Field(default_factory=list)
    dependents: List[str] = Field(default_factory=list)


class GraphSnapshot(BaseModel):
    """Dependency graph exported for diagnostics and visualization.

    Attributes:
        nodes: Declared component names in registration order.
        edges: Every edge in declaration order, including edges from the external root.
        graph: Per-name view; holds the external root too when it has dependents.
        external_root: Name of the external root shown in the snapshot, if any.
    """

    nodes: List[str] = Field(default_factory=list)
    edges: List[DependencyEdge] = Field(default_factory=list)
    graph: Dict[str, GraphNode] = Field(default_factory=dict)
    external_root: Optional[str] = None


class TeardownFailure(BaseModel):
    """A destroy hook that raised during teardown."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    error: BaseException
