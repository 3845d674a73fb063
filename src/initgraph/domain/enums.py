from enum import Enum


class ComponentState(str, Enum):
    """Lifecycle state of a single component instance.

    Attributes:
        PENDING: Scheduled in the build order but not yet reached.
        CONSTRUCTING: Factory or initializer currently running.
        READY: Constructed and initialized; visible through the registry.
        FAILED: Factory, initializer or dependency resolution failed.
        DESTROYED: Released during teardown.
    """

    PENDING = "pending"
    CONSTRUCTING = "constructing"
    READY = "ready"
    FAILED = "failed"
    DESTROYED = "destroyed"

    def __str__(self) -> str:
        return self.value


class RegistryState(str, Enum):
    """Lifecycle state of a component registry.

    Attributes:
        EMPTY: Registration phase; declarations may still be added.
        BUILDING: A build is in progress; declarations are frozen.
        BUILT: Every component is ready. Terminal until destroy or reset.
        FAILED: A build aborted part way; built instances are kept for inspection.
        DESTROYED: Instances released; declarations kept for a rebuild.
    """

    EMPTY = "empty"
    BUILDING = "building"
    BUILT = "built"
    FAILED = "failed"
    DESTROYED = "destroyed"

    def __str__(self) -> str:
        return self.value


class InitializerKind(str, Enum):
    """Declared initialization capability of a component."""

    NONE = "none"
    SYNC = "sync"
    ASYNC = "async"

    def __str__(self) -> str:
        return self.value
