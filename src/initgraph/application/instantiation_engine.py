"""Application layer - Component construction and initialization."""

import logging
from typing import Any, Dict, Mapping, Optional

from initgraph.domain import (
    ComponentDeclaration,
    ComponentInitError,
    ComponentInstance,
    ComponentState,
    ConfigConflictError,
    ExternalRoot,
    InitializerKind,
    MissingDependencyError,
)

logger = logging.getLogger(__name__)


class InstantiationEngine:
    """Builds one component at a time from its declaration.

    Resolves the declared dependencies against already built components (or
    the external root), merges them into the component's config, calls the
    factory and runs the declared initializer. Async initializers are awaited
    before control returns, so callers walking a build order never have two
    components initializing at once.

    Attributes:
        _context: Opaque object handed to every factory as its first argument.
    """

    def __init__(self, context: Any = None) -> None:
        self._context = context

    def resolve_dependencies(
        self,
        declaration: ComponentDeclaration,
        built: Mapping[str, ComponentInstance],
        external_root: Optional[ExternalRoot] = None,
    ) -> Dict[str, Any]:
        """Map each declared dependency to its instance.

        Args:
            declaration: The component whose dependencies are resolved.
            built: Component records produced so far, keyed by name.
            external_root: The pre-built instance supplied to the build, if any.

        Returns:
            Dependency name to instance.

        Raises:
            MissingDependencyError: If a dependency is neither built nor the external root.
        """
        resolved: Dict[str, Any] = {}
        for dependency in declaration.dependencies:
            record = built.get(dependency)
            if record is not None and record.is_ready:
                resolved[dependency] = record.instance
            elif external_root is not None and dependency == external_root.name:
                resolved[dependency] = external_root.instance
            else:
                raise MissingDependencyError(dependency, declaration.name)
        return resolved

    async def instantiate(
        self,
        record: ComponentInstance,
        declaration: ComponentDeclaration,
        built: Mapping[str, ComponentInstance],
        external_root: Optional[ExternalRoot] = None,
    ) -> ComponentInstance:
        """Construct and initialize one component, updating its record.

        A component whose initializer raises is not torn down: the record moves
        to FAILED and drops the half-initialized instance, so the registry keeps
        no reference to it.

        Args:
            record: The record tracking this component; updated in place.
            declaration: The component's declaration.
            built: Component records produced so far, keyed by name.
            external_root: The pre-built instance supplied to the build, if any.

        Returns:
            The same record, now READY.

        Raises:
            MissingDependencyError: If a dependency cannot be resolved.
            ConfigConflictError: If a dependency name is also a config key.
            ComponentInitError: If the factory or the initializer raises.
        """
        record.state = ComponentState.CONSTRUCTING
        try:
            resolved = self.resolve_dependencies(declaration, built, external_root)

            conflicts = [name for name in resolved if name in declaration.config]
            if conflicts:
                raise ConfigConflictError(declaration.name, conflicts)
            component_config = {**declaration.config, **resolved}

            logger.info("Initializing %s...", declaration.name)
            try:
                record.instance = declaration.factory(self._context, component_config)
                await self._run_initializer(declaration, record.instance)
            except Exception as e:
                raise ComponentInitError(declaration.name, e) from e

        except (MissingDependencyError, ConfigConflictError, ComponentInitError) as e:
            record.state = ComponentState.FAILED
            record.instance = None
            record.error = e
            logger.error("Failed to initialize %s: %s", declaration.name, e)
            raise

        record.state = ComponentState.READY
        logger.info("%s initialized", declaration.name)
        return record

    async def _run_initializer(self, declaration: ComponentDeclaration, instance: Any) -> None:
        initializer = declaration.initializer
        if initializer.kind == InitializerKind.SYNC:
            initializer.hook(instance)
        elif initializer.kind == InitializerKind.ASYNC:
            await initializer.hook(instance)
