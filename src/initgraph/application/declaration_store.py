"""Application layer - Component declaration storage."""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from initgraph.domain import (
    ComponentDeclaration,
    ComponentFactory,
    DuplicateComponentError,
    Initializer,
    RegistryStateError,
)

logger = logging.getLogger(__name__)


class DeclarationStore:
    """Holds component declarations in registration order.

    Declarations accumulate while the store is open. Once frozen (a build has
    started) further registrations are rejected.

    Attributes:
        _declarations: Mapping of component name to declaration, in registration order.
        _frozen: Whether registration is closed.
        _next_index: Registration index handed to the next declaration.
    """

    def __init__(self) -> None:
        """Initialize an empty, open store."""
        self._declarations: Dict[str, ComponentDeclaration] = {}
        self._frozen = False
        self._next_index = 0

    def register(
        self,
        name: str,
        factory: ComponentFactory,
        dependencies: Optional[Sequence[str]] = None,
        config: Optional[Dict[str, Any]] = None,
        initializer: Optional[Initializer] = None,
        destroy_hook: Optional[Callable[[Any], Any]] = None,
    ) -> ComponentDeclaration:
        """Store a new declaration.

        When ``dependencies`` is None and the factory exposes a callable
        ``get_dependencies()``, its result is used as the dependency list.

        Args:
            name: Unique component name.
            factory: Called as ``factory(context, resolved_dependencies_and_config)``.
            dependencies: Names of the components this one needs.
            config: Configuration merged with the resolved dependencies.
            initializer: Optional initialization step.
            destroy_hook: Optional callable run with the instance during teardown.

        Returns:
            The stored declaration.

        Raises:
            ValueError: If ``name`` is empty.
            RegistryStateError: If the store is frozen.
            DuplicateComponentError: If ``name`` is already registered.

        Example:
            >>> store = DeclarationStore()
            >>> store.register("audio", AudioManager)
            >>> store.register("combat", CombatManager, ["audio"], {"difficulty": 2})
        """
        if not name:
            raise ValueError("Component name must be a non-empty string")
        if self._frozen:
            raise RegistryStateError(f"Cannot register '{name}': registration is closed once a build has started")
        if name in self._declarations:
            raise DuplicateComponentError(name)

        if dependencies is None:
            declared = getattr(factory, "get_dependencies", None)
            dependencies = list(declared()) if callable(declared) else []

        declaration = ComponentDeclaration(
            name=name,
            factory=factory,
            dependencies=tuple(dependencies),
            config=dict(config or {}),
            initializer=initializer or Initializer.none(),
            destroy_hook=destroy_hook,
            registration_index=self._next_index,
        )
        self._declarations[name] = declaration
        self._next_index += 1

        logger.info("Registered component: %s with dependencies: [%s]", name, ", ".join(declaration.dependencies))
        return declaration

    def replace(self, declaration: ComponentDeclaration) -> None:
        """Swap an existing declaration for another one with the same name.

        The replacement keeps the original registration index.

        Raises:
            RegistryStateError: If the store is frozen.
            KeyError: If no declaration with that name exists.
        """
        if self._frozen:
            raise RegistryStateError(f"Cannot replace '{declaration.name}': registration is closed")
        existing = self._declarations[declaration.name]
        self._declarations[declaration.name] = declaration.model_copy(
            update={"registration_index": existing.registration_index}
        )

    def remove(self, name: str) -> Optional[ComponentDeclaration]:
        """Drop a declaration, returning it, or None if it was not registered.

        Raises:
            RegistryStateError: If the store is frozen.
        """
        if self._frozen:
            raise RegistryStateError(f"Cannot remove '{name}': registration is closed")
        return self._declarations.pop(name, None)

    def contains(self, name: str) -> bool:
        return name in self._declarations

    def get_declaration(self, name: str) -> Optional[ComponentDeclaration]:
        return self._declarations.get(name)

    def declarations(self) -> List[ComponentDeclaration]:
        """Return every declaration in registration order."""
        return list(self._declarations.values())

    def names(self) -> List[str]:
        return list(self._declarations)

    def freeze(self) -> None:
        self._frozen = True

    def thaw(self) -> None:
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def clear(self) -> None:
        """Drop every declaration and reopen registration."""
        self._declarations.clear()
        self._frozen = False
        self._next_index = 0

    def __len__(self) -> int:
        return len(self._declarations)
