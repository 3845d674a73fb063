"""Application layer - Late-bound cross references between built components."""

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence

from initgraph.domain import ComponentInitError, WiringRule

logger = logging.getLogger(__name__)

Lookup = Callable[[str], Optional[Any]]


def _resolve_owner(instance: Any, path: str) -> Optional[Any]:
    """Walk every segment of a dotted path but the last."""
    owner = instance
    for segment in path.split(".")[:-1]:
        owner = getattr(owner, segment, None)
        if owner is None:
            return None
    return owner


def _leaf(path: str) -> str:
    return path.rsplit(".", 1)[-1]


class PostInitWiring:
    """Applies a fixed list of wiring rules once every component exists.

    Rules only assign attributes. They never construct anything and never
    influence the build order.

    Attributes:
        _rules: Rules in application order.
    """

    def __init__(self, rules: Iterable[WiringRule] = ()) -> None:
        self._rules: List[WiringRule] = list(rules)

    @property
    def rules(self) -> List[WiringRule]:
        return list(self._rules)

    def add_rule(self, rule: WiringRule) -> None:
        self._rules.append(rule)

    def apply(self, lookup: Lookup) -> List[WiringRule]:
        """Apply every rule whose components and attribute paths all exist.

        A rule is applied completely or not at all: when the forward or the
        reverse attribute path has a missing intermediate, nothing is assigned.

        Args:
            lookup: Returns a built instance by name, or None.

        Returns:
            The rules that were applied, in order.

        Raises:
            ComponentInitError: If an assignment raises; names the rule's target.

        Example:
            >>> wiring = PostInitWiring([WiringRule(target="combat", attribute="equipment", source="equipment")])
            >>> wiring.apply(registry.get)
        """
        applied: List[WiringRule] = []
        for rule in self._rules:
            target = lookup(rule.target)
            source = lookup(rule.source)
            if target is None or source is None:
                logger.debug("Skipping wiring %s.%s: component missing", rule.target, rule.attribute)
                continue

            try:
                owner = _resolve_owner(target, rule.attribute)
                if owner is None:
                    logger.debug("Skipping wiring %s.%s: attribute path missing", rule.target, rule.attribute)
                    continue
                reverse_owner = None
                if rule.reverse_attribute:
                    reverse_owner = _resolve_owner(source, rule.reverse_attribute)
                    if reverse_owner is None:
                        logger.debug(
                            "Skipping wiring %s.%s: reverse attribute path %s.%s missing",
                            rule.target,
                            rule.attribute,
                            rule.source,
                            rule.reverse_attribute,
                        )
                        continue

                setattr(owner, _leaf(rule.attribute), source)
                if reverse_owner is not None:
                    setattr(reverse_owner, _leaf(rule.reverse_attribute), target)
            except Exception as e:
                raise ComponentInitError(rule.target, e) from e

            logger.debug("Wired %s.%s -> %s", rule.target, rule.attribute, rule.source)
            applied.append(rule)
        return applied


def bind_components(target: Any, names: Sequence[str], lookup: Lookup) -> int:
    """Set one attribute per component name on ``target``.

    Absent components are bound as None.

    Returns:
        The number of attributes set.
    """
    for name in names:
        setattr(target, name, lookup(name))
    return len(names)
