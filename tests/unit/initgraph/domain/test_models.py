"""Unit tests for domain models."""

import pytest
from pydantic import ValidationError

from initgraph.domain.enums import ComponentState, InitializerKind
from initgraph.domain.models import (
    ComponentDeclaration,
    ComponentInstance,
    DependencyEdge,
    DependencyGraph,
    ExternalRoot,
    Initializer,
    RegistryConfig,
    TeardownFailure,
    WiringRule,
)


class TestInitializer:
    """Test cases for the Initializer tagged variant."""

    def test_none_has_no_hook(self):
        """Test the NONE variant."""
        initializer = Initializer.none()

        assert initializer.kind == InitializerKind.NONE
        assert initializer.hook is None

    def test_sync_carries_hook(self):
        """Test the SYNC variant."""
        hook = lambda instance: None
        initializer = Initializer.sync(hook)

        assert initializer.kind == InitializerKind.SYNC
        assert initializer.hook is hook

    def test_async_carries_hook(self):
        """Test the ASYNC variant."""

        async def hook(instance):
            return None

        initializer = Initializer.async_(hook)

        assert initializer.kind == InitializerKind.ASYNC
        assert initializer.hook is hook

    def test_default_is_none(self):
        """Test that an Initializer without arguments is the NONE variant."""
        assert Initializer().kind == InitializerKind.NONE

    def test_sync_without_hook_is_rejected(self):
        """Test that SYNC and ASYNC variants require a hook."""
        with pytest.raises(ValidationError, match="requires a hook"):
            Initializer(kind=InitializerKind.SYNC)

    def test_none_with_hook_is_rejected(self):
        """Test that the NONE variant cannot carry a hook."""
        with pytest.raises(ValidationError, match="cannot carry a hook"):
            Initializer(kind=InitializerKind.NONE, hook=lambda instance: None)

    def test_initializer_is_frozen(self):
        """Test that Initializer is immutable."""
        initializer = Initializer.none()

        with pytest.raises(ValidationError):
            initializer.kind = InitializerKind.SYNC


class TestComponentDeclaration:
    """Test cases for the ComponentDeclaration model."""

    def test_creation_with_defaults(self):
        """Test creating a declaration with only a name and factory."""
        factory = lambda context, config: object()
        declaration = ComponentDeclaration(name="audio", factory=factory)

        assert declaration.name == "audio"
        assert declaration.factory is factory
        assert declaration.dependencies == ()
        assert declaration.config == {}
        assert declaration.initializer.kind == InitializerKind.NONE
        assert declaration.destroy_hook is None
        assert declaration.registration_index == 0

    def test_dependencies_list_becomes_tuple(self):
        """Test that dependency lists are stored as tuples in order."""
        declaration = ComponentDeclaration(name="combat", factory=lambda c, cfg: None, dependencies=["party", "audio"])

        assert declaration.dependencies == ("party", "audio")

    def test_declaration_is_frozen(self):
        """Test that ComponentDeclaration is immutable."""
        declaration = ComponentDeclaration(name="audio", factory=lambda c, cfg: None)

        with pytest.raises(ValidationError):
            declaration.name = "video"

    def test_empty_name_is_rejected(self):
        """Test that a declaration requires a non-empty name."""
        with pytest.raises(ValidationError):
            ComponentDeclaration(name="", factory=lambda c, cfg: None)

    def test_factory_must_be_callable(self):
        """Test that a non-callable factory is rejected."""
        with pytest.raises(ValidationError):
            ComponentDeclaration(name="audio", factory="not callable")

    def test_class_is_a_valid_factory(self):
        """Test that a component class can be used directly as factory."""

        class AudioManager:
            def __init__(self, context, config):
                self.context = context

        declaration = ComponentDeclaration(name="audio", factory=AudioManager)

        assert declaration.factory is AudioManager


class TestExternalRoot:
    """Test cases for the ExternalRoot model."""

    def test_holds_name_and_instance(self):
        """Test that an external root keeps the instance identity."""
        party = object()
        root = ExternalRoot(name="party", instance=party)

        assert root.name == "party"
        assert root.instance is party

    def test_requires_name(self):
        """Test that an empty name is rejected."""
        with pytest.raises(ValidationError):
            ExternalRoot(name="", instance=object())


class TestDependencyGraph:
    """Test cases for the DependencyGraph model."""

    def test_node_dependencies_filters_unknown_names(self):
        """Test that only declared nodes are reported as graph dependencies."""
        graph = DependencyGraph(
            nodes=["A", "B"],
            dependencies={"A": [], "B": ["A", "root", "ghost"]},
            dependents={"A": ["B"], "B": []},
            in_degree={"A": 0, "B": 1},
            edges=[DependencyEdge(source="A", target="B")],
            external_root="root",
            unresolved={"B": ["ghost"]},
        )

        assert graph.node_dependencies("B") == ["A"]
        assert graph.node_dependencies("missing") == []

    def test_empty_graph(self):
        """Test that a default graph has no nodes."""
        graph = DependencyGraph()

        assert graph.nodes == []
        assert graph.edges == []


class TestComponentInstance:
    """Test cases for the ComponentInstance model."""

    def test_defaults_to_pending(self):
        """Test that a new record is pending with no instance."""
        record = ComponentInstance(name="audio")

        assert record.state == ComponentState.PENDING
        assert record.instance is None
        assert record.error is None
        assert record.is_ready is False

    def test_is_ready_follows_state(self):
        """Test that is_ready reflects the READY state only."""
        record = ComponentInstance(name="audio")
        record.state = ComponentState.READY

        assert record.is_ready is True

        record.state = ComponentState.DESTROYED
        assert record.is_ready is False


class TestWiringRuleAndConfig:
    """Test cases for WiringRule and RegistryConfig."""

    def test_wiring_rule_defaults(self):
        """Test that a rule has no reverse attribute by default."""
        rule = WiringRule(target="combat", attribute="equipment", source="equipment")

        assert rule.reverse_attribute is None

    def test_config_defaults(self):
        """Test the default registry configuration."""
        config = RegistryConfig()

        assert config.name == "components"
        assert config.wiring_rules == ()

    def test_config_from_plain_data(self):
        """Test that wiring rules can be declared as plain data."""
        config = RegistryConfig.model_validate(
            {
                "name": "game",
                "wiring_rules": [
                    {"target": "combat", "attribute": "equipment", "source": "equipment"},
                    {
                        "target": "combat",
                        "attribute": "abilities.resources",
                        "source": "resources",
                        "reverse_attribute": "combat",
                    },
                ],
            }
        )

        assert config.name == "game"
        assert len(config.wiring_rules) == 2
        assert isinstance(config.wiring_rules[0], WiringRule)
        assert config.wiring_rules[1].reverse_attribute == "combat"

    def test_config_rejects_incomplete_rule(self):
        """Test that a rule missing its source is rejected."""
        with pytest.raises(ValidationError):
            RegistryConfig.model_validate({"wiring_rules": [{"target": "combat", "attribute": "equipment"}]})


class TestTeardownFailure:
    """Test cases for TeardownFailure."""

    def test_holds_error(self):
        """Test that a failure keeps the component name and the error."""
        error = RuntimeError("boom")
        failure = TeardownFailure(name="audio", error=error)

        assert failure.name == "audio"
        assert failure.error is error
