"""Unit tests for domain exceptions."""

import pytest

from initgraph.domain.exceptions import (
    CircularDependencyError,
    ComponentInitError,
    ConfigConflictError,
    DuplicateComponentError,
    InitGraphException,
    MissingDependencyError,
    RegistryStateError,
)


class TestInitGraphException:
    """Test cases for the base InitGraphException class."""

    def test_is_exception(self):
        """Test that InitGraphException inherits from Exception."""
        assert issubclass(InitGraphException, Exception)

    def test_can_be_raised_with_message(self):
        """Test that InitGraphException can be raised with a message."""
        with pytest.raises(InitGraphException, match="Test error"):
            raise InitGraphException("Test error")

    @pytest.mark.parametrize(
        "exception_class",
        [
            DuplicateComponentError,
            CircularDependencyError,
            MissingDependencyError,
            ConfigConflictError,
            ComponentInitError,
            RegistryStateError,
        ],
    )
    def test_subclasses_share_base(self, exception_class):
        """Test that every registry error can be caught through the base class."""
        assert issubclass(exception_class, InitGraphException)


class TestDuplicateComponentError:
    """Test cases for DuplicateComponentError."""

    def test_carries_name(self):
        """Test that the duplicated name is exposed and rendered."""
        error = DuplicateComponentError("audio")

        assert error.name == "audio"
        assert "'audio' is already registered" in str(error)


class TestCircularDependencyError:
    """Test cases for CircularDependencyError."""

    def test_single_cycle(self):
        """Test rendering a single cycle."""
        error = CircularDependencyError([["X", "Y", "X"]])

        assert error.cycles == [["X", "Y", "X"]]
        assert "X -> Y -> X" in str(error)

    def test_multiple_cycles(self):
        """Test that every cycle is kept and rendered."""
        error = CircularDependencyError([["A", "B", "A"], ["C", "C"]])

        assert len(error.cycles) == 2
        assert "A -> B -> A" in str(error)
        assert "C -> C" in str(error)

    def test_cycles_are_copied(self):
        """Test that later mutation of the input does not affect the error."""
        cycle = ["A", "B", "A"]
        error = CircularDependencyError([cycle])
        cycle.append("Z")

        assert error.cycles == [["A", "B", "A"]]

    def test_empty_cycle_list(self):
        """Test the message when no cycle detail is available."""
        error = CircularDependencyError([])

        assert error.cycles == []
        assert str(error) == "Circular dependency detected"


class TestMissingDependencyError:
    """Test cases for MissingDependencyError."""

    def test_names_dependency_and_component(self):
        """Test that both the missing dependency and its dependent are exposed."""
        error = MissingDependencyError("root", "P")

        assert error.dependency == "root"
        assert error.component == "P"
        assert "'root'" in str(error)
        assert "'P'" in str(error)


class TestConfigConflictError:
    """Test cases for ConfigConflictError."""

    def test_lists_conflicting_keys(self):
        """Test that the colliding keys are exposed and rendered."""
        error = ConfigConflictError("combat", ["party", "audio"])

        assert error.component == "combat"
        assert error.keys == ["party", "audio"]
        assert "party, audio" in str(error)


class TestComponentInitError:
    """Test cases for ComponentInitError."""

    def test_carries_component_and_cause(self):
        """Test that the failing component and the original error are exposed."""
        cause = ValueError("bad asset")
        error = ComponentInitError("loot", cause)

        assert error.component == "loot"
        assert error.cause is cause
        assert "'loot'" in str(error)
        assert "bad asset" in str(error)


class TestRegistryStateError:
    """Test cases for RegistryStateError."""

    def test_message(self):
        """Test that a plain message is kept."""
        error = RegistryStateError("already built")

        assert str(error) == "already built"
