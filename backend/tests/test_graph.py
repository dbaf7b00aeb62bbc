"""Tests for step dependency validation and ordering."""

import pytest

from core.exceptions import WorkflowDefinitionError
from workflow.graph import execution_order, validate_dependencies
from workflow.models import WorkflowDefinition


def _steps(*specs):
    """Build condition steps from (id, [deps]) pairs."""
    return WorkflowDefinition.from_dict({
        "id": "wf",
        "steps": [
            {"id": step_id, "type": "condition", "config": {}, "dependencies": deps}
            for step_id, deps in specs
        ],
    }).steps


@pytest.mark.unit
class TestValidateDependencies:

    def test_acyclic_graph_passes(self):
        validate_dependencies(_steps(("a", []), ("b", ["a"]), ("c", ["a", "b"])))

    def test_unknown_dependency_rejected(self):
        with pytest.raises(WorkflowDefinitionError, match="unknown step 'ghost'"):
            validate_dependencies(_steps(("a", ["ghost"])))

    def test_self_dependency_rejected(self):
        with pytest.raises(WorkflowDefinitionError, match="depends on itself"):
            validate_dependencies(_steps(("a", ["a"])))

    def test_cycle_reported_with_path(self):
        with pytest.raises(WorkflowDefinitionError) as exc:
            validate_dependencies(_steps(("a", ["b"]), ("b", ["c"]), ("c", ["a"])))
        assert exc.value.message == "Dependency cycle detected: a -> b -> c -> a"
        assert exc.value.status_code == 422

    def test_forward_reference_is_allowed(self):
        # Declared later but not cyclic
        validate_dependencies(_steps(("a", ["b"]), ("b", [])))


@pytest.mark.unit
class TestExecutionOrder:

    def test_declaration_order_by_default(self):
        steps = _steps(("a", ["b"]), ("b", []))
        assert [s.id for s in execution_order(steps)] == ["a", "b"]

    def test_dependency_order_when_enabled(self):
        steps = _steps(("a", ["b"]), ("b", []), ("c", []))
        assert [s.id for s in execution_order(steps, dependency_ordered=True)] == ["b", "a", "c"]

    def test_dependency_order_is_stable(self):
        steps = _steps(("x", []), ("y", []), ("z", ["x"]))
        assert [s.id for s in execution_order(steps, dependency_ordered=True)] == ["x", "y", "z"]
