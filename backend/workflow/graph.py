"""Step dependency validation and ordering.

Steps run in declaration order. ``dependencies`` are checked here so a
definition that references unknown steps or forms a cycle is rejected
before any step runs; ``execution_order`` can optionally turn them into a
topological schedule.
"""

from typing import Sequence

from core.exceptions import WorkflowDefinitionError


def validate_dependencies(steps: Sequence) -> None:
    """Raise WorkflowDefinitionError on unknown dependency ids or cycles."""
    index = {step.id: step for step in steps}

    for step in steps:
        for dep_id in step.dependencies:
            if dep_id not in index:
                raise WorkflowDefinitionError(
                    f"Step '{step.id}' depends on unknown step '{dep_id}'"
                )
            if dep_id == step.id:
                raise WorkflowDefinitionError(f"Step '{step.id}' depends on itself")

    # Iterative DFS with colouring: 0 unvisited, 1 on stack, 2 done
    state = {step_id: 0 for step_id in index}
    for root in index:
        if state[root]:
            continue
        stack = [(root, iter(index[root].dependencies))]
        path = [root]
        state[root] = 1
        while stack:
            node, deps = stack[-1]
            advanced = False
            for dep_id in deps:
                if state[dep_id] == 1:
                    cycle = path[path.index(dep_id):] + [dep_id]
                    raise WorkflowDefinitionError(
                        f"Dependency cycle detected: {' -> '.join(cycle)}"
                    )
                if state[dep_id] == 0:
                    state[dep_id] = 1
                    stack.append((dep_id, iter(index[dep_id].dependencies)))
                    path.append(dep_id)
                    advanced = True
                    break
            if not advanced:
                state[node] = 2
                stack.pop()
                path.pop()


def execution_order(steps: Sequence, dependency_ordered: bool = False) -> list:
    """Return the steps in the order the engine should run them.

    With ``dependency_ordered`` the result is a topological order that keeps
    declaration order among steps whose dependencies are already satisfied.
    Assumes ``validate_dependencies`` has passed.
    """
    if not dependency_ordered:
        return list(steps)

    remaining = list(steps)
    done: set[str] = set()
    ordered = []
    while remaining:
        for i, step in enumerate(remaining):
            if all(dep_id in done for dep_id in step.dependencies):
                ordered.append(step)
                done.add(step.id)
                del remaining[i]
                break
        else:
            # Unreachable for a validated graph
            raise WorkflowDefinitionError("Unable to order steps by dependencies")
    return ordered
