"""Condition step: evaluate field comparisons against runtime data."""

from typing import Any, Dict, List

from core.constants import ConditionOperator, StepType
from core.utils import MISSING, compare, strict_equals
from tasks.base_task import BaseTask, StepResult
from workflow.models import ConditionClause, ConditionConfig
from workflow.templating import stringify


def evaluate_clause(clause: ConditionClause, data: Dict[str, Any]) -> bool:
    """Evaluate one {field, operator, value} clause. Unknown operators are False."""
    value = data.get(clause.field, MISSING)
    operator = clause.operator

    if operator == ConditionOperator.EQUALS.value:
        return strict_equals(value, clause.value)
    if operator == ConditionOperator.NOT_EQUALS.value:
        return not strict_equals(value, clause.value)
    if operator == ConditionOperator.CONTAINS.value:
        if value is MISSING:
            return False
        return stringify(clause.value) in stringify(value)
    if operator == ConditionOperator.GREATER_THAN.value:
        return compare(value, clause.value) == 1
    if operator == ConditionOperator.LESS_THAN.value:
        return compare(value, clause.value) == -1
    return False


def evaluate_conditions(config: ConditionConfig, data: Dict[str, Any]) -> Dict[str, Any]:
    results: List[bool] = [evaluate_clause(clause, data) for clause in config.conditions]
    if config.operator == "AND":
        outcome = all(results)
    else:
        outcome = any(results)
    return {"conditionResult": outcome, "perConditionResults": results}


class ConditionTask(BaseTask):
    """Combine per-field comparisons with AND / OR."""

    step_type = StepType.CONDITION
    display_name = "Condition"
    description = "Evaluate conditions against runtime data"
    config_model = ConditionConfig

    async def execute(self, step: Any, data: Dict[str, Any]) -> StepResult:
        return StepResult.ok(evaluate_conditions(step.config, data))


CONDITION_TASK_TYPES = {
    StepType.CONDITION: ConditionTask,
}
