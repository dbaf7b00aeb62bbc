"""Data transformation step.

Applies filter, map or aggregate to a list held in runtime data:

- filter:    keep items where every {field, value} condition matches exactly
- map:       rebuild each item from ordered {source, target} renames
- aggregate: group items by the value of ``groupBy``, keyed by its text form

Any other ``transformation`` value returns the input untouched.
"""

import json
from typing import Any, Dict, List

from core.constants import DATA_FIELD, StepType, TransformationKind
from core.exceptions import StepExecutionError
from core.utils import MISSING, strict_equals
from tasks.base_task import BaseTask, StepResult
from workflow.models import DataTransformationConfig, FieldMapping, FieldMatch


def select_input(config: DataTransformationConfig, data: Dict[str, Any]) -> Any:
    """Pick the value a transformation operates on.

    An explicit ``source`` field wins; otherwise the ``data`` field is used
    when present, falling back to the whole runtime mapping.
    """
    if config.source:
        if config.source not in data:
            raise StepExecutionError(f"Transformation source field not found: {config.source}")
        return data[config.source]
    if DATA_FIELD in data:
        return data[DATA_FIELD]
    return data


def _require_list(items: Any) -> List[Any]:
    if not isinstance(items, (list, tuple)):
        raise StepExecutionError("Transformation input must be a list")
    return list(items)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name, MISSING)
    return MISSING


def filter_items(items: Any, conditions: List[FieldMatch]) -> List[Any]:
    return [
        item for item in _require_list(items)
        if all(strict_equals(_field(item, c.field), c.value) for c in conditions)
    ]


def map_items(items: Any, mappings: List[FieldMapping]) -> List[Dict[str, Any]]:
    mapped = []
    for item in _require_list(items):
        row: Dict[str, Any] = {}
        for mapping in mappings:
            value = _field(item, mapping.source)
            if value is not MISSING:
                row[mapping.target] = value
        mapped.append(row)
    return mapped


def group_key(value: Any) -> str:
    """Text key for a group value. Strings stay as they are, anything else is
    rendered as JSON, so True and 1 land in different groups."""
    if isinstance(value, str):
        return value
    if value is MISSING:
        value = None
    return json.dumps(value, default=str, separators=(",", ":"))


def aggregate_items(items: Any, group_by: str) -> Dict[str, List[Any]]:
    groups: Dict[str, List[Any]] = {}
    for item in _require_list(items):
        groups.setdefault(group_key(_field(item, group_by)), []).append(item)
    return groups


def transform(config: DataTransformationConfig, items: Any) -> Any:
    kind = config.transformation
    if kind == TransformationKind.FILTER.value:
        return filter_items(items, config.conditions)
    if kind == TransformationKind.MAP.value:
        return map_items(items, config.mappings)
    if kind == TransformationKind.AGGREGATE.value:
        if not config.group_by:
            raise StepExecutionError("Aggregate transformation requires groupBy")
        return aggregate_items(items, config.group_by)
    return items


class DataTransformationTask(BaseTask):
    """Filter, map or group a collection from runtime data."""

    step_type = StepType.DATA_TRANSFORMATION
    display_name = "Data Transformation"
    description = "Filter, map or aggregate a list of records"
    config_model = DataTransformationConfig

    async def execute(self, step: Any, data: Dict[str, Any]) -> StepResult:
        config: DataTransformationConfig = step.config
        return StepResult.ok(transform(config, select_input(config, data)))


TRANSFORM_TASK_TYPES = {
    StepType.DATA_TRANSFORMATION: DataTransformationTask,
}
