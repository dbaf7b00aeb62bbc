"""Tests for workflow definition parsing."""

import pytest

from core.exceptions import WorkflowDefinitionError
from workflow.models import (
    ApiCallStep,
    DataTransformationStep,
    NotificationStep,
    WorkflowDefinition,
)


@pytest.mark.unit
class TestWorkflowDefinition:

    def test_parses_each_step_type_by_discriminator(self):
        definition = WorkflowDefinition.from_dict({
            "id": "wf-1",
            "steps": [
                {"id": "t", "type": "data_transformation",
                 "config": {"transformation": "aggregate", "groupBy": "team", "replaceData": True}},
                {"id": "n", "type": "notification",
                 "config": {"channel": "email", "template": "tpl", "recipients": "a@example.com"}},
                {"id": "h", "type": "api_call",
                 "config": {"url": "https://example.com", "bodyTemplate": "{x}"}},
            ],
        })

        transform, notify, call = definition.steps
        assert isinstance(transform, DataTransformationStep)
        assert transform.config.group_by == "team"
        assert transform.config.replace_data is True
        assert isinstance(notify, NotificationStep)
        assert notify.config.recipients == "a@example.com"
        assert isinstance(call, ApiCallStep)
        assert call.config.method == "GET"
        assert call.config.body_template == "{x}"

    def test_unknown_step_type_rejected(self):
        with pytest.raises(WorkflowDefinitionError, match="Invalid workflow definition"):
            WorkflowDefinition.from_dict({
                "id": "wf-1",
                "steps": [{"id": "s", "type": "teleport", "config": {}}],
            })

    def test_missing_required_config_rejected(self):
        with pytest.raises(WorkflowDefinitionError, match="prompt"):
            WorkflowDefinition.from_dict({
                "id": "wf-1",
                "steps": [{"id": "s", "type": "ai_processing", "config": {}}],
            })

    def test_duplicate_step_ids_rejected(self):
        with pytest.raises(WorkflowDefinitionError, match="Duplicate step id: s"):
            WorkflowDefinition.from_dict({
                "id": "wf-1",
                "steps": [
                    {"id": "s", "type": "condition", "config": {}},
                    {"id": "s", "type": "condition", "config": {}},
                ],
            })

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(WorkflowDefinitionError):
            WorkflowDefinition.from_dict({
                "id": "wf-1",
                "steps": [{"id": "s", "type": "condition", "config": {}, "timeout": 0}],
            })

    def test_definition_is_frozen(self):
        definition = WorkflowDefinition.from_dict({"id": "wf-1", "steps": []})
        with pytest.raises(Exception):
            definition.name = "changed"
