"""Tests for the step executor registry and settings wiring."""

import pytest

from app.config import Settings
from app.dependencies import build_workflow_engine
from core.constants import StepType
from tasks.implementations.ai_task import AIProcessingTask
from tasks.registry import TaskRegistry


@pytest.mark.unit
class TestTaskRegistry:

    def test_every_step_type_has_an_executor(self):
        registry = TaskRegistry()
        assert set(registry.available_types) == {t.value for t in StepType}

    def test_lookup_by_string_or_enum(self):
        registry = TaskRegistry()
        assert isinstance(registry.get("ai_processing"), AIProcessingTask)
        assert registry.get(StepType.AI_PROCESSING) is registry.get("ai_processing")
        assert registry.get("teleport") is None

    def test_executors_share_collaborators_and_timeouts(self, collaborators):
        registry = TaskRegistry(collaborators, enforce_timeouts=False, default_timeout=9)
        task = registry.get("api_call")
        assert task.collaborators is collaborators
        assert task.enforce_timeouts is False
        assert task.default_timeout == 9

    def test_list_all_exposes_alias_schemas(self):
        entries = {e["step_type"]: e for e in TaskRegistry().list_all()}
        assert "bodyTemplate" in entries["api_call"]["config_schema"]["properties"]
        assert entries["notification"]["display_name"] == "Notification"


@pytest.mark.unit
class TestSettingsWiring:

    def test_notification_channels_from_settings(self):
        settings = Settings(SLACK_WEBHOOK_URL="https://hooks.slack.test/x", SMTP_HOST="")
        assert set(settings.notification_channel_config()) == {"slack"}

    def test_engine_built_from_settings(self, session_factory):
        settings = Settings(
            DEPENDENCY_ORDERED_EXECUTION=True,
            ENFORCE_STEP_TIMEOUTS=False,
            DEFAULT_STEP_TIMEOUT=12.5,
        )
        engine = build_workflow_engine(settings, session_factory)

        task = engine.registry.get("condition")
        assert task.enforce_timeouts is False
        assert task.default_timeout == 12.5
