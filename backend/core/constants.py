"""Constants and enums for the workflow orchestrator."""

from enum import Enum


class ExecutionStatus(str, Enum):
    """Workflow run status."""

    LOADING = "loading"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class TriggerType(str, Enum):
    """How a run was started."""

    MANUAL = "manual"
    SCHEDULE = "schedule"
    EVENT = "event"
    WEBHOOK = "webhook"


class StepType(str, Enum):
    """Closed set of step types a workflow may contain."""

    AI_PROCESSING = "ai_processing"
    DATA_TRANSFORMATION = "data_transformation"
    NOTIFICATION = "notification"
    API_CALL = "api_call"
    CONDITION = "condition"


class TransformationKind(str, Enum):
    """Known data transformation kinds. Anything else passes input through."""

    FILTER = "filter"
    MAP = "map"
    AGGREGATE = "aggregate"


class ConditionOperator(str, Enum):
    """Comparison operators for condition steps."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


class NotificationChannel(str, Enum):
    """Channels the notification step can dispatch through."""

    EMAIL = "email"
    SLACK = "slack"
    SMS = "sms"


# Reserved RuntimeData field carrying the requesting user
USER_ID_FIELD = "userId"

# RuntimeData field holding non-mapping payloads and default transformation input
DATA_FIELD = "data"
