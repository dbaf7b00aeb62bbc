"""Workflow definition schemas.

A workflow is an ordered list of steps. Each step type carries its own config
schema and the ``type`` field selects which one applies:

{
    "id": "wf_123",
    "steps": [
        {
            "id": "summarize",
            "type": "ai_processing",
            "config": {"prompt": "Summarize {text}", "useCase": "summary"},
            "timeout": 60
        },
        {
            "id": "only_open",
            "type": "data_transformation",
            "config": {
                "transformation": "filter",
                "conditions": [{"field": "status", "value": "open"}]
            },
            "dependencies": ["summarize"]
        }
    ]
}

Definitions are frozen once parsed; the engine never mutates them during a run.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import WorkflowDefinitionError


class _Frozen(BaseModel):
    class Config:
        frozen = True
        populate_by_name = True


# ─── Step configs ──────────────────────────────────────────────

class AIProcessingConfig(_Frozen):
    """Prompt template sent to the text-completion service."""

    prompt: str = Field(description="Prompt template with {field} placeholders")
    use_case: Optional[str] = Field(default=None, alias="useCase")
    provider: Optional[str] = Field(default=None, description="Provider preference hint")


class FieldMatch(_Frozen):
    field: str
    value: Any = None


class FieldMapping(_Frozen):
    source: str
    target: str


class DataTransformationConfig(_Frozen):
    """filter / map / aggregate over a list held in runtime data."""

    transformation: str = Field(description="filter, map or aggregate; others pass input through")
    conditions: List[FieldMatch] = Field(default_factory=list)
    mappings: List[FieldMapping] = Field(default_factory=list)
    group_by: Optional[str] = Field(default=None, alias="groupBy")
    source: Optional[str] = Field(default=None, description="Runtime data field to transform")
    replace_data: bool = Field(default=False, alias="replaceData")


class NotificationConfig(_Frozen):
    channel: str
    template: str = Field(description="Notification template id")
    recipients: Union[List[str], str] = Field(default_factory=list)


class ApiCallConfig(_Frozen):
    url: str = Field(min_length=1)
    method: str = "GET"
    headers: dict[str, str] = Field(default_factory=dict)
    body_template: Optional[str] = Field(default=None, alias="bodyTemplate")


class ConditionClause(_Frozen):
    field: str
    operator: str
    value: Any = None


class ConditionConfig(_Frozen):
    conditions: List[ConditionClause] = Field(default_factory=list)
    operator: str = Field(default="AND", description="AND, or anything else for OR")


# ─── Steps ─────────────────────────────────────────────────────

class _StepBase(_Frozen):
    id: str = Field(min_length=1)
    name: Optional[str] = None
    dependencies: List[str] = Field(default_factory=list)
    timeout: Optional[float] = Field(default=None, gt=0, description="Seconds")


class AIProcessingStep(_StepBase):
    type: Literal["ai_processing"]
    config: AIProcessingConfig


class DataTransformationStep(_StepBase):
    type: Literal["data_transformation"]
    config: DataTransformationConfig


class NotificationStep(_StepBase):
    type: Literal["notification"]
    config: NotificationConfig


class ApiCallStep(_StepBase):
    type: Literal["api_call"]
    config: ApiCallConfig


class ConditionStep(_StepBase):
    type: Literal["condition"]
    config: ConditionConfig


Step = Annotated[
    Union[
        AIProcessingStep,
        DataTransformationStep,
        NotificationStep,
        ApiCallStep,
        ConditionStep,
    ],
    Field(discriminator="type"),
]


class WorkflowDefinition(_Frozen):
    id: str = Field(min_length=1)
    name: Optional[str] = None
    steps: List[Step] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_step_ids(self) -> "WorkflowDefinition":
        seen: set[str] = set()
        for step in self.steps:
            if step.id in seen:
                raise ValueError(f"Duplicate step id: {step.id}")
            seen.add(step.id)
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "WorkflowDefinition":
        """Parse a stored definition, raising WorkflowDefinitionError on bad input."""
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" if err["loc"] else err["msg"]
                for err in e.errors()
            )
            raise WorkflowDefinitionError(f"Invalid workflow definition: {details}") from e


class NotificationTemplate(_Frozen):
    """Stored notification template (subject + body with placeholders)."""

    id: str
    subject: str = ""
    content: str = ""
