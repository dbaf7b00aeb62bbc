"""Custom exceptions for the workflow orchestrator."""

from typing import Optional


class OrchestratorException(Exception):
    """Base exception for the workflow orchestrator."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code.

        Args:
            message: Exception message
            status_code: HTTP status code
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(OrchestratorException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize NotFoundError with 404 status code."""
        super().__init__(message, 404)


class ValidationError(OrchestratorException):
    """Malformed run request."""

    def __init__(self, message: str = "Validation failed"):
        """Initialize ValidationError with 422 status code."""
        super().__init__(message, 422)


class WorkflowDefinitionError(ValidationError):
    """Stored workflow definition cannot be executed (bad config, cycles, unknown ids)."""

    def __init__(self, message: str = "Invalid workflow definition"):
        super().__init__(message)


class StepExecutionError(OrchestratorException):
    """Failure inside a step executor. Always captured as a failed StepResult."""

    def __init__(self, message: str = "Step execution failed"):
        super().__init__(message, 500)


class CompletionError(StepExecutionError):
    """Text-completion collaborator returned a non-success status."""

    def __init__(self, status: int, message: Optional[str] = None):
        self.status = status
        super().__init__(message or f"Completion service returned status {status}")


class EngineFault(OrchestratorException):
    """Unexpected error escaping a step invocation. Aborts the run."""

    def __init__(self, message: str = "Engine fault"):
        super().__init__(message, 500)


class RecorderError(OrchestratorException):
    """Execution log persistence failure. Logged, never surfaced."""

    def __init__(self, message: str = "Failed to record execution"):
        super().__init__(message, 500)
