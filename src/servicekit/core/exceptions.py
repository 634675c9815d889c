"""servicekit exception hierarchy."""

from __future__ import annotations


class ServiceKitError(Exception):
    """Base exception for all servicekit errors."""


class StepError(ServiceKitError):
    """Error raised by the step execution engine itself."""


class StepConfigurationError(StepError):
    """A step was built or invoked incorrectly (programmer mistake, not retryable)."""


class StepInternalError(StepError):
    """A bound worker could not be dispatched. Must never happen through the builder API."""

    def __init__(self, worker_type: str, detail: str = "") -> None:
        self.worker_type = worker_type
        message = f"Internal server error (unhandled worker type: '{worker_type}')"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PersistenceError(ServiceKitError):
    """Step state backend read or write failed."""

    def __init__(self, backend: str, operation: str, message: str) -> None:
        self.backend = backend
        self.operation = operation
        super().__init__(f"{backend} {operation} failed: {message}")
