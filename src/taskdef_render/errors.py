"""
Errors raised while rendering a task definition.

Every error is terminal for the invocation.
"""
from typing import Any, Optional


class TaskDefinitionRenderError(Exception):
    """
    Base class for render failures. `response` holds the raw API payload
    that triggered the failure, when there is one.
    """
    def __init__(self, message: str, response: Optional[Any] = None):
        super().__init__(message)
        self.response = response


class ServiceNotFound(TaskDefinitionRenderError):
    pass


class MissingTaskDefinitionReference(TaskDefinitionRenderError):
    pass


class MissingTaskDefinition(TaskDefinitionRenderError):
    pass


class NoContainerFound(TaskDefinitionRenderError):
    pass
