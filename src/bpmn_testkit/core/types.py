"""Core type definitions for bpmn-testkit.

This module defines the enums and constants shared by the driver,
the assertion layer and engine adapters.
"""

from __future__ import annotations

import sys
from enum import Enum

# StrEnum backport for Python < 3.11
if sys.version_info >= (3, 11):
    from enum import StrEnum
else:

    class StrEnum(str, Enum):
        """String enumeration compatibility for Python < 3.11."""

        def __str__(self) -> str:
            return str(self.value)


__all__ = [
    "LATEST_VERSION",
    "USER_TASK_JOB_TYPE",
    "ElementIntent",
    "ElementType",
    "InstanceStatus",
]


LATEST_VERSION = -1
"""Version selector resolving to the most recently deployed process version."""

USER_TASK_JOB_TYPE = "io.camunda.zeebe:userTask"
"""Reserved job type under which the engine exposes human tasks."""


class InstanceStatus(StrEnum):
    """Lifecycle status of a process instance.

    Attributes:
        ACTIVE: The instance holds at least one token and has not ended.
        COMPLETED: Every token reached an end event.
        TERMINATED: The instance was cancelled or ended by a terminate event.
    """

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    TERMINATED = "TERMINATED"


class ElementIntent(StrEnum):
    """Lifecycle transition recorded for an element instance."""

    ELEMENT_ACTIVATED = "ELEMENT_ACTIVATED"
    ELEMENT_COMPLETED = "ELEMENT_COMPLETED"
    ELEMENT_TERMINATED = "ELEMENT_TERMINATED"


class ElementType(StrEnum):
    """BPMN element kinds that show up in an instance's history.

    Attributes:
        PROCESS: The process itself.
        START_EVENT: A none start event.
        END_EVENT: An end event.
        SERVICE_TASK: A job-backed task (service or send task).
        USER_TASK: A human task, exposed as a job of the reserved user-task type.
        EXCLUSIVE_GATEWAY: A conditional branch picking one outgoing flow.
        EVENT_BASED_GATEWAY: A branch waiting for the first of several catch events.
        MESSAGE_CATCH_EVENT: An intermediate event waiting for a correlated message.
        TIMER_CATCH_EVENT: An intermediate event waiting for a due date.
        BOUNDARY_EVENT: An event attached to a task, such as an error catch.
    """

    PROCESS = "PROCESS"
    START_EVENT = "START_EVENT"
    END_EVENT = "END_EVENT"
    SERVICE_TASK = "SERVICE_TASK"
    USER_TASK = "USER_TASK"
    EXCLUSIVE_GATEWAY = "EXCLUSIVE_GATEWAY"
    EVENT_BASED_GATEWAY = "EVENT_BASED_GATEWAY"
    MESSAGE_CATCH_EVENT = "MESSAGE_CATCH_EVENT"
    TIMER_CATCH_EVENT = "TIMER_CATCH_EVENT"
    BOUNDARY_EVENT = "BOUNDARY_EVENT"

