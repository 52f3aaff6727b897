"""Core types, records and collaborator protocols for bpmn-testkit."""

from __future__ import annotations

from bpmn_testkit.core.models import (
    ActivatedJob,
    DeploymentEvent,
    ElementRecord,
    InstanceSnapshot,
    ProcessInstanceEvent,
    ProcessMetadata,
)
from bpmn_testkit.core.protocols import EngineClient, EngineControl, JobHandler
from bpmn_testkit.core.types import (
    LATEST_VERSION,
    USER_TASK_JOB_TYPE,
    ElementIntent,
    ElementType,
    InstanceStatus,
)

__all__ = [
    "LATEST_VERSION",
    "USER_TASK_JOB_TYPE",
    "ActivatedJob",
    "DeploymentEvent",
    "ElementIntent",
    "ElementRecord",
    "ElementType",
    "EngineClient",
    "EngineControl",
    "InstanceSnapshot",
    "InstanceStatus",
    "JobHandler",
    "ProcessInstanceEvent",
    "ProcessMetadata",
]
