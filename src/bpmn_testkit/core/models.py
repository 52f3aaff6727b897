"""Records exchanged between the test driver and the workflow engine.

All records are immutable snapshots. The engine owns the entities they describe;
the driver only refers to them by key.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any

from bpmn_testkit.core.types import ElementIntent, ElementType, InstanceStatus

__all__ = [
    "ActivatedJob",
    "DeploymentEvent",
    "ElementRecord",
    "InstanceSnapshot",
    "ProcessInstanceEvent",
    "ProcessMetadata",
]


@dataclass(frozen=True)
class ProcessMetadata:
    """A process definition registered by a deployment.

    Attributes:
        bpmn_process_id: The id declared on the process element.
        version: Version assigned by the engine, starting at 1.
        process_definition_key: Unique key of this definition version.
        resource_name: Name of the resource the definition was read from.
    """

    bpmn_process_id: str
    version: int
    process_definition_key: int
    resource_name: str


@dataclass(frozen=True)
class DeploymentEvent:
    """Confirmation returned by a deployment command."""

    key: int
    processes: tuple[ProcessMetadata, ...] = ()

    @property
    def bpmn_process_ids(self) -> list[str]:
        """Process ids contained in the deployment, in deployment order."""
        return [process.bpmn_process_id for process in self.processes]


@dataclass(frozen=True)
class ProcessInstanceEvent:
    """Handle of a created process instance.

    Attributes:
        bpmn_process_id: The BPMN process id of the definition the instance runs.
        process_definition_key: Key of the definition version used.
        process_instance_key: Unique key of the created instance.
        version: Version of the definition used.
    """

    bpmn_process_id: str
    process_definition_key: int
    process_instance_key: int
    version: int


@dataclass(frozen=True)
class ActivatedJob:
    """A unit of work handed to a worker.

    The job must be resolved exactly once, either by completing it or by
    throwing an error code.

    Attributes:
        key: Unique job key.
        type: The job type declared on the task.
        process_instance_key: Key of the instance that emitted the job.
        bpmn_process_id: Process id of that instance.
        element_id: Id of the task element that emitted the job.
        element_instance_key: Key of the task's element instance.
        variables: Copy of the variables visible to the task at activation.
        worker: Name of the worker that activated the job.
        retries: Remaining retries.
        deadline: Time after which the activation lapses.
    """

    key: int
    type: str
    process_instance_key: int
    bpmn_process_id: str
    element_id: str
    element_instance_key: int
    variables: Mapping[str, Any] = field(default_factory=dict)
    worker: str = ""
    retries: int = 3
    deadline: datetime | None = None

    def get(self, name: str, default: Any = None) -> Any:
        """Return a job variable, or ``default`` when it is absent."""
        return self.variables.get(name, default)


@dataclass(frozen=True)
class ElementRecord:
    """One lifecycle transition in an instance's execution history."""

    element_id: str
    element_type: ElementType
    intent: ElementIntent
    element_instance_key: int


@dataclass(frozen=True)
class InstanceSnapshot:
    """Consistent read of a process instance's state.

    Attributes:
        process_instance_key: Key of the instance.
        bpmn_process_id: Process id of the instance.
        status: Current lifecycle status.
        active_elements: Ids of the elements currently holding a token.
        history: Every recorded element transition, oldest first.
        variables: The process-level variable scope.
        incidents: Descriptions of unresolved incidents.
    """

    process_instance_key: int
    bpmn_process_id: str
    status: InstanceStatus
    active_elements: frozenset[str] = frozenset()
    history: tuple[ElementRecord, ...] = ()
    variables: Mapping[str, Any] = field(default_factory=dict)
    incidents: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    @property
    def is_started(self) -> bool:
        """Whether the process element itself was activated."""
        return any(
            record.element_type == ElementType.PROCESS and record.intent == ElementIntent.ELEMENT_ACTIVATED
            for record in self.history
        )

    def times_passed(self, element_id: str) -> int:
        """Count how often ``element_id`` completed."""
        return sum(
            1
            for record in self.history
            if record.element_id == element_id and record.intent == ElementIntent.ELEMENT_COMPLETED
        )

    def has_passed(self, element_id: str) -> bool:
        """Whether ``element_id`` completed at least once."""
        return self.times_passed(element_id) > 0

    def passed_elements(self) -> list[str]:
        """Ids of completed elements in completion order, excluding the process."""
        return [
            record.element_id
            for record in self.history
            if record.intent == ElementIntent.ELEMENT_COMPLETED and record.element_type != ElementType.PROCESS
        ]
