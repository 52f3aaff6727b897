"""Collaborator protocols consumed by the test driver.

The driver never executes processes itself. It talks to an engine through the
protocols below, which mirror the command and control surface of an embedded
workflow test engine. Using Protocol keeps the driver independent from any
particular engine SDK: any object with matching methods can be plugged in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from bpmn_testkit.core.types import LATEST_VERSION

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import timedelta

    from bpmn_testkit.core.models import ActivatedJob, DeploymentEvent, InstanceSnapshot, ProcessInstanceEvent

__all__ = ["EngineClient", "EngineControl", "JobHandler"]


@runtime_checkable
class EngineClient(Protocol):
    """Command channel to the engine.

    Every command returns once the engine acknowledged it. Processing that the
    command triggers, such as moving a token past a completed task, may still be
    running afterwards; see :meth:`EngineControl.wait_for_idle_state`.
    """

    async def deploy_resource(self, *resource_names: str) -> DeploymentEvent:
        """Deploy process definition resources by name.

        Raises:
            CommandRejectedError: If a resource is unknown or malformed.
        """
        ...

    async def create_instance(
        self,
        bpmn_process_id: str,
        variables: Mapping[str, Any] | None = None,
        version: int = LATEST_VERSION,
        start_before_elements: Sequence[str] = (),
    ) -> ProcessInstanceEvent:
        """Create a process instance.

        Args:
            bpmn_process_id: Id of the process to instantiate.
            variables: Initial process variables.
            version: Definition version, or ``LATEST_VERSION``.
            start_before_elements: When given, tokens start immediately before these
                elements instead of at the default start event.

        Raises:
            CommandRejectedError: If the process or an element is unknown.
        """
        ...

    async def activate_jobs(
        self,
        job_type: str,
        max_jobs_to_activate: int,
        worker: str,
        timeout: timedelta,
    ) -> list[ActivatedJob]:
        """Activate up to ``max_jobs_to_activate`` available jobs of ``job_type``.

        Returns immediately with whatever is available, possibly nothing.
        """
        ...

    async def complete_job(self, job_key: int, variables: Mapping[str, Any] | None = None) -> None:
        """Complete an activated job, merging ``variables`` into the instance scope."""
        ...

    async def throw_error(
        self,
        job_key: int,
        error_code: str,
        error_message: str = "",
        variables: Mapping[str, Any] | None = None,
    ) -> None:
        """Resolve an activated job with a BPMN error code."""
        ...

    async def publish_message(
        self,
        name: str,
        correlation_key: str,
        variables: Mapping[str, Any] | None = None,
        time_to_live: timedelta | None = None,
    ) -> None:
        """Publish a message to instances subscribed with a matching correlation key."""
        ...


@runtime_checkable
class EngineControl(Protocol):
    """Control and inspection surface of an embedded engine.

    Attributes:
        client: Command channel bound to this engine.
    """

    @property
    def client(self) -> EngineClient:
        """Command channel bound to this engine."""
        ...

    async def start(self) -> None:
        """Start the engine. Called once per test before any command."""
        ...

    async def stop(self) -> None:
        """Stop the engine and release everything it holds."""
        ...

    async def increase_time(self, duration: timedelta) -> None:
        """Move the engine's virtual clock forward by ``duration``."""
        ...

    async def wait_for_idle_state(self, timeout: timedelta) -> None:
        """Block until no processing is pending.

        Raises:
            TimeoutError: If the engine is still busy after ``timeout``.
        """
        ...

    async def wait_for_busy_state(self, timeout: timedelta) -> None:
        """Block until the engine has work in progress.

        Raises:
            TimeoutError: If the engine stays idle for ``timeout``.
        """
        ...

    async def inspect_instance(self, process_instance_key: int) -> InstanceSnapshot:
        """Return a consistent snapshot of one process instance.

        Raises:
            KeyError: If no instance with this key exists.
        """
        ...


@runtime_checkable
class JobHandler(Protocol):
    """Capability to resolve an activated job against a live client.

    A handler either completes the job with output variables or throws a BPMN
    error code. Fixed-variable completion, error completion and delegation to a
    domain service are all expressed as implementations of this one method.

    Example:
        >>> class ApproveAll:
        ...     async def handle(self, client: EngineClient, job: ActivatedJob) -> None:
        ...         await client.complete_job(job.key, {"approved": True})
    """

    async def handle(self, client: EngineClient, job: ActivatedJob) -> None:
        """Resolve ``job`` through ``client``."""
        ...
