"""The workflow test driver.

:class:`WorkflowTestDriver` folds the engine's command and control channels into
the handful of operations a process test needs: deploy, start, resolve jobs,
publish messages, move the clock, and assert. Every operation that changes
engine state ends with the settlement barrier, so whatever a test inspects
afterwards is the settled state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bpmn_testkit.assertions import DeploymentAssert, ProcessInstanceAssert
from bpmn_testkit.config import DriverConfig
from bpmn_testkit.core.types import LATEST_VERSION
from bpmn_testkit.exceptions import JobActivationError
from bpmn_testkit.jobs.handlers import ThrowErrorHandler, as_job_handler
from bpmn_testkit.settle import wait_for_idle, wait_for_reaction

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import timedelta

    from bpmn_testkit.core.models import ActivatedJob, DeploymentEvent, ProcessInstanceEvent
    from bpmn_testkit.core.protocols import EngineClient, EngineControl, JobHandler
    from bpmn_testkit.jobs.handlers import JobResolution

__all__ = ["WorkflowTestDriver"]

logger = logging.getLogger(__name__)


class WorkflowTestDriver:
    """High-level test operations on top of an embedded workflow engine.

    Attributes:
        engine: Control and inspection surface of the engine.
        client: Command channel of the engine.
        config: Timeouts and naming used by the driver.

    Example:
        >>> driver = WorkflowTestDriver(engine)
        >>> await driver.deploy("hardwarerequest.bpmn", "HardwareRequestProcess")
        >>> instance = await driver.start_instance("HardwareRequestProcess", {"price": 500})
        >>> (await driver.assert_that(instance)).is_waiting_at_elements("ServiceTask_CheckAvailability")
        >>> await driver.complete_job("check-availability", 1, {"available": True})
    """

    def __init__(
        self,
        engine: EngineControl,
        client: EngineClient | None = None,
        config: DriverConfig | None = None,
    ) -> None:
        """Initialize the driver.

        Args:
            engine: The engine to drive.
            client: Command channel; defaults to ``engine.client``.
            config: Driver configuration; defaults to :class:`DriverConfig`.
        """
        self.engine = engine
        self.client = client if client is not None else engine.client
        self.config = config or DriverConfig()

    async def settle(self) -> None:
        """Wait until the engine has no pending work."""
        await wait_for_idle(self.engine, self.config)

    async def _settle_after_command(self) -> None:
        if self.config.settle_after_commands:
            await self.settle()

    async def deploy(self, resource_name: str, *expected_process_ids: str) -> DeploymentEvent:
        """Deploy a process definition resource and check what it registered.

        A rejected deployment is not recovered from: the engine's error propagates.

        Args:
            resource_name: Name of the resource to deploy.
            *expected_process_ids: Process ids the deployment must contain.

        Returns:
            The deployment confirmation.

        Raises:
            DeploymentAssertionError: If an expected process id was not deployed.
        """
        deployment = await self.client.deploy_resource(resource_name)
        DeploymentAssert(deployment).contains_processes_by_bpmn_process_id(*expected_process_ids)
        logger.info("Deployed %s: %s", resource_name, ", ".join(deployment.bpmn_process_ids))
        return deployment

    async def start_instance(
        self,
        bpmn_process_id: str,
        variables: Mapping[str, Any] | None = None,
    ) -> ProcessInstanceEvent:
        """Start an instance of the latest version at its default start event.

        Returns:
            The created instance, already verified to be started.
        """
        return await self._start(bpmn_process_id, variables, ())

    async def start_instance_before(
        self,
        bpmn_process_id: str,
        variables: Mapping[str, Any] | None,
        element_id: str,
    ) -> ProcessInstanceEvent:
        """Start an instance with its token placed immediately before ``element_id``.

        The upstream part of the process is skipped entirely, which lets a test
        exercise a downstream segment without replaying the path to it.

        Returns:
            The created instance, already verified to be started.
        """
        return await self._start(bpmn_process_id, variables, (element_id,))

    async def _start(
        self,
        bpmn_process_id: str,
        variables: Mapping[str, Any] | None,
        start_before_elements: tuple[str, ...],
    ) -> ProcessInstanceEvent:
        instance = await self.client.create_instance(
            bpmn_process_id,
            dict(variables or {}),
            version=LATEST_VERSION,
            start_before_elements=start_before_elements,
        )
        await self._settle_after_command()
        (await self.assert_that(instance)).is_started()
        logger.info(
            "Started %s instance %s%s",
            bpmn_process_id,
            instance.process_instance_key,
            f" before {', '.join(start_before_elements)}" if start_before_elements else "",
        )
        return instance

    async def activate_jobs(self, job_type: str, count: int) -> list[ActivatedJob]:
        """Activate exactly ``count`` jobs of ``job_type`` with a single poll.

        The jobs are left for the caller to resolve.

        Raises:
            JobActivationError: If the engine hands out a different number of jobs.
                There is no retry.
        """
        return await self._activate(job_type, count)

    async def _activate(self, job_type: str, count: int, message: str | None = None) -> list[ActivatedJob]:
        jobs = await self.client.activate_jobs(
            job_type,
            count,
            worker=self.config.worker,
            timeout=self.config.job_timeout,
        )
        logger.debug("Activated %d of %d requested job(s) of type %s", len(jobs), count, job_type)
        if len(jobs) != count:
            raise JobActivationError(job_type, count, len(jobs), message)
        return jobs

    async def _resolve_jobs(
        self,
        job_type: str,
        count: int,
        handler: JobHandler,
        message: str | None = None,
    ) -> list[ActivatedJob]:
        jobs = await self._activate(job_type, count, message)
        for job in jobs:
            await handler.handle(self.client, job)
        await self._settle_after_command()
        return jobs

    async def complete_job(
        self,
        job_type: str,
        count: int,
        resolution: JobResolution = None,
    ) -> list[ActivatedJob]:
        """Activate exactly ``count`` jobs of ``job_type`` and resolve each of them.

        Args:
            job_type: The job type to poll.
            count: Exact number of jobs expected.
            resolution: Output variables shared by every job, a
                :class:`~bpmn_testkit.core.protocols.JobHandler`, or a callable computing
                the output variables per job.

        Returns:
            The activated jobs.

        Raises:
            JobActivationError: If the number of available jobs differs from ``count``.
        """
        return await self._resolve_jobs(job_type, count, as_job_handler(resolution))

    async def complete_job_with_error(
        self,
        job_type: str,
        count: int,
        error_code: str,
        error_message: str = "",
    ) -> list[ActivatedJob]:
        """Activate exactly ``count`` jobs of ``job_type`` and throw ``error_code`` on each."""
        return await self._resolve_jobs(job_type, count, ThrowErrorHandler(error_code, error_message))

    async def complete_user_task(
        self,
        count: int,
        resolution: JobResolution = None,
    ) -> list[ActivatedJob]:
        """Complete exactly ``count`` human tasks.

        Same contract as :meth:`complete_job`, for the reserved user-task job type.
        """
        return await self._resolve_jobs(
            self.config.user_task_type,
            count,
            as_job_handler(resolution),
            message="No user task found",
        )

    async def publish_message(
        self,
        name: str,
        correlation_key: str,
        variables: Mapping[str, Any] | None = None,
        time_to_live: timedelta | None = None,
    ) -> None:
        """Publish a message and wait for the correlation to be processed."""
        await self.client.publish_message(name, correlation_key, dict(variables or {}), time_to_live)
        logger.debug("Published message %s with correlation key %r", name, correlation_key)
        await self._settle_after_command()

    async def increase_time(self, duration: timedelta) -> None:
        """Move the engine clock forward and wait for the reaction to settle.

        Raises:
            SettleTimeoutError: If nothing reacts to the time jump, meaning no timer
                was due, or if the reaction does not settle in time.
        """
        await self.engine.increase_time(duration)
        logger.debug("Increased engine time by %s", duration)
        await wait_for_reaction(self.engine, self.config)

    async def assert_that(self, instance: ProcessInstanceEvent | int) -> ProcessInstanceAssert:
        """Snapshot an instance and return the assertion chain for it.

        Args:
            instance: The instance handle or its key.
        """
        key = instance if isinstance(instance, int) else instance.process_instance_key
        return ProcessInstanceAssert(await self.engine.inspect_instance(key))

    @staticmethod
    def assert_deployment(deployment: DeploymentEvent) -> DeploymentAssert:
        """Return the assertion chain for a deployment confirmation."""
        return DeploymentAssert(deployment)
