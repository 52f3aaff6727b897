"""Configuration for the workflow test driver."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from bpmn_testkit.core.types import USER_TASK_JOB_TYPE

__all__ = ["DriverConfig"]


@dataclass
class DriverConfig:
    """Configuration for :class:`~bpmn_testkit.driver.WorkflowTestDriver`.

    Attributes:
        idle_timeout: Upper bound for waiting until the engine has no pending work.
        busy_timeout: Upper bound for waiting until the engine reacts to a time jump.
        user_task_type: Job type under which the engine exposes human tasks.
        worker: Worker name reported when activating jobs.
        job_timeout: How long an activated job stays reserved for the worker.
        settle_after_commands: Whether state-changing operations wait for idle
            before returning. Assertions are only meaningful on settled state, so
            turn this off only to observe intermediate engine behaviour.

    Example:
        >>> from datetime import timedelta
        >>> config = DriverConfig(idle_timeout=timedelta(seconds=5), worker="ci")
    """

    idle_timeout: timedelta = timedelta(seconds=1)
    busy_timeout: timedelta = timedelta(seconds=1)
    user_task_type: str = USER_TASK_JOB_TYPE
    worker: str = "bpmn-testkit"
    job_timeout: timedelta = timedelta(minutes=5)
    settle_after_commands: bool = True
