"""bpmn-testkit - Async test driver for BPMN processes.

This package wraps the command and control surface of an embedded workflow
engine into the operations a process test is made of, so a test reads like the
scenario it checks.

Key Features:
    - Deploy process resources and verify the registered process ids
    - Start instances at the default start event or right before any element
    - Fail-fast job activation with pluggable completion handlers
    - Virtual time control with busy/idle settlement barriers
    - Fluent assertions on instance state, history and variables

Example:
    >>> from bpmn_testkit import WorkflowTestDriver
    >>>
    >>> driver = WorkflowTestDriver(engine)
    >>> instance = await driver.start_instance("HardwareRequestProcess", {"price": 500})
    >>> await driver.complete_job("check-availability", 1, {"available": True})
    >>> await driver.complete_job("send-hardware", 1)
    >>> (await driver.assert_that(instance)).has_passed_element("EndEvent_HardwareSent").is_completed()
"""

from __future__ import annotations

from bpmn_testkit.__metadata__ import __project__, __version__
from bpmn_testkit.assertions import DeploymentAssert, ProcessInstanceAssert
from bpmn_testkit.config import DriverConfig
from bpmn_testkit.driver import WorkflowTestDriver
from bpmn_testkit.exceptions import (
    BpmnError,
    CommandRejectedError,
    DeploymentAssertionError,
    JobActivationError,
    ProcessAssertionError,
    SettleTimeoutError,
    WorkflowTestError,
)
from bpmn_testkit.testing import engine_session

__all__ = (
    "BpmnError",
    "CommandRejectedError",
    "DeploymentAssert",
    "DeploymentAssertionError",
    "DriverConfig",
    "JobActivationError",
    "ProcessAssertionError",
    "ProcessInstanceAssert",
    "SettleTimeoutError",
    "WorkflowTestDriver",
    "WorkflowTestError",
    "__project__",
    "__version__",
    "engine_session",
)
