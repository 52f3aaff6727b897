"""Exception hierarchy for bpmn-testkit."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import timedelta

__all__ = (
    "BpmnError",
    "CommandRejectedError",
    "DeploymentAssertionError",
    "JobActivationError",
    "ProcessAssertionError",
    "SettleTimeoutError",
    "WorkflowTestError",
)


class WorkflowTestError(Exception):
    """Base exception for all bpmn-testkit errors.

    Assertion-type failures additionally inherit from :class:`AssertionError` so
    that test runners report them as failed expectations rather than errors.
    """


class CommandRejectedError(WorkflowTestError):
    """Raised by an engine adapter when the engine refuses a command.

    Typical causes are a malformed process definition, an unknown process id,
    or resolving a job that is not activated.

    Attributes:
        command: Name of the refused command.
        reason: Why the engine refused it.
    """

    def __init__(self, command: str, reason: str) -> None:
        """Initialize the exception with command details.

        Args:
            command: Name of the refused command.
            reason: Why the engine refused it.
        """
        self.command = command
        self.reason = reason
        super().__init__(f"Command '{command}' rejected: {reason}")


class DeploymentAssertionError(WorkflowTestError, AssertionError):
    """Raised when a deployment does not contain the expected processes.

    Attributes:
        missing: Process ids that were expected but not deployed.
        deployed: Process ids the deployment actually contained.
    """

    def __init__(self, missing: list[str], deployed: list[str]) -> None:
        """Initialize the exception with deployment details.

        Args:
            missing: Process ids that were expected but not deployed.
            deployed: Process ids the deployment actually contained.
        """
        self.missing = missing
        self.deployed = deployed
        super().__init__(f"Expected processes {missing} to be deployed, but deployment contained {deployed}")


class JobActivationError(WorkflowTestError, AssertionError):
    """Raised when a single activation poll returns the wrong number of jobs.

    This is a test failure, never a retry trigger.

    Attributes:
        job_type: The job type that was polled.
        expected: Number of jobs the test asked for.
        actual: Number of jobs the engine handed out.
    """

    def __init__(self, job_type: str, expected: int, actual: int, message: str | None = None) -> None:
        """Initialize the exception with activation details.

        Args:
            job_type: The job type that was polled.
            expected: Number of jobs the test asked for.
            actual: Number of jobs the engine handed out.
            message: Optional headline replacing the default one.
        """
        self.job_type = job_type
        self.expected = expected
        self.actual = actual
        headline = message or f"No job activated for type '{job_type}'"
        super().__init__(f"{headline}: expected {expected} job(s), got {actual}")


class ProcessAssertionError(WorkflowTestError, AssertionError):
    """Raised when a process instance is not in the expected state.

    Attributes:
        process_instance_key: Key of the inspected instance.
        expected: Description of the expected state.
        actual: Description of the observed state.
    """

    def __init__(self, process_instance_key: int, description: str, expected: Any, actual: Any) -> None:
        """Initialize the exception with the expected and observed state.

        Args:
            process_instance_key: Key of the inspected instance.
            description: What was being checked.
            expected: The expected state.
            actual: The observed state.
        """
        self.process_instance_key = process_instance_key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Process instance [key: {process_instance_key}] {description}\n"
            f"  expected: {expected!r}\n"
            f"  actual:   {actual!r}"
        )


class SettleTimeoutError(WorkflowTestError, TimeoutError):
    """Raised when the engine does not reach a busy or idle state in time.

    Expiry means an expected transition, usually a timer, never happened.

    Attributes:
        state: The state that was awaited, ``"busy"`` or ``"idle"``.
        timeout: How long the wait lasted.
    """

    def __init__(self, state: str, timeout: timedelta) -> None:
        """Initialize the exception with wait details.

        Args:
            state: The state that was awaited.
            timeout: How long the wait lasted.
        """
        self.state = state
        self.timeout = timeout
        super().__init__(f"Engine did not reach {state} state within {timeout.total_seconds():g}s")


class BpmnError(WorkflowTestError):
    """Raised inside a job handler to resolve the job with a BPMN error code.

    The error is caught by the handler template and thrown at the engine, where
    it drives an error boundary or error end event. It is an intended outcome,
    not a failure of the test harness.

    Attributes:
        error_code: The BPMN error code to throw.
        error_message: Optional human-readable message.
    """

    def __init__(self, error_code: str, error_message: str = "") -> None:
        """Initialize the exception with the error code.

        Args:
            error_code: The BPMN error code to throw.
            error_message: Optional human-readable message.
        """
        self.error_code = error_code
        self.error_message = error_message
        msg = f"BPMN error '{error_code}'"
        if error_message:
            msg += f": {error_message}"
        super().__init__(msg)
