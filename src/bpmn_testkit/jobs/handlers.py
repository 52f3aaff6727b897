"""Built-in job handler variants.

The driver resolves every activated job through a single capability, the
:class:`~bpmn_testkit.core.protocols.JobHandler` protocol. The variants below
cover the ways tests resolve jobs: completing with a fixed set of variables,
throwing a BPMN error code, and delegating to arbitrary code.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Union

from bpmn_testkit.core.protocols import JobHandler
from bpmn_testkit.exceptions import BpmnError
from bpmn_testkit.jobs.base import BaseJobHandler

if TYPE_CHECKING:
    from bpmn_testkit.core.models import ActivatedJob

__all__ = [
    "CompleteJobHandler",
    "DelegatingJobHandler",
    "JobResolution",
    "ThrowErrorHandler",
    "as_job_handler",
]

JobResolution = Union[Mapping[str, Any], JobHandler, Callable[..., Any], None]
"""Anything :func:`as_job_handler` accepts."""


class CompleteJobHandler(BaseJobHandler):
    """Complete every job with the same output variables.

    Example:
        >>> handler = CompleteJobHandler({"available": True})
    """

    def __init__(self, variables: Mapping[str, Any] | None = None, description: str = "") -> None:
        """Initialize the handler.

        Args:
            variables: Output variables for every job; None completes without variables.
            description: Human-readable description.
        """
        super().__init__(description or "complete with fixed variables")
        self.variables = dict(variables or {})

    async def execute(self, job: ActivatedJob) -> Mapping[str, Any]:
        return self.variables


class ThrowErrorHandler(BaseJobHandler):
    """Resolve every job with a BPMN error code.

    Example:
        >>> handler = ThrowErrorHandler("stolen")
    """

    def __init__(self, error_code: str, error_message: str = "", description: str = "") -> None:
        """Initialize the handler.

        Args:
            error_code: BPMN error code to throw.
            error_message: Optional message sent along with the code.
            description: Human-readable description.
        """
        super().__init__(description or f"throw error {error_code!r}")
        self.error_code = error_code
        self.error_message = error_message

    async def execute(self, job: ActivatedJob) -> Mapping[str, Any]:
        raise BpmnError(self.error_code, self.error_message)


class DelegatingJobHandler(BaseJobHandler):
    """Delegate the output computation to a callable.

    The callable receives the activated job and returns the output variables,
    either directly or as an awaitable. It may raise
    :class:`~bpmn_testkit.exceptions.BpmnError` to throw an error code.

    Example:
        >>> handler = DelegatingJobHandler(lambda job: {"total": job.get("price") * 2})
    """

    def __init__(
        self,
        func: Callable[[ActivatedJob], Any],
        description: str = "",
    ) -> None:
        """Initialize the handler.

        Args:
            func: Callable computing the output variables.
            description: Human-readable description.
        """
        super().__init__(description or getattr(func, "__name__", "delegate"))
        self.func = func

    async def execute(self, job: ActivatedJob) -> Mapping[str, Any] | None:
        result = self.func(job)
        if inspect.isawaitable(result):
            result = await result
        return result


def as_job_handler(resolution: JobResolution) -> JobHandler:
    """Turn whatever a test passed for resolving jobs into a handler.

    Args:
        resolution: A mapping of output variables (or None for no variables), a
            ready :class:`~bpmn_testkit.core.protocols.JobHandler`, or a callable
            computing the output variables from the job.

    Returns:
        The matching handler.

    Raises:
        TypeError: If ``resolution`` is a class or none of the above.

    Example:
        >>> as_job_handler({"approved": True})
        CompleteJobHandler('complete with fixed variables')
    """
    if resolution is None or isinstance(resolution, Mapping):
        return CompleteJobHandler(resolution)
    if isinstance(resolution, type):
        msg = f"Cannot resolve jobs with the class {resolution.__name__}; pass an instance"
        raise TypeError(msg)
    if isinstance(resolution, JobHandler):
        return resolution
    if callable(resolution):
        return DelegatingJobHandler(resolution)
    msg = f"Cannot resolve jobs with {type(resolution).__name__}; expected a mapping, a JobHandler or a callable"
    raise TypeError(msg)
