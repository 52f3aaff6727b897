"""Base job handler implementation for bpmn-testkit."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from bpmn_testkit.exceptions import BpmnError

if TYPE_CHECKING:
    from bpmn_testkit.core.models import ActivatedJob
    from bpmn_testkit.core.protocols import EngineClient

__all__ = ["BaseJobHandler"]

logger = logging.getLogger(__name__)


class BaseJobHandler:
    """Base implementation of the :class:`~bpmn_testkit.core.protocols.JobHandler` protocol.

    Subclasses override :meth:`execute` to compute the job's output variables.
    :meth:`handle` then completes the job with them, or throws the error code when
    ``execute`` raises :class:`~bpmn_testkit.exceptions.BpmnError`. Any other
    exception propagates to the caller untouched.
    """

    description: str = ""
    """Human-readable description of what the handler does."""

    def __init__(self, description: str = "") -> None:
        """Initialize the base handler.

        Args:
            description: Human-readable description.
        """
        self.description = description

    async def execute(self, job: ActivatedJob) -> Mapping[str, Any] | None:
        """Compute the output variables for ``job``.

        Override this method to implement handler logic.

        Args:
            job: The activated job.

        Returns:
            Variables to merge into the instance scope, or None for none.

        Raises:
            BpmnError: To resolve the job with a BPMN error code instead.
            NotImplementedError: Must be implemented by subclasses.
        """
        msg = f"{type(self).__name__} must implement execute()"
        raise NotImplementedError(msg)

    async def handle(self, client: EngineClient, job: ActivatedJob) -> None:
        """Resolve ``job`` through ``client``.

        Args:
            client: Command channel of the engine that emitted the job.
            job: The activated job.

        Raises:
            TypeError: If :meth:`execute` returned something other than a mapping or None.
        """
        try:
            variables = await self.execute(job)
        except BpmnError as e:
            logger.debug("Job %s (%s) resolved with error code %r", job.key, job.type, e.error_code)
            await client.throw_error(job.key, e.error_code, e.error_message)
            return

        if variables is not None and not isinstance(variables, Mapping):
            msg = f"{self!r} returned {type(variables).__name__} for job {job.key}; expected a mapping or None"
            raise TypeError(msg)

        await client.complete_job(job.key, dict(variables or {}))
        logger.debug("Job %s (%s) completed", job.key, job.type)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r})"
