"""Built-in job handler implementations for bpmn-testkit."""

from __future__ import annotations

from bpmn_testkit.jobs.base import BaseJobHandler
from bpmn_testkit.jobs.handlers import (
    CompleteJobHandler,
    DelegatingJobHandler,
    JobResolution,
    ThrowErrorHandler,
    as_job_handler,
)

__all__ = [
    "BaseJobHandler",
    "CompleteJobHandler",
    "DelegatingJobHandler",
    "JobResolution",
    "ThrowErrorHandler",
    "as_job_handler",
]
