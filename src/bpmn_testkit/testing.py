"""Test-scoped engine sessions.

Each test gets its own engine and client, started before the test body runs and
stopped afterwards whatever the outcome. Wrap :func:`engine_session` in a
function-scoped fixture:

Example:
    >>> @pytest_asyncio.fixture
    ... async def driver(engine: EngineControl) -> AsyncIterator[WorkflowTestDriver]:
    ...     resource = ("hardwarerequest.bpmn", "HardwareRequestProcess")
    ...     async with engine_session(engine, None, resource) as session_driver:
    ...         yield session_driver
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from bpmn_testkit.driver import WorkflowTestDriver

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from bpmn_testkit.config import DriverConfig
    from bpmn_testkit.core.protocols import EngineControl

__all__ = ["engine_session"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def engine_session(
    engine: EngineControl,
    config: DriverConfig | None = None,
    *resources: str | tuple[str, ...],
) -> AsyncIterator[WorkflowTestDriver]:
    """Start ``engine``, yield a driver bound to it, and always stop it.

    Args:
        engine: A fresh engine owned by the session.
        config: Driver configuration.
        *resources: Process resources to deploy before yielding. A tuple pairs the
            resource name with the process ids its deployment must contain.

    Yields:
        A driver bound to the started engine.

    Raises:
        DeploymentAssertionError: If a deployment lacks an expected process id.
    """
    await engine.start()
    logger.debug("Engine %r started", engine)
    try:
        driver = WorkflowTestDriver(engine, config=config)
        for resource in resources:
            if isinstance(resource, tuple):
                await driver.deploy(*resource)
            else:
                await driver.deploy(resource)
        yield driver
    finally:
        await engine.stop()
        logger.debug("Engine %r stopped", engine)
