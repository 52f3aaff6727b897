"""Convergence waits.

Engine-side processing continues after a command is acknowledged, so reads are
only trustworthy once the engine reports quiescence. This module provides the
bounded poll-with-timeout primitive engine adapters build their busy and idle
waits on, and the settlement barrier the driver runs after every command.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from bpmn_testkit.exceptions import SettleTimeoutError

if TYPE_CHECKING:
    from collections.abc import Callable

    from bpmn_testkit.config import DriverConfig
    from bpmn_testkit.core.protocols import EngineControl

__all__ = ["DEFAULT_POLL_INTERVAL", "poll_until", "wait_for_idle", "wait_for_reaction"]

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = timedelta(milliseconds=10)


async def poll_until(
    condition: Callable[[], bool],
    *,
    timeout: timedelta,
    interval: timedelta = DEFAULT_POLL_INTERVAL,
    state: str = "expected",
) -> None:
    """Probe ``condition`` until it holds or ``timeout`` elapses.

    The condition is checked once before the first pause, so an already
    satisfied condition returns without yielding a full interval.

    Args:
        condition: Zero-argument probe.
        timeout: Upper bound for the whole wait.
        interval: Pause between two probes.
        state: Name of the awaited state, used in the timeout error.

    Raises:
        SettleTimeoutError: If the condition still fails after ``timeout``.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout.total_seconds()
    while not condition():
        if loop.time() >= deadline:
            raise SettleTimeoutError(state, timeout)
        await asyncio.sleep(interval.total_seconds())


async def wait_for_idle(engine: EngineControl, config: DriverConfig) -> None:
    """Settlement barrier: wait until the engine has no pending work.

    Raises:
        SettleTimeoutError: If the engine stays busy past ``config.idle_timeout``.
    """
    try:
        await engine.wait_for_idle_state(config.idle_timeout)
    except SettleTimeoutError:
        raise
    except (TimeoutError, asyncio.TimeoutError) as e:
        raise SettleTimeoutError("idle", config.idle_timeout) from e
    logger.debug("Engine settled")


async def wait_for_reaction(engine: EngineControl, config: DriverConfig) -> None:
    """Wait for the engine to start reacting, then for it to settle again.

    Used after moving the clock: the busy phase proves a timer fired, the idle
    phase that its consequences were fully processed.

    Raises:
        SettleTimeoutError: If either phase exceeds its configured timeout.
    """
    try:
        await engine.wait_for_busy_state(config.busy_timeout)
    except SettleTimeoutError:
        raise
    except (TimeoutError, asyncio.TimeoutError) as e:
        raise SettleTimeoutError("busy", config.busy_timeout) from e
    await wait_for_idle(engine, config)
