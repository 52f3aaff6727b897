"""Tests for test-scoped engine sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest

from bpmn_testkit.driver import WorkflowTestDriver
from bpmn_testkit.exceptions import DeploymentAssertionError
from bpmn_testkit.testing import engine_session

from tests.support.processes import HARDWARE_REQUEST_RESOURCE, PAYMENT_RESOURCE

if TYPE_CHECKING:
    from bpmn_testkit.config import DriverConfig

    from tests.support.engine import InMemoryEngine


@pytest.mark.unit
@pytest.mark.asyncio
class TestEngineSession:
    """Tests for engine_session."""

    async def test_engine_runs_inside_session(self, engine: InMemoryEngine) -> None:
        """Test the engine is started for the body and stopped afterwards."""
        async with engine_session(engine) as driver:
            assert isinstance(driver, WorkflowTestDriver)
            assert engine.is_running

        assert not engine.is_running

    async def test_engine_stopped_on_failure(self, engine: InMemoryEngine) -> None:
        """Test the engine is stopped when the body raises."""
        with pytest.raises(AssertionError):
            async with engine_session(engine) as driver:
                await driver.deploy(PAYMENT_RESOURCE)
                raise AssertionError("scenario failed")

        assert not engine.is_running

    async def test_resources_deployed(self, engine: InMemoryEngine, driver_config: DriverConfig) -> None:
        """Test resources passed to the session are deployed before the body runs."""
        async with engine_session(engine, driver_config, HARDWARE_REQUEST_RESOURCE, PAYMENT_RESOURCE) as driver:
            await driver.start_instance("HardwareRequestProcess", {"price": 500})
            await driver.start_instance("PaymentProcess", {"orderTotal": 10, "customerCredit": 20})

            assert driver.config is driver_config

    async def test_expected_process_ids_checked(self, engine: InMemoryEngine) -> None:
        """Test a resource paired with process ids fails the session when one is missing."""
        with pytest.raises(DeploymentAssertionError, match="HardwareRequestProcess"):
            async with engine_session(engine, None, (PAYMENT_RESOURCE, "HardwareRequestProcess")):
                pytest.fail("session body must not run")

        assert not engine.is_running

    async def test_paired_resource_deployed(self, engine: InMemoryEngine) -> None:
        """Test a resource paired with its process ids is deployed like a bare one."""
        async with engine_session(engine, None, (PAYMENT_RESOURCE, "PaymentProcess")) as driver:
            instance = await driver.start_instance("PaymentProcess", {"orderTotal": 10, "customerCredit": 20})

        assert instance.bpmn_process_id == "PaymentProcess"

    async def test_engine_stopped_when_deployment_fails(self, engine: InMemoryEngine) -> None:
        """Test a failing deployment still stops the engine."""
        from bpmn_testkit.exceptions import CommandRejectedError

        with pytest.raises(CommandRejectedError):
            async with engine_session(engine, None, "missing.bpmn"):
                pytest.fail("session body must not run")

        assert not engine.is_running

    async def test_pending_work_cancelled_on_stop(self, engine: InMemoryEngine, driver_config: DriverConfig) -> None:
        """Test stopping the engine discards processing that never settled."""
        driver_config.settle_after_commands = False

        async with engine_session(engine, driver_config, HARDWARE_REQUEST_RESOURCE) as driver:
            await driver.start_instance("HardwareRequestProcess", {"price": 500})

        assert not engine.is_running
        assert engine.open_jobs() == []

    async def test_protocol_engine(self) -> None:
        """Test any object matching the control protocol can back a session."""
        engine = MagicMock()
        engine.start = AsyncMock()
        engine.stop = AsyncMock()

        async with engine_session(engine) as driver:
            assert driver.engine is engine
            assert driver.client is engine.client

        engine.start.assert_awaited_once()
        engine.stop.assert_awaited_once()
