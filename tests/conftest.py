"""Shared test fixtures for bpmn-testkit test suite."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING
from unittest.mock import create_autospec

import pytest
import pytest_asyncio

from bpmn_testkit.config import DriverConfig
from bpmn_testkit.payment.services import CreditCardService, CustomerService
from bpmn_testkit.testing import engine_session

from tests.support.engine import InMemoryEngine
from tests.support.processes import HARDWARE_REQUEST_RESOURCE, PAYMENT_RESOURCE, RESOURCES

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from unittest.mock import NonCallableMagicMock

    from bpmn_testkit.driver import WorkflowTestDriver


@pytest.fixture
def driver_config() -> DriverConfig:
    """Driver configuration with a short busy timeout.

    Returns:
        DriverConfig instance
    """
    return DriverConfig(busy_timeout=timedelta(milliseconds=200))


@pytest.fixture
def engine() -> InMemoryEngine:
    """Create a fresh, not yet started in-memory engine.

    Returns:
        InMemoryEngine instance knowing every test resource
    """
    return InMemoryEngine(RESOURCES)


@pytest_asyncio.fixture
async def driver(engine: InMemoryEngine, driver_config: DriverConfig) -> AsyncIterator[WorkflowTestDriver]:
    """Driver bound to a started engine without deployments.

    Args:
        engine: Engine fixture
        driver_config: Driver configuration fixture

    Yields:
        WorkflowTestDriver instance
    """
    async with engine_session(engine, driver_config) as session_driver:
        yield session_driver


@pytest_asyncio.fixture
async def hardware_driver(engine: InMemoryEngine, driver_config: DriverConfig) -> AsyncIterator[WorkflowTestDriver]:
    """Driver with the hardware request process deployed.

    Yields:
        WorkflowTestDriver instance
    """
    async with engine_session(
        engine, driver_config, (HARDWARE_REQUEST_RESOURCE, "HardwareRequestProcess")
    ) as session_driver:
        yield session_driver


@pytest_asyncio.fixture
async def payment_driver(engine: InMemoryEngine, driver_config: DriverConfig) -> AsyncIterator[WorkflowTestDriver]:
    """Driver with the payment process deployed.

    Yields:
        WorkflowTestDriver instance
    """
    async with engine_session(engine, driver_config, (PAYMENT_RESOURCE, "PaymentProcess")) as session_driver:
        yield session_driver


@pytest.fixture
def customer_service() -> NonCallableMagicMock:
    """Autospec mock of the customer service."""
    return create_autospec(CustomerService, instance=True)


@pytest.fixture
def credit_card_service() -> NonCallableMagicMock:
    """Autospec mock of the credit card service."""
    return create_autospec(CreditCardService, instance=True)


@pytest.fixture
def today() -> date:
    """Fixed reference date for card expiry checks."""
    return date(2024, 6, 15)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers.

    Args:
        config: Pytest configuration object
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Tests that take more than 1 second")
