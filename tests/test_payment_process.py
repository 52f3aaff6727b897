"""Scenario tests for the payment process."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest

from bpmn_testkit.payment import (
    CREDIT_CARD_CHARGE_ERROR,
    CreditCardChargingHandler,
    CreditCardService,
    CreditDeductionHandler,
    CustomerService,
)

if TYPE_CHECKING:
    from unittest.mock import NonCallableMagicMock

    from bpmn_testkit.driver import WorkflowTestDriver

PROCESS_ID = "PaymentProcess"

CARD = {"cardNumber": "1234567812345678", "cvc": "123"}


@pytest.mark.integration
@pytest.mark.asyncio
class TestPaymentProcess:
    """Walks the payment process through credit and card payment."""

    async def test_happy_path(
        self,
        payment_driver: WorkflowTestDriver,
        customer_service: NonCallableMagicMock,
    ) -> None:
        """Customer credit covers the whole order, so no card is charged."""
        customer_service.deduct_credit.return_value = 0.0
        instance = await payment_driver.start_instance(PROCESS_ID, {"orderTotal": 42, "customerCredit": 50})

        await payment_driver.complete_job("credit-deduction", 1, CreditDeductionHandler(customer_service))

        customer_service.deduct_credit.assert_called_once_with(50.0, 42.0)
        (await payment_driver.assert_that(instance)).has_variable_with_value(
            "openAmount", 0.0
        ).has_not_passed_element("Task_ChargeCreditCard").has_passed_element("EndEvent_PaymentCompleted").is_completed()

    async def test_partial_credit_needs_card(self, payment_driver: WorkflowTestDriver) -> None:
        """An order exceeding the credit waits for card data verification."""
        instance = await payment_driver.start_instance(PROCESS_ID, {"orderTotal": 42, "customerCredit": 30})

        await payment_driver.complete_job("credit-deduction", 1, CreditDeductionHandler(CustomerService()))

        (await payment_driver.assert_that(instance)).has_variable_with_value(
            "openAmount", 12.0
        ).is_waiting_at_elements("Task_VerifyCreditCardData")

    async def test_credit_card_path(
        self,
        payment_driver: WorkflowTestDriver,
        credit_card_service: NonCallableMagicMock,
    ) -> None:
        """An open amount is charged to the card after the data was verified."""
        instance = await payment_driver.start_instance_before(
            PROCESS_ID,
            {"openAmount": 50, **CARD, "expiryDate": "09/26"},
            "Gateway_CreditSufficient",
        )
        (await payment_driver.assert_that(instance)).is_waiting_at_elements("Task_VerifyCreditCardData")

        await payment_driver.complete_user_task(1)
        await payment_driver.complete_job("credit-card-charging", 1, CreditCardChargingHandler(credit_card_service))

        credit_card_service.charge_amount.assert_called_once_with("1234567812345678", "123", "09/26", 50.0)
        (await payment_driver.assert_that(instance)).has_passed_element("Task_ChargeCreditCard").has_passed_element(
            "EndEvent_PaymentCompleted"
        ).is_completed()

    async def test_expired_card(self, payment_driver: WorkflowTestDriver, today: date) -> None:
        """An expired card ends the payment through the charge error path."""
        instance = await payment_driver.start_instance_before(
            PROCESS_ID,
            {"openAmount": 50, **CARD, "expiryDate": "01/20"},
            "Task_ChargeCreditCard",
        )

        await payment_driver.complete_job(
            "credit-card-charging",
            1,
            CreditCardChargingHandler(CreditCardService(today=today)),
        )

        (await payment_driver.assert_that(instance)).has_passed_element(
            "BoundaryEvent_ChargingFailed"
        ).has_passed_element("EndEvent_PaymentFailed").has_not_passed_element(
            "EndEvent_PaymentCompleted"
        ).has_no_incidents().is_completed()

    async def test_charge_error_thrown_directly(self, payment_driver: WorkflowTestDriver) -> None:
        """Throwing the charge error code takes the same failure path."""
        instance = await payment_driver.start_instance_before(PROCESS_ID, {}, "Task_ChargeCreditCard")

        await payment_driver.complete_job_with_error("credit-card-charging", 1, CREDIT_CARD_CHARGE_ERROR)

        (await payment_driver.assert_that(instance)).has_passed_element("EndEvent_PaymentFailed").is_completed()
