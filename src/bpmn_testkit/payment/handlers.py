"""Job handlers for the payment process."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bpmn_testkit.exceptions import BpmnError
from bpmn_testkit.jobs.base import BaseJobHandler
from bpmn_testkit.payment.services import CreditCardService, PaymentError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bpmn_testkit.core.models import ActivatedJob
    from bpmn_testkit.payment.services import CustomerService

__all__ = [
    "CREDIT_CARD_CHARGE_ERROR",
    "CreditCardChargingHandler",
    "CreditDeductionHandler",
]

logger = logging.getLogger(__name__)

CREDIT_CARD_CHARGE_ERROR = "creditCardChargeError"
"""BPMN error code thrown when a card cannot be charged."""


class CreditDeductionHandler(BaseJobHandler):
    """Deduct the order total from the customer's credit.

    Reads ``customerCredit`` and ``orderTotal`` and completes the job with the
    remaining ``openAmount``.
    """

    def __init__(self, customer_service: CustomerService) -> None:
        super().__init__("deduct customer credit")
        self.customer_service = customer_service

    async def execute(self, job: ActivatedJob) -> Mapping[str, Any]:
        customer_credit = float(job.variables["customerCredit"])
        order_total = float(job.variables["orderTotal"])
        open_amount = self.customer_service.deduct_credit(customer_credit, order_total)
        return {"openAmount": open_amount}


class CreditCardChargingHandler(BaseJobHandler):
    """Charge the open amount to the customer's credit card.

    Reads ``cardNumber``, ``cvc``, ``expiryDate`` and ``openAmount``. A card the
    service refuses resolves the job with the ``creditCardChargeError`` BPMN error.
    """

    def __init__(self, credit_card_service: CreditCardService | None = None) -> None:
        super().__init__("charge credit card")
        self.credit_card_service = credit_card_service or CreditCardService()

    async def execute(self, job: ActivatedJob) -> Mapping[str, Any]:
        try:
            self.credit_card_service.charge_amount(
                job.variables["cardNumber"],
                job.variables["cvc"],
                job.variables["expiryDate"],
                float(job.variables["openAmount"]),
            )
        except PaymentError as e:
            logger.info("Charging card for job %s failed: %s", job.key, e)
            raise BpmnError(CREDIT_CARD_CHARGE_ERROR, str(e)) from e
        return {}
