"""Payment domain services and the job handlers that call them."""

from __future__ import annotations

from bpmn_testkit.payment.handlers import CREDIT_CARD_CHARGE_ERROR, CreditCardChargingHandler, CreditDeductionHandler
from bpmn_testkit.payment.services import (
    CreditCardExpiredError,
    CreditCardService,
    CustomerService,
    InvalidCreditCardError,
    PaymentError,
)

__all__ = [
    "CREDIT_CARD_CHARGE_ERROR",
    "CreditCardChargingHandler",
    "CreditCardExpiredError",
    "CreditCardService",
    "CreditDeductionHandler",
    "CustomerService",
    "InvalidCreditCardError",
    "PaymentError",
]
