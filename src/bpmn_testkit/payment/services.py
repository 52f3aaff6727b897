"""Payment services invoked by the payment process' job handlers.

These stand in for the real customer and card-processing backends. They carry
just enough behaviour for handlers to be exercised end to end; tests usually
replace them with ``unittest.mock.create_autospec`` substitutes to script return
values.
"""

from __future__ import annotations

import logging
import re
from datetime import date

__all__ = [
    "CreditCardExpiredError",
    "CreditCardService",
    "CustomerService",
    "InvalidCreditCardError",
    "PaymentError",
]

logger = logging.getLogger(__name__)

_EXPIRY_PATTERN = re.compile(r"^(?P<month>0[1-9]|1[0-2])/(?P<year>\d{2})$")


class PaymentError(Exception):
    """Base exception for payment service failures."""


class InvalidCreditCardError(PaymentError):
    """Raised when card data is malformed."""


class CreditCardExpiredError(PaymentError):
    """Raised when the card's expiry date lies in the past.

    Attributes:
        expiry_date: The rejected ``MM/YY`` expiry date.
    """

    def __init__(self, expiry_date: str) -> None:
        self.expiry_date = expiry_date
        super().__init__(f"Credit card expired on {expiry_date}")


class CustomerService:
    """Customer account operations."""

    def deduct_credit(self, customer_credit: float, amount: float) -> float:
        """Deduct ``amount`` from the customer's credit.

        Args:
            customer_credit: Credit available on the customer account.
            amount: Amount to pay.

        Returns:
            The amount left open after using up the credit, 0.0 when the credit
            covers everything.
        """
        open_amount = max(amount - customer_credit, 0.0)
        logger.info("Deducted %.2f credit, %.2f left open", min(customer_credit, amount), open_amount)
        return open_amount


class CreditCardService:
    """Credit card charging."""

    def __init__(self, today: date | None = None) -> None:
        """Initialize the service.

        Args:
            today: Reference date for expiry checks; defaults to the current date.
        """
        self._today = today

    def charge_amount(self, card_number: str, cvc: str, expiry_date: str, amount: float) -> None:
        """Charge ``amount`` to a card.

        Args:
            card_number: The card number.
            cvc: The card verification code.
            expiry_date: Expiry date formatted ``MM/YY``.
            amount: Amount to charge.

        Raises:
            InvalidCreditCardError: If the card data is malformed.
            CreditCardExpiredError: If the card expired before the current month.
        """
        if not card_number or not cvc:
            msg = "Card number and CVC are required"
            raise InvalidCreditCardError(msg)

        match = _EXPIRY_PATTERN.match(expiry_date or "")
        if match is None:
            msg = f"Expiry date {expiry_date!r} is not formatted MM/YY"
            raise InvalidCreditCardError(msg)

        today = self._today or date.today()
        expiry = (2000 + int(match["year"]), int(match["month"]))
        if expiry < (today.year, today.month):
            raise CreditCardExpiredError(expiry_date)

        logger.info("Charging %.2f to card ending in %s (expires %s)", amount, card_number[-4:], expiry_date)
