"""Port for the external payment gateway.

The gateway is the source of truth for whether money actually moved.
Implementations raise ``GatewayError`` for any transport failure or
unexpected response; they never retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

SUCCESS = "success"


@dataclass(frozen=True)
class TransactionInit:
    authorization_url: str
    reference: str
    access_code: str | None = None


@dataclass(frozen=True)
class TransactionStatus:
    status: str
    reference: str
    amount_minor_units: int | None = None
    paid_at: str | None = None
    currency: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS


class PaymentGateway(ABC):

    @abstractmethod
    def initialize_transaction(
        self,
        amount_minor_units: int,
        customer_ref: str,
        reference: str,
        callback_url: str,
    ) -> TransactionInit:
        """Open a transaction and return the URL the customer pays at."""

    @abstractmethod
    def verify_transaction(self, reference: str) -> TransactionStatus:
        """Ask the gateway what happened to the transaction *reference*."""
