"""Paystack implementation of the PaymentGateway port.

Every call is a single attempt bounded by ``timeout``.  Network errors,
HTTP error statuses and responses missing the expected fields are all
raised as ``GatewayError``.
"""

from __future__ import annotations

import logging

import requests

from chatorder.domain.exceptions import GatewayError
from chatorder.domain.gateway.payment_gateway import (
    PaymentGateway,
    TransactionInit,
    TransactionStatus,
)

logger = logging.getLogger(__name__)


class PaystackGateway(PaymentGateway):

    def __init__(
        self,
        secret_key: str,
        base_url: str = "https://api.paystack.co",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http = session or requests.Session()
        self._http.headers.update({"Authorization": f"Bearer {secret_key}"})

    # --- PaymentGateway interface ---------------------------------------------

    def initialize_transaction(
        self,
        amount_minor_units: int,
        customer_ref: str,
        reference: str,
        callback_url: str,
    ) -> TransactionInit:
        data = self._request(
            "POST",
            "/transaction/initialize",
            json={
                "amount": amount_minor_units,
                "email": customer_ref,
                "reference": reference,
                "callback_url": callback_url,
            },
        )
        url = data.get("authorization_url")
        if not url:
            raise GatewayError("Gateway response has no authorization_url")
        return TransactionInit(
            authorization_url=url,
            reference=data.get("reference") or reference,
            access_code=data.get("access_code"),
        )

    def verify_transaction(self, reference: str) -> TransactionStatus:
        data = self._request("GET", f"/transaction/verify/{reference}")
        status = data.get("status")
        if not status:
            raise GatewayError("Gateway response has no transaction status")
        return TransactionStatus(
            status=status,
            reference=data.get("reference") or reference,
            amount_minor_units=data.get("amount"),
            paid_at=data.get("paid_at"),
            currency=data.get("currency"),
        )

    # --- HTTP helpers ---------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self._base_url}{path}"
        try:
            response = self._http.request(method, url, timeout=self._timeout, **kwargs)
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout as exc:
            raise GatewayError(f"Gateway timed out after {self._timeout}s") from exc
        except requests.RequestException as exc:
            raise GatewayError(f"Gateway request failed: {exc}") from exc
        except ValueError as exc:
            raise GatewayError("Gateway returned a non-JSON response") from exc

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise GatewayError("Gateway response has no data object")
        logger.debug("%s %s -> %s", method, path, response.status_code)
        return data
