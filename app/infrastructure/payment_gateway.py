"""Razorpay client wrapper used by the payment gateway use cases."""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any

import razorpay

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)


class PaymentGatewayConfigurationError(RuntimeError):
    """Raised when the gateway credentials are not configured."""


class PaymentGatewayError(RuntimeError):
    """Raised when the gateway rejects or fails a request."""


def to_subunits(amount: float) -> int:
    """Convert rupees to paise."""

    return int(round(float(amount) * 100))


def from_subunits(amount: int | float | None) -> float:
    return round(float(amount or 0) / 100, 2)


def _sign(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


class RazorpayGateway:
    """Thin wrapper around :class:`razorpay.Client` with signature helpers."""

    name = "razorpay"

    def __init__(self, settings: Settings | None = None, client: Any | None = None) -> None:
        settings = settings or get_settings()
        self._key_id = settings.razorpay_key_id
        self._key_secret = settings.razorpay_key_secret
        self._webhook_secret = settings.razorpay_webhook_secret
        self._client = client

    @property
    def key_id(self) -> str | None:
        return self._key_id

    @property
    def client(self) -> Any:
        if self._client is None:
            if not (self._key_id and self._key_secret):
                raise PaymentGatewayConfigurationError("Razorpay credentials are not configured")
            self._client = razorpay.Client(auth=(self._key_id, self._key_secret))
        return self._client

    def create_order(
        self,
        *,
        amount: float,
        currency: str,
        receipt: str,
        notes: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        data = {
            "amount": to_subunits(amount),
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
            "payment_capture": 1,
        }
        return self._call("order.create", lambda: self.client.order.create(data=data))

    def fetch_order(self, order_id: str) -> dict[str, Any]:
        return self._call("order.fetch", lambda: self.client.order.fetch(order_id))

    def fetch_payment(self, payment_id: str) -> dict[str, Any]:
        return self._call("payment.fetch", lambda: self.client.payment.fetch(payment_id))

    def refund_payment(
        self, payment_id: str, *, amount: float, notes: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        data = {"amount": to_subunits(amount), "notes": notes or {}}
        return self._call(
            "payment.refund", lambda: self.client.payment.refund(payment_id, data)
        )

    def fetch_refund(self, refund_id: str) -> dict[str, Any]:
        return self._call("refund.fetch", lambda: self.client.refund.fetch(refund_id))

    def create_payment_link(
        self,
        *,
        amount: float,
        currency: str,
        description: str,
        customer: dict[str, Any],
        reference_id: str,
        notes: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        data = {
            "amount": to_subunits(amount),
            "currency": currency,
            "description": description,
            "customer": customer,
            "reference_id": reference_id,
            "notify": {"sms": bool(customer.get("contact")), "email": bool(customer.get("email"))},
            "notes": notes or {},
        }
        return self._call(
            "payment_link.create", lambda: self.client.payment_link.create(data=data)
        )

    def verify_payment_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        """Check the checkout signature: HMAC-SHA256 of ``order_id|payment_id``."""

        if not self._key_secret:
            raise PaymentGatewayConfigurationError("Razorpay credentials are not configured")
        expected = _sign(self._key_secret, f"{order_id}|{payment_id}".encode())
        return hmac.compare_digest(expected, signature or "")

    def verify_webhook_signature(self, body: bytes, signature: str | None) -> bool:
        """Check ``X-Razorpay-Signature`` against the raw request body."""

        if not self._webhook_secret:
            raise PaymentGatewayConfigurationError("Razorpay webhook secret is not configured")
        if not signature:
            return False
        expected = _sign(self._webhook_secret, body)
        return hmac.compare_digest(expected, signature)

    @staticmethod
    def _call(operation: str, request) -> dict[str, Any]:
        try:
            return request()
        except PaymentGatewayConfigurationError:
            raise
        except Exception as exc:
            logger.error("Razorpay %s failed: %s", operation, exc)
            raise PaymentGatewayError(f"Payment gateway request failed: {exc}") from exc


__all__ = [
    "PaymentGatewayConfigurationError",
    "PaymentGatewayError",
    "RazorpayGateway",
    "from_subunits",
    "to_subunits",
]
