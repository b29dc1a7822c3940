"""Payment records, the status state machine, refunds and Razorpay flows."""

from __future__ import annotations

import hashlib
import hmac
import json
from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from app.application.use_cases.fees import create_fee
from app.application.use_cases.payments import transition_payment
from app.application.use_cases.payments.refunds import issue_gateway_refund
from app.config import Settings
from app.infrastructure.database import SessionLocal
from app.infrastructure.payment_gateway import PaymentGatewayError, RazorpayGateway
from app.infrastructure.repositories import FeeRepository, PaymentRepository, RefundRepository

KEY_SECRET = "rzp-secret"
WEBHOOK_SECRET = "whsec-test"


class FakeRazorpayClient:
    """Records calls made through the SDK surface used by the gateway."""

    def __init__(self) -> None:
        self.orders: list[dict] = []
        self.refunds: list[tuple[str, dict]] = []
        self.order = SimpleNamespace(create=self._create_order, fetch=lambda order_id: {"id": order_id})
        self.payment = SimpleNamespace(
            fetch=lambda payment_id: {"id": payment_id, "status": "captured"},
            refund=self._refund,
        )
        self.refund = SimpleNamespace(
            fetch=lambda refund_id: {
                "id": refund_id,
                "status": "processed",
                "amount": 10000,
                "payment_id": "pay_1",
            }
        )
        self.payment_link = SimpleNamespace(
            create=lambda data: {"id": "plink_1", "short_url": "https://rzp.io/i/abc"}
        )

    def _create_order(self, data):
        self.orders.append(data)
        return {"id": f"order_{len(self.orders)}", "amount": data["amount"], "currency": data["currency"]}

    def _refund(self, payment_id, data):
        self.refunds.append((payment_id, data))
        return {"id": "rfnd_1", "amount": data["amount"], "status": "processed"}


@pytest.fixture()
def razorpay(app) -> FakeRazorpayClient:
    client = FakeRazorpayClient()
    settings = Settings(
        razorpay_key_id="rzp_test_key",
        razorpay_key_secret=KEY_SECRET,
        razorpay_webhook_secret=WEBHOOK_SECRET,
    )
    app.state.payment_gateway = RazorpayGateway(settings, client=client)
    return client


@pytest.fixture()
def fee_id(db, accounts) -> int:
    fee = create_fee(
        db,
        student_id=accounts.student.id,
        academic_year="2024-25",
        semester=1,
        total_amount=1000.0,
        due_date=date.today() + timedelta(days=30),
    )
    return fee.id


def _fee(fee_id: int):
    with SessionLocal() as session:
        return FeeRepository(session).get(fee_id)


def _offline_payment(client, headers, fee_id: int, amount: float = 400.0) -> dict:
    response = client.post(
        "/api/payments/payments",
        json={"type": "fee", "amount": amount, "referenceId": str(fee_id), "method": "cash"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def _set_status(client, headers, payment_id: int, status: str):
    return client.put(
        f"/api/payments/payments/{payment_id}/status", json={"status": status}, headers=headers
    )


def test_offline_payment_starts_pending(client, fee_id, student_headers) -> None:
    payment = _offline_payment(client, student_headers, fee_id)

    assert payment["status"] == "pending"
    assert payment["type"] == "fee"


def test_completion_credits_fee_exactly_once(client, fee_id, student_headers, admin_headers) -> None:
    payment = _offline_payment(client, student_headers, fee_id)

    first = _set_status(client, admin_headers, payment["id"], "completed")
    repeat = _set_status(client, admin_headers, payment["id"], "completed")

    assert first.status_code == repeat.status_code == 200
    assert first.json()["applied"] is True
    assert first.json()["previousStatus"] == "pending"
    assert repeat.json()["applied"] is False
    fee = _fee(fee_id)
    assert fee.paid_amount == 400.0
    assert fee.due_amount == 600.0
    assert fee.status == "partial"


def test_terminal_statuses_reject_transitions(client, fee_id, student_headers, admin_headers) -> None:
    payment = _offline_payment(client, student_headers, fee_id)
    assert _set_status(client, admin_headers, payment["id"], "failed").status_code == 200

    response = _set_status(client, admin_headers, payment["id"], "completed")

    assert response.status_code == 400
    assert _fee(fee_id).paid_amount == 0


def test_status_update_is_admin_only(client, fee_id, student_headers) -> None:
    payment = _offline_payment(client, student_headers, fee_id)

    assert _set_status(client, student_headers, payment["id"], "completed").status_code == 403


def test_students_see_only_their_payments(client, accounts, fee_id, student_headers) -> None:
    payment = _offline_payment(client, student_headers, fee_id)
    other = client.post(
        "/api/auth/login", json={"email": accounts.other_student.email, "password": "Secret123"}
    ).json()["token"]
    other_headers = {"Authorization": f"Bearer {other}"}

    assert client.get(f"/api/payments/payments/{payment['id']}", headers=other_headers).status_code == 404
    assert client.get("/api/payments/payments", headers=other_headers).json()["items"] == []


def test_fee_reference_must_belong_to_student(client, accounts, fee_id) -> None:
    other = client.post(
        "/api/auth/login", json={"email": accounts.other_student.email, "password": "Secret123"}
    ).json()["token"]

    response = client.post(
        "/api/payments/payments",
        json={"type": "fee", "amount": 10, "referenceId": str(fee_id)},
        headers={"Authorization": f"Bearer {other}"},
    )

    assert response.status_code == 400


def test_refund_requires_completed_payment(client, fee_id, student_headers, admin_headers) -> None:
    payment = _offline_payment(client, student_headers, fee_id)

    response = client.post(
        "/api/payments/refunds",
        json={"paymentId": payment["id"], "reason": "Duplicate"},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_refund_moves_payment_to_refunded(client, fee_id, student_headers, admin_headers) -> None:
    payment = _offline_payment(client, student_headers, fee_id)
    _set_status(client, admin_headers, payment["id"], "completed")

    too_much = client.post(
        "/api/payments/refunds",
        json={"paymentId": payment["id"], "reason": "Duplicate", "amount": 900},
        headers=admin_headers,
    )
    refunded = client.post(
        "/api/payments/refunds",
        json={"paymentId": payment["id"], "reason": "Duplicate", "amount": 150},
        headers=admin_headers,
    )
    again = client.post(
        "/api/payments/refunds",
        json={"paymentId": payment["id"], "reason": "Duplicate"},
        headers=admin_headers,
    )

    assert too_much.status_code == 400
    assert refunded.status_code == 201
    assert refunded.json()["payment"]["status"] == "refunded"
    assert refunded.json()["payment"]["refundAmount"] == 150
    assert refunded.json()["refund"]["status"] == "completed"
    assert again.status_code == 400


def test_checkout_order_and_verification(client, razorpay, fee_id, student_headers) -> None:
    order = client.post(
        "/api/payment-gateway/razorpay/order",
        json={"amount": 250.5, "type": "fee", "referenceId": str(fee_id)},
        headers=student_headers,
    )
    assert order.status_code == 201, order.text
    body = order.json()
    assert body["orderId"] == "order_1"
    assert body["key"] == "rzp_test_key"
    assert razorpay.orders[0]["amount"] == 25050

    signature = hmac.new(KEY_SECRET.encode(), b"order_1|pay_1", hashlib.sha256).hexdigest()
    bad = client.post(
        "/api/payment-gateway/razorpay/verify",
        json={"razorpayOrderId": "order_1", "razorpayPaymentId": "pay_1", "razorpaySignature": "x"},
        headers=student_headers,
    )
    good = client.post(
        "/api/payment-gateway/razorpay/verify",
        json={
            "razorpayOrderId": "order_1",
            "razorpayPaymentId": "pay_1",
            "razorpaySignature": signature,
        },
        headers=student_headers,
    )

    assert bad.status_code == 400
    assert good.status_code == 200
    assert good.json()["payment"]["status"] == "completed"
    assert good.json()["payment"]["gatewayPaymentId"] == "pay_1"
    assert _fee(fee_id).paid_amount == 250.5


def _webhook(client, payload: dict, secret: str = WEBHOOK_SECRET):
    body = json.dumps(payload).encode()
    signature = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return client.post(
        "/api/payment-gateway/razorpay/webhook",
        content=body,
        headers={"X-Razorpay-Signature": signature, "Content-Type": "application/json"},
    )


def test_webhook_rejects_bad_signature(client, razorpay) -> None:
    response = _webhook(client, {"event": "payment.captured", "payload": {}}, secret="wrong")

    assert response.status_code == 400


def test_webhook_acknowledges_unknown_events(client, razorpay) -> None:
    response = _webhook(client, {"event": "invoice.paid", "payload": {}})

    assert response.status_code == 200
    assert response.json()["handled"] is False


def test_webhook_and_verification_credit_fee_once(client, razorpay, fee_id, student_headers) -> None:
    client.post(
        "/api/payment-gateway/razorpay/order",
        json={"amount": 300, "type": "fee", "referenceId": str(fee_id)},
        headers=student_headers,
    )
    captured = {
        "event": "payment.captured",
        "payload": {"payment": {"entity": {"id": "pay_9", "order_id": "order_1"}}},
    }

    first = _webhook(client, captured)
    second = _webhook(client, captured)
    signature = hmac.new(KEY_SECRET.encode(), b"order_1|pay_9", hashlib.sha256).hexdigest()
    verified = client.post(
        "/api/payment-gateway/razorpay/verify",
        json={
            "razorpayOrderId": "order_1",
            "razorpayPaymentId": "pay_9",
            "razorpaySignature": signature,
        },
        headers=student_headers,
    )

    assert first.json()["handled"] is True
    assert second.status_code == 200
    assert verified.status_code == 200
    assert _fee(fee_id).paid_amount == 300


def test_webhook_refund_records_absolute_amount(client, razorpay, fee_id, student_headers) -> None:
    client.post(
        "/api/payment-gateway/razorpay/order",
        json={"amount": 500, "type": "fee", "referenceId": str(fee_id)},
        headers=student_headers,
    )
    _webhook(
        client,
        {
            "event": "payment.captured",
            "payload": {"payment": {"entity": {"id": "pay_5", "order_id": "order_1"}}},
        },
    )

    for amount in (10000, 25000):
        response = _webhook(
            client,
            {
                "event": "refund.processed",
                "payload": {
                    "refund": {
                        "entity": {
                            "id": "rfnd_7",
                            "payment_id": "pay_5",
                            "amount": amount,
                            "status": "processed",
                        }
                    }
                },
            },
        )
        assert response.status_code == 200

    payments = client.get("/api/payments/payments", headers=student_headers).json()["items"]
    assert payments[0]["status"] == "refunded"
    assert payments[0]["refundAmount"] == 250.0


def _gateway_payment(client, headers, fee_id: int, amount: float = 500) -> dict:
    client.post(
        "/api/payment-gateway/razorpay/order",
        json={"amount": amount, "type": "fee", "referenceId": str(fee_id)},
        headers=headers,
    )
    signature = hmac.new(KEY_SECRET.encode(), b"order_1|pay_1", hashlib.sha256).hexdigest()
    response = client.post(
        "/api/payment-gateway/razorpay/verify",
        json={
            "razorpayOrderId": "order_1",
            "razorpayPaymentId": "pay_1",
            "razorpaySignature": signature,
        },
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["payment"]


def test_gateway_refund_requires_gateway_payment_id(
    client, razorpay, fee_id, student_headers, admin_headers
) -> None:
    payment = _offline_payment(client, student_headers, fee_id)
    _set_status(client, admin_headers, payment["id"], "completed")

    response = client.post(
        "/api/payment-gateway/razorpay/refund",
        json={"paymentId": payment["id"]},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Payment has no gateway payment id"
    assert razorpay.refunds == []


def test_gateway_refund_and_status_lookup(
    client, razorpay, fee_id, student_headers, admin_headers
) -> None:
    payment = _gateway_payment(client, student_headers, fee_id)

    response = client.post(
        "/api/payment-gateway/razorpay/refund",
        json={"paymentId": payment["id"], "amount": 100, "reason": "Overpaid"},
        headers=admin_headers,
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["gatewayRefundId"] == "rfnd_1"
    assert body["refund"]["status"] == "completed"
    assert body["payment"]["status"] == "refunded"
    assert body["payment"]["refundAmount"] == 100
    assert razorpay.refunds[0][0] == "pay_1"
    assert razorpay.refunds[0][1]["amount"] == 10000

    lookup = client.get("/api/payment-gateway/razorpay/refund/rfnd_1/status", headers=admin_headers)
    assert lookup.status_code == 200
    assert lookup.json()["amount"] == 100.0
    assert lookup.json()["paymentId"] == "pay_1"
    assert lookup.json()["refund"]["gatewayRefundId"] == "rfnd_1"


def test_refund_in_flight_is_rejected(client, db, fee_id, student_headers, admin_headers) -> None:
    payment = _offline_payment(client, student_headers, fee_id)
    _set_status(client, admin_headers, payment["id"], "completed")
    assert PaymentRepository(db).claim_refund(payment["id"]) is True

    response = client.post(
        "/api/payments/refunds",
        json={"paymentId": payment["id"], "reason": "Duplicate"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Refund already in progress"


def test_refund_row_kept_when_webhook_refunds_first(
    client, db, razorpay, accounts, fee_id, student_headers
) -> None:
    payment = _gateway_payment(client, student_headers, fee_id)

    def refund_and_race_webhook(record, amount):
        with SessionLocal() as other:
            transition_payment(other, record.id, "refunded", refund_amount=amount)
        return {"id": "rfnd_race", "amount": 50000, "status": "processed"}

    saved, result, _ = issue_gateway_refund(
        db,
        payment_id=payment["id"],
        processed_by=accounts.admin.id,
        reason="Cancelled",
        amount=None,
        request_refund=refund_and_race_webhook,
    )

    assert result.applied is False
    with SessionLocal() as session:
        stored = RefundRepository(session).get_by_gateway_refund_id("rfnd_race")
        current = PaymentRepository(session).get(payment["id"])
    assert stored is not None
    assert stored.id == saved.id
    assert current.status == "refunded"
    assert current.refund_requested_at is not None


def test_gateway_failure_releases_refund_claim(
    client, db, razorpay, accounts, fee_id, student_headers
) -> None:
    payment = _gateway_payment(client, student_headers, fee_id)

    def failing_gateway(record, amount):
        raise PaymentGatewayError("Payment gateway request failed: timeout")

    with pytest.raises(PaymentGatewayError):
        issue_gateway_refund(
            db,
            payment_id=payment["id"],
            processed_by=accounts.admin.id,
            reason="Cancelled",
            amount=None,
            request_refund=failing_gateway,
        )

    with SessionLocal() as session:
        current = PaymentRepository(session).get(payment["id"])
    assert current.status == "completed"
    assert current.refund_requested_at is None


def test_payment_link_creates_pending_payment(client, razorpay, fee_id, student_headers) -> None:
    response = client.post(
        "/api/payment-gateway/razorpay/link",
        json={"amount": 200, "type": "fee", "referenceId": str(fee_id)},
        headers=student_headers,
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["id"] == "plink_1"
    assert body["shortUrl"] == "https://rzp.io/i/abc"
    assert body["payment"]["status"] == "pending"
    assert body["payment"]["gatewayOrderId"] == "plink_1"


def test_status_refresh_reconciles_paid_order(client, razorpay, fee_id, student_headers) -> None:
    order = client.post(
        "/api/payment-gateway/razorpay/order",
        json={"amount": 120, "type": "fee", "referenceId": str(fee_id)},
        headers=student_headers,
    ).json()
    payment_id = order["payment"]["id"]

    unchanged = client.get(
        f"/api/payment-gateway/razorpay/payment/{payment_id}/status", headers=student_headers
    )
    razorpay.order.fetch = lambda order_id: {"id": order_id, "status": "paid"}
    refreshed = client.get(
        f"/api/payment-gateway/razorpay/payment/{payment_id}/status", headers=student_headers
    )

    assert unchanged.json()["status"] == "pending"
    assert refreshed.status_code == 200
    assert refreshed.json()["status"] == "completed"
    assert _fee(fee_id).paid_amount == 120


def test_only_one_default_payment_method(client, accounts, student_headers) -> None:
    for label in ("Old card", "New card"):
        response = client.post(
            "/api/payments/methods",
            json={"type": "card", "label": label, "lastFour": "4242", "isDefault": True},
            headers=student_headers,
        )
        assert response.status_code == 201, response.text

    methods = client.get(
        f"/api/payments/student/{accounts.student.id}/methods", headers=student_headers
    ).json()

    assert [method["label"] for method in methods if method["isDefault"]] == ["New card"]
    assert len(methods) == 2


def test_gateway_configs_never_return_secrets(client, admin_headers) -> None:
    created = client.post(
        "/api/payments/gateways",
        json={
            "name": "Razorpay",
            "provider": "razorpay",
            "keyId": "rzp_live_key",
            "keySecret": "very-secret",
            "webhookSecret": "hook-secret",
        },
        headers=admin_headers,
    )
    listing = client.get("/api/payments/gateways", headers=admin_headers)

    assert created.status_code == 201, created.text
    assert created.json()["keyId"] == "rzp_live_key"
    for text in (created.text, listing.text):
        assert "very-secret" not in text
        assert "hook-secret" not in text
        assert "keySecret" not in text
