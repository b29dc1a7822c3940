"""Use cases for payments, refunds and gateway reconciliation."""

from .checkout import (
    CheckoutLink,
    CheckoutOrder,
    create_order,
    create_payment_link,
    get_refund_status,
    refresh_payment_status,
    refund_payment,
    verify_payment,
)
from .gateways import create_gateway_config, list_gateway_configs, update_gateway_config
from .methods import (
    add_payment_method,
    list_student_methods,
    remove_payment_method,
    update_payment_method,
)
from .records import (
    create_payment,
    get_payment,
    get_payment_stats,
    list_payments,
    update_payment_status,
)
from .refunds import create_refund, list_refunds, update_refund_status
from .transitions import transition_payment
from .webhooks import WebhookOutcome, handle_webhook

__all__ = [
    "CheckoutLink",
    "CheckoutOrder",
    "WebhookOutcome",
    "add_payment_method",
    "create_gateway_config",
    "create_order",
    "create_payment",
    "create_payment_link",
    "create_refund",
    "get_payment",
    "get_payment_stats",
    "get_refund_status",
    "handle_webhook",
    "list_gateway_configs",
    "list_payments",
    "list_refunds",
    "list_student_methods",
    "refresh_payment_status",
    "refund_payment",
    "remove_payment_method",
    "transition_payment",
    "update_gateway_config",
    "update_payment_method",
    "update_payment_status",
    "verify_payment",
]
