from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

from storefront.application.dto.billing import StripeWebhookInput, StripeWebhookOutput
from storefront.application.ports.notification_sink_port import NotificationSinkPort
from storefront.application.ports.stripe_port import StripePort
from storefront.domain.entities.webhook_event import WebhookEvent
from storefront.domain.exceptions import WebhookSignatureError

from .common import isoformat_utc


EventSummary = Callable[[dict], tuple[str, dict[str, Any]]]


def _checkout_session_completed(obj: dict) -> tuple[str, dict[str, Any]]:
    return "payment_successful", {
        "session_id": obj.get("id"),
        "customer_id": obj.get("customer"),
        "amount": obj.get("amount_total"),
        "status": obj.get("payment_status"),
    }


def _invoice_payment_succeeded(obj: dict) -> tuple[str, dict[str, Any]]:
    return "recurring_payment_successful", {
        "invoice_id": obj.get("id"),
        "customer_id": obj.get("customer"),
        "amount": obj.get("amount_paid"),
        "status": obj.get("status"),
    }


def _invoice_payment_failed(obj: dict) -> tuple[str, dict[str, Any]]:
    return "payment_failed", {
        "invoice_id": obj.get("id"),
        "customer_id": obj.get("customer"),
        "amount": obj.get("amount_due"),
        "status": obj.get("status"),
    }


def _subscription_updated(obj: dict) -> tuple[str, dict[str, Any]]:
    period_end = obj.get("current_period_end")
    return "subscription_updated", {
        "subscription_id": obj.get("id"),
        "customer_id": obj.get("customer"),
        "status": obj.get("status"),
        "current_period_end": _timestamp_to_iso(period_end),
    }


def _subscription_deleted(obj: dict) -> tuple[str, dict[str, Any]]:
    return "subscription_cancelled", {
        "subscription_id": obj.get("id"),
        "customer_id": obj.get("customer"),
        "status": obj.get("status"),
    }


EVENT_HANDLERS: dict[str, EventSummary] = {
    "checkout.session.completed": _checkout_session_completed,
    "invoice.payment_succeeded": _invoice_payment_succeeded,
    "invoice.payment_failed": _invoice_payment_failed,
    "customer.subscription.updated": _subscription_updated,
    "customer.subscription.deleted": _subscription_deleted,
}


def _timestamp_to_iso(value: Any) -> str | None:
    if value is None:
        return None
    return isoformat_utc(datetime.fromtimestamp(int(value), tz=timezone.utc))


class ProcessStripeWebhookUseCase:
    """Verifies a Stripe notification and dispatches it by event type.

    Handlers only summarise the event into the notification sink. Nothing is
    persisted, so an event that fails after verification is lost unless
    Stripe redelivers it.
    """

    def __init__(
        self,
        *,
        stripe_port: StripePort,
        notification_sink: NotificationSinkPort,
    ):
        self._stripe_port = stripe_port
        self._notification_sink = notification_sink

    def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        if not command.signature:
            raise WebhookSignatureError("Missing Stripe signature header.")
        if not command.payload:
            raise WebhookSignatureError("Missing webhook payload.")

        event = self._stripe_port.verify_webhook(signature=command.signature, payload=command.payload)
        handled = self._dispatch(event)

        self._notification_sink.record(
            kind="webhook_received",
            fields={
                "event_id": event.id,
                "event_type": event.type,
                "created_at": isoformat_utc(event.created_at) if event.created_at else None,
                "handled": handled,
            },
        )
        return StripeWebhookOutput(event_id=event.id, event_type=event.type, handled=handled)

    def _dispatch(self, event: WebhookEvent) -> bool:
        handler = EVENT_HANDLERS.get(event.type)
        if handler is None:
            self._notification_sink.record(
                kind="unhandled_event",
                fields={"event_id": event.id, "event_type": event.type},
            )
            return False

        kind, fields = handler(event.payload)
        self._notification_sink.record(kind=kind, fields={"event_id": event.id, **fields})
        return True
