from __future__ import annotations

import json
from datetime import datetime, timezone

import stripe

from storefront.application.dto.billing import StripeCheckoutSessionRequest
from storefront.application.ports.stripe_port import StripePort
from storefront.domain.entities.checkout_session import CheckoutSession
from storefront.domain.entities.customer import RemoteCustomer
from storefront.domain.entities.webhook_event import WebhookEvent
from storefront.domain.exceptions import BillingError, WebhookSignatureError


class StripeClient(StripePort):
    def __init__(self, *, secret_key: str, webhook_secret: str, webhook_tolerance_seconds: int = 300):
        stripe.api_key = secret_key
        self._webhook_secret = webhook_secret
        self._webhook_tolerance_seconds = webhook_tolerance_seconds

    def find_customer_by_email(self, *, email: str) -> RemoteCustomer | None:
        try:
            result = stripe.Customer.list(email=email, limit=1)
        except Exception as exc:  # pragma: no cover - external API
            raise BillingError("Failed to look up Stripe customer.", code="customer_lookup") from exc

        customers = list(getattr(result, "data", None) or [])
        if not customers:
            return None
        return _to_customer(customers[0])

    def create_customer(self, *, email: str, metadata: dict[str, str]) -> RemoteCustomer:
        try:
            customer = stripe.Customer.create(email=email, metadata=metadata)
        except Exception as exc:  # pragma: no cover - external API
            raise BillingError("Failed to create Stripe customer.", code="customer_create") from exc

        if not getattr(customer, "id", None):
            raise BillingError("Stripe customer id is missing.", code="customer_create")
        return _to_customer(customer)

    def create_checkout_session(self, request: StripeCheckoutSessionRequest) -> CheckoutSession:
        payload: dict = {
            "payment_method_types": ["card"],
            "line_items": [{"price": request.price_id, "quantity": 1}],
            "mode": "payment",
            "success_url": request.success_url,
            "cancel_url": request.cancel_url,
            "metadata": dict(request.metadata),
            "submit_type": "pay",
            "locale": "auto",
        }
        if request.customer_id:
            payload["customer"] = request.customer_id
            # Stripe only accepts customer_update alongside an existing customer.
            payload["customer_update"] = {"address": "auto", "name": "auto"}

        try:
            session = stripe.checkout.Session.create(**payload)
        except Exception as exc:  # pragma: no cover - external API
            raise BillingError("Failed to create Stripe checkout session.", code="session_create") from exc

        session_id = getattr(session, "id", None)
        if not session_id:
            raise BillingError("Stripe checkout session id is missing.", code="session_create")
        session_url = getattr(session, "url", None)
        return CheckoutSession(id=str(session_id), redirect_url=str(session_url) if session_url else None)

    def verify_webhook(self, *, signature: str, payload: bytes) -> WebhookEvent:
        if not self._webhook_secret:
            raise WebhookSignatureError("STRIPE_WEBHOOK_SECRET is not configured.")

        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body,
                signature,
                self._webhook_secret,
                self._webhook_tolerance_seconds,
            )
            raw = json.loads(body)
        except (stripe.SignatureVerificationError, ValueError) as exc:
            raise WebhookSignatureError("Invalid Stripe webhook signature.") from exc

        if not isinstance(raw, dict):
            raise WebhookSignatureError("Stripe webhook payload is not an object.")

        data = raw.get("data") or {}
        data_object = data.get("object") if isinstance(data, dict) else None
        return WebhookEvent(
            id=str(raw.get("id", "")),
            type=str(raw.get("type", "")),
            created_at=_to_datetime(raw.get("created")),
            payload=data_object if isinstance(data_object, dict) else {},
        )


def _to_customer(customer) -> RemoteCustomer:
    metadata = getattr(customer, "metadata", None) or {}
    if hasattr(metadata, "to_dict"):
        metadata = metadata.to_dict()
    return RemoteCustomer(
        id=str(customer.id),
        email=getattr(customer, "email", None),
        metadata={str(key): str(value) for key, value in dict(metadata).items()},
        created_at=_to_datetime(getattr(customer, "created", None)),
    )


def _to_datetime(value: int | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)
