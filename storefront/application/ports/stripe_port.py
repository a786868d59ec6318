from __future__ import annotations

from typing import Protocol

from storefront.application.dto.billing import StripeCheckoutSessionRequest
from storefront.domain.entities.checkout_session import CheckoutSession
from storefront.domain.entities.customer import RemoteCustomer
from storefront.domain.entities.webhook_event import WebhookEvent


class StripePort(Protocol):
    def find_customer_by_email(self, *, email: str) -> RemoteCustomer | None:
        ...

    def create_customer(self, *, email: str, metadata: dict[str, str]) -> RemoteCustomer:
        ...

    def create_checkout_session(self, request: StripeCheckoutSessionRequest) -> CheckoutSession:
        ...

    def verify_webhook(self, *, signature: str, payload: bytes) -> WebhookEvent:
        ...
