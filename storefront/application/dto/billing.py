from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CreateCheckoutSessionInput:
    price_id: str | None
    customer_email: str | None
    origin: str


@dataclass(frozen=True)
class CreateCheckoutSessionOutput:
    session_id: str


@dataclass(frozen=True)
class StripeCheckoutSessionRequest:
    price_id: str | None
    success_url: str
    cancel_url: str
    customer_id: str | None
    metadata: dict[str, str]


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str | None
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_id: str
    event_type: str
    handled: bool
