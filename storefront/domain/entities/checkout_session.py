from __future__ import annotations

from dataclasses import dataclass


SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    redirect_url: str | None


def build_success_url(origin: str) -> str:
    return f"{origin}/payment/success?session_id={SESSION_ID_PLACEHOLDER}"


def build_cancel_url(origin: str) -> str:
    return f"{origin}/payment/cancel"
