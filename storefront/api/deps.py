from __future__ import annotations

from functools import lru_cache

from storefront.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from storefront.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from storefront.infrastructure.clients.stripe_client import StripeClient
from storefront.infrastructure.notifications.logging_sink import LoggingNotificationSink
from storefront.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_stripe_client() -> StripeClient:
    # Secrets are not checked here; a missing key fails the first call that needs it.
    settings = get_settings()
    return StripeClient(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        webhook_tolerance_seconds=settings.stripe_webhook_tolerance_seconds,
    )


@lru_cache(maxsize=1)
def _get_notification_sink() -> LoggingNotificationSink:
    return LoggingNotificationSink()


def get_create_checkout_session_use_case() -> CreateCheckoutSessionUseCase:
    settings = get_settings()
    return CreateCheckoutSessionUseCase(
        stripe_port=_get_stripe_client(),
        customer_source=settings.customer_source,
        session_source=settings.session_source,
    )


def get_process_stripe_webhook_use_case() -> ProcessStripeWebhookUseCase:
    return ProcessStripeWebhookUseCase(
        stripe_port=_get_stripe_client(),
        notification_sink=_get_notification_sink(),
    )
