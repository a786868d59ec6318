from __future__ import annotations

import logging
from typing import Callable

from storefront.application.dto.billing import (
    CreateCheckoutSessionInput,
    CreateCheckoutSessionOutput,
    StripeCheckoutSessionRequest,
)
from storefront.application.ports.stripe_port import StripePort
from storefront.domain.entities.checkout_session import build_cancel_url, build_success_url
from storefront.domain.exceptions import BillingError

from .common import isoformat_utc, utcnow


logger = logging.getLogger(__name__)


class CreateCheckoutSessionUseCase:
    def __init__(
        self,
        *,
        stripe_port: StripePort,
        customer_source: str,
        session_source: str,
        clock: Callable = utcnow,
    ):
        self._stripe_port = stripe_port
        self._customer_source = customer_source
        self._session_source = session_source
        self._clock = clock

    def execute(self, command: CreateCheckoutSessionInput) -> CreateCheckoutSessionOutput:
        customer_id = None
        if command.customer_email:
            customer_id = self._resolve_customer_id(email=command.customer_email)

        metadata = {
            "source": self._session_source,
            "timestamp": isoformat_utc(self._clock()),
        }
        if command.customer_email:
            metadata["customer_email"] = command.customer_email

        # price_id is passed through as-is; the remote call rejects a missing one.
        session = self._stripe_port.create_checkout_session(
            StripeCheckoutSessionRequest(
                price_id=command.price_id,
                success_url=build_success_url(command.origin),
                cancel_url=build_cancel_url(command.origin),
                customer_id=customer_id,
                metadata=metadata,
            )
        )
        if not session.id:
            raise BillingError("Stripe checkout session id is missing.", code="session_create")

        logger.info(
            "create_checkout_session: session_created session_id=%s customer_id=%s",
            session.id,
            customer_id,
        )
        return CreateCheckoutSessionOutput(session_id=session.id)

    def _resolve_customer_id(self, *, email: str) -> str:
        existing = self._stripe_port.find_customer_by_email(email=email)
        if existing is not None:
            logger.info("create_checkout_session: customer_found customer_id=%s", existing.id)
            return existing.id

        created = self._stripe_port.create_customer(
            email=email,
            metadata={
                "source": self._customer_source,
                "created_at": isoformat_utc(self._clock()),
            },
        )
        logger.info("create_checkout_session: customer_created customer_id=%s", created.id)
        return created.id
