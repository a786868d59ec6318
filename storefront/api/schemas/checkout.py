from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


CHECKOUT_FAILED_MESSAGE = "Failed to create checkout session"
WEBHOOK_SIGNATURE_FAILED_MESSAGE = "Webhook signature verification failed"
WEBHOOK_FAILED_MESSAGE = "Webhook handler failed"


class CreateCheckoutSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price_id: str | None = Field(default=None, alias="priceId")
    customer_email: str | None = Field(default=None, alias="customerEmail")


class CreateCheckoutSessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")


class CheckoutConfigResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    publishable_key: str = Field(..., alias="publishableKey")


class StripeWebhookResponse(BaseModel):
    received: bool = True


class ErrorResponse(BaseModel):
    error: str
