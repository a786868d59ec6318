from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from storefront.api.deps import get_process_stripe_webhook_use_case
from storefront.api.schemas.checkout import (
    WEBHOOK_FAILED_MESSAGE,
    WEBHOOK_SIGNATURE_FAILED_MESSAGE,
    ErrorResponse,
    StripeWebhookResponse,
)
from storefront.application.dto.billing import StripeWebhookInput
from storefront.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from storefront.domain.exceptions import WebhookSignatureError


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/api/checkout/webhook",
    response_model=StripeWebhookResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(None, alias="stripe-signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
):
    try:
        payload = await request.body()
        output = await run_in_threadpool(
            use_case.execute,
            StripeWebhookInput(signature=stripe_signature, payload=payload),
        )
    except WebhookSignatureError as exc:
        logger.warning("webhook_router: signature_rejected detail=%s", exc)
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=WEBHOOK_SIGNATURE_FAILED_MESSAGE).model_dump(),
        )
    except Exception:
        logger.exception("webhook_router: handler_failed")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=WEBHOOK_FAILED_MESSAGE).model_dump(),
        )

    logger.info(
        "webhook_router: acknowledged event_id=%s event_type=%s handled=%s",
        output.event_id,
        output.event_type,
        output.handled,
    )
    return StripeWebhookResponse(received=True)
