from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from storefront.api.deps import get_create_checkout_session_use_case
from storefront.api.schemas.checkout import (
    CHECKOUT_FAILED_MESSAGE,
    CheckoutConfigResponse,
    CreateCheckoutSessionRequest,
    CreateCheckoutSessionResponse,
    ErrorResponse,
)
from storefront.application.dto.billing import CreateCheckoutSessionInput
from storefront.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from storefront.domain.exceptions import BillingError
from storefront.shared.config import Settings, get_settings


router = APIRouter()
logger = logging.getLogger(__name__)


def _checkout_failed() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=CHECKOUT_FAILED_MESSAGE).model_dump(),
    )


def _resolve_origin(request: Request, settings: Settings) -> str:
    if settings.public_origin:
        return settings.public_origin
    return str(request.base_url).rstrip("/")


@router.post(
    "/api/checkout",
    response_model=CreateCheckoutSessionResponse,
    responses={500: {"model": ErrorResponse}},
)
async def create_checkout_session(
    request: Request,
    settings: Settings = Depends(get_settings),
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
):
    try:
        body = await request.json()
        req = CreateCheckoutSessionRequest.model_validate(body)
    except (ValueError, ValidationError) as exc:
        logger.warning("checkout_router: checkout_failed code=request_body detail=%s", exc)
        return _checkout_failed()

    try:
        output = await run_in_threadpool(
            use_case.execute,
            CreateCheckoutSessionInput(
                price_id=req.price_id,
                customer_email=req.customer_email or None,
                origin=_resolve_origin(request, settings),
            ),
        )
    except BillingError as exc:
        logger.error(
            "checkout_router: checkout_failed code=%s price_id=%s detail=%s cause=%r",
            exc.code,
            req.price_id,
            exc,
            exc.__cause__,
        )
        return _checkout_failed()
    except Exception:
        logger.exception("checkout_router: checkout_failed code=unexpected price_id=%s", req.price_id)
        return _checkout_failed()

    return CreateCheckoutSessionResponse(session_id=output.session_id)


@router.get(
    "/api/checkout/config",
    response_model=CheckoutConfigResponse,
    responses={500: {"model": ErrorResponse}},
)
def get_checkout_config(settings: Settings = Depends(get_settings)):
    if not settings.stripe_publishable_key:
        logger.error("checkout_router: config_failed code=missing_publishable_key")
        return _checkout_failed()
    return CheckoutConfigResponse(publishable_key=settings.stripe_publishable_key)
