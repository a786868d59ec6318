from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.routers import checkout, webhook
from storefront.shared.config import get_settings
from storefront.shared.logging_config import configure_logging


settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Storefront API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(checkout.router)
app.include_router(webhook.router)
