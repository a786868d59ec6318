from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str, default: str) -> list[str]:
    value = _env(name, default) or ""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    stripe_secret_key: str
    stripe_publishable_key: str
    stripe_webhook_secret: str
    stripe_webhook_tolerance_seconds: int
    public_origin: str
    customer_source: str
    session_source: str
    cors_origins: list[str]
    log_level: str


def get_settings() -> Settings:
    return Settings(
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_publishable_key=_env("STRIPE_PUBLISHABLE_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET", ""),
        stripe_webhook_tolerance_seconds=int(_env("STRIPE_WEBHOOK_TOLERANCE_SECONDS", "300")),
        public_origin=(_env("STOREFRONT_PUBLIC_ORIGIN", "") or "").rstrip("/"),
        customer_source=_env("STOREFRONT_CUSTOMER_SOURCE", "storefront_web"),
        session_source=_env("STOREFRONT_SESSION_SOURCE", "storefront_pricing_page"),
        cors_origins=_csv("STOREFRONT_CORS_ORIGINS", "*"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
