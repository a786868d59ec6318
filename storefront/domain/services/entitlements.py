from __future__ import annotations

from dataclasses import asdict

from storefront.domain.entities.feature import FeatureLimits, Tier


BASIC_FEATURES = ("basic_chat", "basic_search", "file_upload")
PRO_FEATURES = (
    "premium_chat",
    "advanced_search",
    "unlimited_uploads",
    "priority_support",
    "billing_access",
)
ALL_FEATURES = BASIC_FEATURES + PRO_FEATURES

FREE_LIMITS = FeatureLimits(
    chat_messages=100,
    file_uploads=5,
    api_calls=1000,
    storage_gb=1,
    priority_support=False,
)
PRO_LIMITS = FeatureLimits(
    chat_messages=1000,
    file_uploads=100,
    api_calls=10000,
    storage_gb=50,
    priority_support=True,
)

# Only numeric limits take part in usage checks.
_COUNTED_LIMITS = ("chat_messages", "file_uploads", "api_calls", "storage_gb")


def get_tier(is_pro: bool) -> Tier:
    return "pro" if is_pro else "free"


def can_use(*, is_pro: bool, feature: str) -> bool:
    if not feature:
        return False
    if feature in BASIC_FEATURES:
        return True
    if feature in PRO_FEATURES:
        return is_pro
    return False


def get_feature_limits(*, is_pro: bool) -> FeatureLimits:
    return PRO_LIMITS if is_pro else FREE_LIMITS


def _limit_value(*, is_pro: bool, limit: str) -> int | None:
    if limit not in _COUNTED_LIMITS:
        return None
    return int(asdict(get_feature_limits(is_pro=is_pro))[limit])


def has_exceeded_limit(*, is_pro: bool, limit: str, current_usage: int) -> bool:
    value = _limit_value(is_pro=is_pro, limit=limit)
    if value is None:
        return False
    return current_usage >= value


def get_remaining_usage(*, is_pro: bool, limit: str, current_usage: int) -> int:
    value = _limit_value(is_pro=is_pro, limit=limit)
    if value is None:
        return 0
    return max(0, value - current_usage)


def get_available_features(*, is_pro: bool) -> list[str]:
    return [feature for feature in ALL_FEATURES if can_use(is_pro=is_pro, feature=feature)]
