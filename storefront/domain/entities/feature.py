from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


Tier = Literal["free", "pro"]


@dataclass(frozen=True)
class FeatureLimits:
    chat_messages: int
    file_uploads: int
    api_calls: int
    storage_gb: int
    priority_support: bool
