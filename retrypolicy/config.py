"""Default settings for the retrypolicy command line tools."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Tuple


@dataclass
class Settings:
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    timeout: int = 10
    max_attempts: int = 5
    initial_delay_ms: int = 200
    max_delay_ms: int = 5000
    retry_status_codes: Tuple[int, ...] = (429, 500, 502, 503, 504)

    @classmethod
    def from_env(cls) -> "Settings":
        """Defaults overridden by ``RETRYPOLICY_*`` environment variables."""
        overrides = {}
        for field_name in ("max_attempts", "initial_delay_ms", "max_delay_ms", "timeout"):
            raw = os.getenv(f"RETRYPOLICY_{field_name.upper()}")
            if raw is None or not raw.strip():
                continue
            try:
                overrides[field_name] = int(raw)
            except ValueError as exc:
                raise ValueError(f"RETRYPOLICY_{field_name.upper()} must be an integer, got {raw!r}") from exc
        return replace(settings, **overrides)


settings = Settings()
