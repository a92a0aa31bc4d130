"""
Runtime settings for the KPU lookup.

Values are read from the environment (and a local .env file) every time
``KpuSettings.from_env()`` is called, so a token rotated in the environment is
picked up by the next lookup without a restart.
"""

from dataclasses import dataclass
from typing import Optional

from ceknik.coreutils.env import env_get, env_int

DEFAULT_API_URL = "https://cekdptonline.kpu.go.id/v2"
DEFAULT_SITE_URL = "https://cekdptonline.kpu.go.id"

DEFAULT_ATTEMPT_TIMEOUT_MS = 5_000
DEFAULT_HARD_TIMEOUT_MS = 6_000
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_CACHE_TTL_S = 300


@dataclass(frozen=True)
class KpuSettings:
    """Settings consumed by the lookup orchestrator and API client"""

    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    site_url: str = DEFAULT_SITE_URL
    attempt_timeout_ms: int = DEFAULT_ATTEMPT_TIMEOUT_MS
    hard_timeout_ms: int = DEFAULT_HARD_TIMEOUT_MS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    cache_ttl_s: int = DEFAULT_CACHE_TTL_S

    @classmethod
    def from_env(cls) -> "KpuSettings":
        token = (env_get("KPU_TOKEN") or "").strip() or None
        return cls(
            token=token,
            api_url=env_get("KPU_API_URL", DEFAULT_API_URL),
            site_url=env_get("KPU_SITE_URL", DEFAULT_SITE_URL),
            attempt_timeout_ms=max(
                500, env_int("KPU_ATTEMPT_TIMEOUT_MS", DEFAULT_ATTEMPT_TIMEOUT_MS)
            ),
            hard_timeout_ms=max(
                1_000, env_int("KPU_TIMEOUT_MS", DEFAULT_HARD_TIMEOUT_MS)
            ),
            max_attempts=max(1, env_int("KPU_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS)),
            cache_ttl_s=max(0, env_int("KPU_CACHE_TTL_S", DEFAULT_CACHE_TTL_S)),
        )

    @property
    def attempt_timeout(self) -> float:
        """Per-attempt socket timeout in seconds"""
        return self.attempt_timeout_ms / 1000

    @property
    def hard_timeout(self) -> float:
        """Whole-lookup deadline in seconds"""
        return self.hard_timeout_ms / 1000
