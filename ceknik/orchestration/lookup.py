"""
Lookup Orchestrator - the retry ladder around the KPU API client

One ``lookup()`` call walks this state machine:

    CacheCheck -> Attempt(0) -> Attempt(1) -> ... -> Terminal

Attempts are strictly sequential. A transient failure (429, 5xx, malformed
JSON, network error, per-attempt timeout) moves to the next rung after a
jittered delay. A refusal (403, 405, HTML block page) moves up once to the
ORIGIN_HEADERS tier and is final if that tier is refused too. Any other
failure is terminal and returned immediately. The whole ladder runs in a
worker thread bounded by a hard deadline; when the deadline passes the caller
gets a timeout at once, wherever the ladder was, and the worker stops at its
next cancel check.
"""

import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Optional, Tuple
import logging

from ceknik.coreutils.config import KpuSettings
from ceknik.coreutils.logging import mask_nik
from ceknik.extract.cache import TTLCache
from ceknik.extract.errors import (
    AttemptTimeoutError,
    ConfigurationError,
    FailureKind,
    KpuLookupError,
    is_blocking,
    is_cacheable,
    is_retryable,
)
from ceknik.extract.headers import AttemptTier, build_headers
from ceknik.extract.kpu_api import KpuApiClient
from ceknik.extract.ladder import build_ladder
from ceknik.transformation.normalizer import normalize_record
from ceknik.transformation.schemas import LookupResult

logger = logging.getLogger(__name__)

TOP_TIER = max(AttemptTier)

ClientFactory = Callable[[KpuSettings], KpuApiClient]


def default_client_factory(settings: KpuSettings) -> KpuApiClient:
    return KpuApiClient(token=settings.token, api_url=settings.api_url)


def interruptible_wait(cancel: threading.Event, seconds: float) -> bool:
    """Sleep for ``seconds`` unless cancelled first; True means cancelled"""
    return cancel.wait(seconds)


class LookupOrchestrator:
    """Drives cache, attempt ladder and deadline for NIK lookups"""

    def __init__(
        self,
        settings: Optional[KpuSettings] = None,
        cache: Optional[TTLCache] = None,
        client_factory: ClientFactory = default_client_factory,
        wait: Callable[[threading.Event, float], bool] = interruptible_wait,
        rand: Callable[[], float] = random.random,
    ):
        """
        Initialize the orchestrator

        Args:
            settings: Fixed settings; if omitted they are read from the
                environment on every lookup
            cache: Shared result cache (one per process)
            client_factory: Builds the API client used for one lookup
            wait: Inter-attempt delay, interruptible by the cancel event
            rand: Jitter source in [0, 1)
        """
        self._settings = settings
        if cache is None:
            ttl = (settings or KpuSettings.from_env()).cache_ttl_s
            cache = TTLCache(ttl_seconds=ttl)
        self.cache = cache
        self._client_factory = client_factory
        self._wait = wait
        self._rand = rand

    def lookup(self, nik: str) -> LookupResult:
        """
        Look up the voter-roll record for a NIK

        Args:
            nik: 16-digit NIK, already validated by the caller

        Returns:
            LookupResult: Success with the normalized record, or a failure
            reason. Never raises.
        """
        settings = self._settings or KpuSettings.from_env()

        if not settings.token:
            logger.error("❌ KPU_TOKEN not set, skipping remote lookup")
            return LookupResult.failure(ConfigurationError("KPU_TOKEN not set"))

        cached = self.cache.get(nik)
        if cached is not None:
            logger.info(f"📦 Cache hit for {mask_nik(nik)}")
            return cached

        client = self._client_factory(settings)
        cancel = threading.Event()
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="kpu-lookup")
        start_time = time.time()

        try:
            future = pool.submit(self._run_ladder, nik, client, settings, cancel)
            try:
                result, cacheable = future.result(timeout=settings.hard_timeout)
            except FutureTimeoutError:
                cancel.set()
                logger.warning(
                    f"⏱️ Hard timeout ({settings.hard_timeout_ms}ms) for {mask_nik(nik)}, aborting"
                )
                return LookupResult.failure(
                    AttemptTimeoutError("timeout"), FailureKind.TIMEOUT
                )
            except Exception as e:
                logger.error(f"❌ Lookup for {mask_nik(nik)} crashed: {type(e).__name__}: {e}")
                return LookupResult.failure("fetch error")
        finally:
            # A worker still mid-request stops at its next cancel check or socket timeout
            client.close()
            pool.shutdown(wait=False)

        elapsed = time.time() - start_time
        if result.ok:
            logger.info(f"✅ Lookup for {mask_nik(nik)} succeeded in {elapsed:.2f} seconds")
        else:
            logger.warning(
                f"⚠️ Lookup for {mask_nik(nik)} failed in {elapsed:.2f} seconds: {result.error[:160]}"
            )

        if cacheable:
            self.cache.set(nik, result)
        return result

    def _run_ladder(
        self,
        nik: str,
        client: KpuApiClient,
        settings: KpuSettings,
        cancel: threading.Event,
    ) -> Tuple[LookupResult, bool]:
        """Walk the attempt ladder; returns the result and whether it may be cached"""
        last_error: Optional[KpuLookupError] = None
        last_tier = AttemptTier.BASELINE

        for plan in build_ladder(settings.max_attempts):
            delay = plan.delay_seconds(self._rand)
            if delay > 0:
                logger.debug(f"Waiting {delay * 1000:.0f}ms before attempt {plan.index + 1}")
                if self._wait(cancel, delay):
                    return LookupResult.failure(AttemptTimeoutError("timeout")), False

            headers = build_headers(plan.tier, settings.site_url)
            last_tier = plan.tier
            try:
                raw = client.find_nik(nik, headers, settings.attempt_timeout, cancel)
            except KpuLookupError as e:
                last_error = e
                if cancel.is_set():
                    return LookupResult.failure(AttemptTimeoutError("timeout")), False
                # A refusal is retried only while a higher header tier is left
                escalate = is_blocking(e) and plan.tier < TOP_TIER
                if not (escalate or is_retryable(e)):
                    return LookupResult.failure(e), is_cacheable(e)
                logger.warning(
                    f"🔄 Attempt {plan.index + 1}/{settings.max_attempts} "
                    f"({plan.tier.name}) failed: {e.message[:160]}"
                )
                continue

            return LookupResult.success(normalize_record(raw)), True

        # A refusal is only final once the top tier has been refused too
        cacheable = is_cacheable(last_error) and not (
            is_blocking(last_error) and last_tier < TOP_TIER
        )
        return LookupResult.failure(last_error), cacheable
