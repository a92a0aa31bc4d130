"""
Failure taxonomy for the KPU lookup.

Every failure the API client can produce is an exception derived from
``KpuLookupError`` that carries a ``FailureKind``. The orchestrator decides
from the kind whether to move to the next attempt, stop, or cache.
"""

from enum import Enum
from typing import Optional

BODY_SNIPPET_LIMIT = 300


class FailureKind(str, Enum):
    CONFIGURATION = "configuration"
    NOT_FOUND = "not_found"
    HTTP_STATUS = "http_status"
    BLOCKED_HTML = "blocked_html"
    MALFORMED_JSON = "malformed_json"
    NETWORK = "network"
    TIMEOUT = "timeout"


class KpuLookupError(Exception):
    """Base class for every lookup failure"""

    kind: FailureKind = FailureKind.NETWORK

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(KpuLookupError):
    kind = FailureKind.CONFIGURATION


class NotFoundError(KpuLookupError):
    kind = FailureKind.NOT_FOUND

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class HttpStatusError(KpuLookupError):
    kind = FailureKind.HTTP_STATUS

    def __init__(self, status_code: int, body_snippet: str = ""):
        self.status_code = status_code
        self.body_snippet = body_snippet
        message = f"HTTP {status_code}"
        if body_snippet:
            message = f"{message}: {body_snippet}"
        super().__init__(message)


class BlockedHtmlError(KpuLookupError):
    kind = FailureKind.BLOCKED_HTML

    def __init__(self, status_code: int, body_snippet: str = ""):
        self.status_code = status_code
        self.body_snippet = body_snippet
        super().__init__(f"Blocked: HTML page returned (HTTP {status_code})")


class MalformedJsonError(KpuLookupError):
    kind = FailureKind.MALFORMED_JSON


class NetworkError(KpuLookupError):
    kind = FailureKind.NETWORK


class AttemptTimeoutError(KpuLookupError):
    kind = FailureKind.TIMEOUT

    def __init__(self, message: str = "timeout"):
        super().__init__(message)


def snippet(body: str, secret: Optional[str] = None) -> str:
    """Truncate a response body for diagnostics, scrubbing the token if it was echoed back"""
    text = body or ""
    if secret:
        text = text.replace(secret, "***")
    return text[:BODY_SNIPPET_LIMIT]


def is_blocking(error: KpuLookupError) -> bool:
    """403/405 or an HTML block page: the upstream refused this request as sent"""
    if isinstance(error, HttpStatusError):
        return error.status_code in (403, 405)
    return error.kind == FailureKind.BLOCKED_HTML


def is_retryable(error: KpuLookupError) -> bool:
    """
    Whether the ladder should move on to the next attempt after this failure

    Transient signals (429, 5xx, malformed JSON, network, socket timeout) are
    always retried. Blocking signals are not covered here: the orchestrator
    retries those only while a higher header tier is left to try.
    """
    if isinstance(error, HttpStatusError):
        return error.status_code == 429 or error.status_code >= 500
    return error.kind in (
        FailureKind.MALFORMED_JSON,
        FailureKind.NETWORK,
        FailureKind.TIMEOUT,
    )


def is_cacheable(error: KpuLookupError) -> bool:
    """
    Terminal failures are cached; transient and configuration failures are not

    A 401 means the token was rejected, so it is treated as configuration:
    a rotated KPU_TOKEN must reach the network on the next lookup.
    """
    if error.kind in (FailureKind.NOT_FOUND, FailureKind.BLOCKED_HTML):
        return True
    if isinstance(error, HttpStatusError):
        return error.status_code != 401 and not is_retryable(error)
    return False
