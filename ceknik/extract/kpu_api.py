"""
KPU API Client - Single-attempt I/O

Issues exactly one POST per call and turns every way that call can go wrong
into a typed ``KpuLookupError``. Retrying, caching and deadlines belong to the
orchestrator; this module has no business logic.
"""

import json
import threading
import time
from typing import Any, Dict, Optional
import logging

import requests

from ceknik.coreutils.config import DEFAULT_API_URL
from ceknik.coreutils.logging import mask_nik
from ceknik.coreutils.request import new_session
from .errors import (
    AttemptTimeoutError,
    BlockedHtmlError,
    HttpStatusError,
    MalformedJsonError,
    NetworkError,
    NotFoundError,
    snippet,
)
from .schemas import RECORD_FIELD, build_query

logger = logging.getLogger(__name__)


def looks_like_html(body: str) -> bool:
    """Block pages come back as HTML, sometimes with a 200 status"""
    return body.lstrip().startswith("<")


class KpuApiClient:
    """Pure API client for the KPU voter-roll lookup endpoint"""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client

        Args:
            token: Access token embedded in the GraphQL query
            api_url: GraphQL endpoint
            session: HTTP session to reuse (a new one is created if omitted)
        """
        self._token = token
        self.api_url = api_url
        self.session = session or new_session()

    def __repr__(self) -> str:
        return f"KpuApiClient(api_url={self.api_url!r})"

    def close(self) -> None:
        """Close the session and its pooled connections"""
        self.session.close()

    def find_nik(
        self,
        nik: str,
        headers: Dict[str, str],
        timeout: float,
        cancel: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """
        Fetch the voter-roll record for one NIK

        Args:
            nik: 16-digit NIK
            headers: Header set for this attempt
            timeout: Socket timeout in seconds for this attempt
            cancel: Event set by the orchestrator when the lookup deadline passes

        Returns:
            Dict: Raw record as returned by the endpoint

        Raises:
            KpuLookupError: One subclass per failure kind
        """
        if cancel is not None and cancel.is_set():
            raise AttemptTimeoutError("timeout (cancelled)")

        start_time = time.time()
        try:
            response = self.session.post(
                self.api_url,
                data=json.dumps(build_query(nik, self._token)),
                headers=headers,
                timeout=timeout,
            )
        except requests.exceptions.Timeout as e:
            raise AttemptTimeoutError("timeout") from e
        except requests.exceptions.RequestException as e:
            if cancel is not None and cancel.is_set():
                raise AttemptTimeoutError("timeout (cancelled)") from e
            raise NetworkError(f"network error: {type(e).__name__}") from e

        elapsed = time.time() - start_time
        logger.debug(
            f"KPU responded {response.status_code} for {mask_nik(nik)} in {elapsed:.2f} seconds"
        )

        body = response.text or ""
        if looks_like_html(body):
            raise BlockedHtmlError(response.status_code, snippet(body, self._token))

        if not response.ok:
            raise HttpStatusError(response.status_code, snippet(body, self._token))

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise MalformedJsonError("malformed JSON response") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        record = data.get(RECORD_FIELD) if isinstance(data, dict) else None
        if not record:
            raise NotFoundError()
        if not isinstance(record, dict):
            raise MalformedJsonError(f"unexpected {RECORD_FIELD} payload")

        return record
