"""
Request headers for each attempt tier.

Every tier sends the same honest identity: JSON content negotiation and a
User-Agent naming this client. From ORIGIN_HEADERS on, the Origin/Referer pair
of the public lookup site is added, which is what the site's own form sends
and which some deployments of the endpoint check before answering.
"""

from enum import IntEnum
from typing import Dict

from ceknik.coreutils.config import DEFAULT_SITE_URL
from ceknik.coreutils.request import USER_AGENT


class AttemptTier(IntEnum):
    BASELINE = 0
    ORIGIN_HEADERS = 1


BASE_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "Accept-Language": "id-ID,id;q=0.9,en-US;q=0.8,en;q=0.7",
    "User-Agent": USER_AGENT,
}


def build_headers(tier: AttemptTier, site_url: str = DEFAULT_SITE_URL) -> Dict[str, str]:
    """
    Build the header set for an attempt tier

    Args:
        tier: Ladder tier of the attempt
        site_url: Public site of the upstream, used for Origin/Referer

    Returns:
        Dict[str, str]: Fresh header mapping, safe for the caller to mutate
    """
    headers = dict(BASE_HEADERS)
    if tier >= AttemptTier.ORIGIN_HEADERS:
        headers["Origin"] = site_url
        headers["Referer"] = f"{site_url.rstrip('/')}/"
    return headers
