from urllib3.util.retry import Retry
import requests
from requests.adapters import HTTPAdapter

from ceknik import __version__

USER_AGENT = f"ceknik/{__version__} (+https://github.com/ceknik/ceknik)"

# Connection-level retries only. Status and read retries are owned by the
# lookup ladder, and a POST body must never be replayed by urllib3.
DEFAULT_RETRY_STRATEGY = Retry(
    total=2,
    connect=2,
    read=0,
    status=0,
    other=0,
    backoff_factor=0.2,
    raise_on_status=False,
)


def new_session() -> requests.Session:
    """Create a new requests session with retry strategy"""
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=DEFAULT_RETRY_STRATEGY)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    # Set default headers
    session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})

    return session
