"""
Shared fixtures for the lookup tests
"""

import json
import os
import sys
import threading
from typing import Any, Dict, List, Optional

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import polars as pl
import pytest
import requests

from ceknik.coreutils.config import KpuSettings
from ceknik.transformation.regions import RegionTable

TEST_NIK = "3171014101900001"
TEST_TOKEN = "s3cr3t-token"

SAMPLE_RECORD = {
    "nama": "SITI AMINAH",
    "nik": "317101**********",
    "nkk": "317101**********",
    "provinsi": "DKI JAKARTA",
    "kabupaten": "JAKARTA SELATAN",
    "kecamatan": "JAGAKARSA",
    "kelurahan": "CIGANJUR",
    "tps": "012",
    "alamat": "JL. CONTOH NO. 1",
    "lat": "-6.3489",
    "lon": "106.8012",
    "metode": "coklit",
}


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeKpuClient:
    """Stands in for KpuApiClient; replays scripted outcomes in order"""

    def __init__(self, outcomes: List[Any]):
        self.outcomes = list(outcomes)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def find_nik(self, nik, headers, timeout, cancel: Optional[threading.Event] = None):
        self.calls.append({"nik": nik, "headers": headers, "timeout": timeout})
        outcome = self.outcomes.pop(0)
        if callable(outcome):
            outcome = outcome(cancel)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


def make_response(status_code: int = 200, body: Any = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    text = body if isinstance(body, str) else json.dumps(body)
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    return response


@pytest.fixture
def settings() -> KpuSettings:
    return KpuSettings(
        token=TEST_TOKEN,
        attempt_timeout_ms=1_000,
        hard_timeout_ms=5_000,
        max_attempts=3,
        cache_ttl_s=300,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def regions() -> RegionTable:
    df = pl.DataFrame(
        {
            "kode": ["31", "31.71", "31.71.01", "32", "32.73"],
            "nama": [
                "DKI JAKARTA",
                "KOTA ADM. JAKARTA SELATAN",
                "Jagakarsa -- 12620",
                "JAWA BARAT",
                "KOTA BANDUNG",
            ],
        }
    )
    return RegionTable.from_frame(df)
