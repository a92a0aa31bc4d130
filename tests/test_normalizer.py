"""
Test Result Normalizer - record shaping and map link derivation
"""

import pytest

from ceknik.transformation.normalizer import build_map_url, normalize_record
from ceknik.transformation.schemas import LookupResult

from conftest import SAMPLE_RECORD


@pytest.mark.parametrize(
    "lat, lon, expected",
    [
        ("-6.3489", "106.8012", "https://maps.google.com?q=-6.3489,106.8012"),
        (-6.5, 106.75, "https://maps.google.com?q=-6.5,106.75"),
        ("0", "106.8012", None),
        ("-6.3489", 0, None),
        (0.0, 0.0, None),
        (None, "106.8012", None),
        ("-6.3489", None, None),
        ("", "", None),
        ("n/a", "106.8012", None),
    ],
)
def test_map_url_only_with_both_nonzero_coordinates(lat, lon, expected):
    assert build_map_url(lat, lon) == expected


def test_normalize_record_keeps_known_fields():
    record = normalize_record({**SAMPLE_RECORD, "extra": "ignored"})

    assert record.nama == "SITI AMINAH"
    assert record.tps == "012"
    assert record.map_url == "https://maps.google.com?q=-6.3489,106.8012"
    assert "extra" not in record.to_dict()


def test_normalize_record_fills_missing_fields_with_none():
    record = normalize_record({"nama": "  BUDI  ", "tps": 7, "alamat": ""})

    assert record.nama == "BUDI"
    assert record.tps == "7"
    assert record.alamat is None
    assert record.kelurahan is None
    assert record.map_url is None


def test_lookup_result_envelopes():
    success = LookupResult.success(normalize_record(SAMPLE_RECORD))
    failure = LookupResult.failure("timeout")

    assert success.to_dict()["ok"] is True
    assert success.to_dict()["data"]["kecamatan"] == "JAGAKARSA"
    assert failure.to_dict() == {"ok": False, "error": "timeout"}


def test_map_url_left_out_of_dict_when_not_derived():
    without = normalize_record({**SAMPLE_RECORD, "lat": "0"}).to_dict()
    with_url = normalize_record(SAMPLE_RECORD).to_dict()

    assert "map_url" not in without
    assert with_url["map_url"] == "https://maps.google.com?q=-6.3489,106.8012"
