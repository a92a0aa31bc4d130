"""
Test NIK Lookup Service - validation, decoding and KPU enrichment envelope
"""

from datetime import date
from unittest.mock import Mock

from ceknik.extract.errors import NotFoundError
from ceknik.orchestration.lookup import LookupOrchestrator
from ceknik.orchestration.service import NikLookupService
from ceknik.transformation.normalizer import normalize_record
from ceknik.transformation.schemas import LookupResult

from conftest import SAMPLE_RECORD, TEST_NIK

TODAY = date(2024, 6, 15)


def make_service(regions, result: LookupResult) -> NikLookupService:
    orchestrator = Mock(spec=LookupOrchestrator)
    orchestrator.lookup.return_value = result
    return NikLookupService(regions=regions, orchestrator=orchestrator)


def test_valid_nik_with_kpu_record(regions):
    service = make_service(regions, LookupResult.success(normalize_record(SAMPLE_RECORD)))

    response = service.check(TEST_NIK, TODAY)

    assert response["status"] == 200
    assert response["success"] is True
    assert response["message"] == "NIK valid"

    data = response["data"]
    assert data["nama"] == "SITI AMINAH"
    assert data["kelamin"] == "PEREMPUAN"
    assert data["kecamatan"] == "JAGAKARSA"
    assert data["tambahan"]["kodepos"] == "12620"
    assert data["kpu"]["ok"] is True
    assert data["kpu"]["data"]["map_url"] == "https://maps.google.com?q=-6.3489,106.8012"
    service.orchestrator.lookup.assert_called_once_with(TEST_NIK)


def test_kpu_failure_still_returns_decoded_nik(regions):
    service = make_service(regions, LookupResult.failure(NotFoundError()))

    response = service.check(TEST_NIK, TODAY)

    assert response["success"] is True
    assert response["data"]["nama"] is None
    assert response["data"]["lahir"] == "01/01/1990"
    assert response["data"]["kpu"] == {"ok": False, "error": "Not found"}


def test_short_nik_is_validation_error(regions):
    service = make_service(regions, LookupResult.failure("unused"))

    response = service.check("12345", TODAY)

    assert response == {"status": 400, "success": False, "message": "Format NIK harus 16 digit"}
    service.orchestrator.lookup.assert_not_called()


def test_unknown_region_is_not_found(regions):
    service = make_service(regions, LookupResult.failure("unused"))

    response = service.check("9971014101900001", TODAY)

    assert response["status"] == 404
    assert response["message"] == "Kode wilayah NIK tidak ditemukan"
    service.orchestrator.lookup.assert_not_called()


def test_remote_disabled_skips_lookup(regions):
    service = NikLookupService(regions=regions, remote=False)

    response = service.check(TEST_NIK, TODAY)

    assert service.orchestrator is None
    assert response["data"]["kpu"] == {"ok": False, "error": "remote lookup disabled"}
