"""
NIK Lookup Service

Validates and decodes a NIK, enriches it with the KPU voter-roll record and
returns the payload wrapped in a ``{success, message, data}`` envelope.
Run as a module for command line usage:

    python -m ceknik.orchestration.service 3171014101900001 --verbose
"""

import json
import logging
import sys
from datetime import date
from typing import Any, Dict, Optional

from ceknik.coreutils.logging import mask_nik
from ceknik.transformation.nik_decoder import (
    InvalidNikError,
    RegionNotFoundError,
    decode_nik,
)
from ceknik.transformation.regions import RegionTable, load_region_table
from ceknik.transformation.schemas import LookupResult
from .lookup import LookupOrchestrator

logger = logging.getLogger(__name__)


def success_response(
    message: str = "Success", data: Optional[Dict[str, Any]] = None, status: int = 200
) -> Dict[str, Any]:
    response: Dict[str, Any] = {"status": status, "success": True, "message": message}
    if data:
        response["data"] = data
    return response


def error_response(message: str, status: int = 500) -> Dict[str, Any]:
    return {"status": status, "success": False, "message": message}


def validation_error(message: str) -> Dict[str, Any]:
    return error_response(message, 400)


def not_found_response(message: str = "Resource not found") -> Dict[str, Any]:
    return error_response(message, 404)


class NikLookupService:
    """Combines NIK decoding with the remote voter-roll lookup"""

    def __init__(
        self,
        regions: Optional[RegionTable] = None,
        orchestrator: Optional[LookupOrchestrator] = None,
        remote: bool = True,
    ):
        """
        Args:
            regions: Region table (loaded from WILAYAH_PATH if omitted)
            orchestrator: Shared lookup orchestrator (one per process)
            remote: If false, only decode the NIK and skip the KPU lookup
        """
        self.regions = regions if regions is not None else load_region_table()
        self.remote = remote
        if orchestrator is None and remote:
            orchestrator = LookupOrchestrator()
        self.orchestrator = orchestrator

    def check(self, nik: str, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Decode and look up one NIK

        Args:
            nik: NIK as received from the caller (whitespace is stripped)
            today: Reference date for age calculations

        Returns:
            Dict: Response envelope; ``status`` suggests an HTTP status code
        """
        nik = str(nik or "").strip()

        try:
            attributes = decode_nik(nik, self.regions, today)
        except InvalidNikError as e:
            return validation_error(str(e))
        except RegionNotFoundError as e:
            return not_found_response(str(e))

        if self.remote:
            kpu = self.orchestrator.lookup(nik)
        else:
            kpu = LookupResult.failure("remote lookup disabled")

        if kpu.not_found:
            logger.info(f"[KPU][not-found] {mask_nik(nik)}")
        elif not kpu.ok:
            logger.warning(f"[KPU][fail] {mask_nik(nik)}: {str(kpu.error)[:160]}")

        payload = {
            "nik": attributes.nik,
            "nama": kpu.data.nama if kpu.ok else None,
            "kelamin": attributes.kelamin,
            "lahir": attributes.lahir,
            "provinsi": attributes.provinsi,
            "kotakab": attributes.kotakab,
            "kecamatan": attributes.kecamatan,
            "uniqcode": attributes.uniqcode,
            "tambahan": {
                "kodepos": attributes.kodepos,
                "pasaran": attributes.pasaran,
                "usia": attributes.usia,
                "ultah": attributes.ultah,
                "zodiak": attributes.zodiak,
            },
            "kpu": kpu.to_dict(),
        }
        return success_response("NIK valid", payload)


def main():
    """Main entry point for command line usage"""
    import argparse

    from ceknik.coreutils.logging import setup_logging

    parser = argparse.ArgumentParser(description="Decode and look up an Indonesian NIK")
    parser.add_argument("nik", help="16-digit NIK")
    parser.add_argument(
        "--no-remote",
        action="store_true",
        help="Only decode the NIK, skip the KPU lookup",
    )
    parser.add_argument("--wilayah", help="Path to the region table CSV")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args()

    # Setup logging
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        regions = load_region_table(args.wilayah)
    except FileNotFoundError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    service = NikLookupService(regions=regions, remote=not args.no_remote)
    response = service.check(args.nik)
    print(json.dumps(response, indent=2, ensure_ascii=False))

    sys.exit(0 if response["success"] else 1)


if __name__ == "__main__":
    main()
