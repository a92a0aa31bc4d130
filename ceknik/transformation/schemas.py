"""
Caller-facing data structures for lookup results
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union

from ceknik.extract.errors import FailureKind, KpuLookupError


@dataclass(frozen=True)
class UpstreamRecord:
    nama: Optional[str] = None
    nik: Optional[str] = None
    nkk: Optional[str] = None
    provinsi: Optional[str] = None
    kabupaten: Optional[str] = None
    kecamatan: Optional[str] = None
    kelurahan: Optional[str] = None
    tps: Optional[str] = None
    alamat: Optional[str] = None
    lat: Optional[str] = None
    lon: Optional[str] = None
    metode: Optional[str] = None
    map_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Record fields; map_url is left out when it could not be derived"""
        record = asdict(self)
        if record["map_url"] is None:
            del record["map_url"]
        return record


@dataclass(frozen=True)
class LookupResult:
    """Outcome of one lookup: either ``data`` or an ``error`` reason, never both"""

    ok: bool
    data: Optional[UpstreamRecord] = None
    error: Optional[str] = None
    kind: Optional[FailureKind] = None

    @classmethod
    def success(cls, data: UpstreamRecord) -> "LookupResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(
        cls, error: Union[KpuLookupError, str], kind: Optional[FailureKind] = None
    ) -> "LookupResult":
        if isinstance(error, KpuLookupError):
            return cls(ok=False, error=error.message, kind=kind or error.kind)
        return cls(ok=False, error=str(error), kind=kind)

    @property
    def not_found(self) -> bool:
        return self.kind == FailureKind.NOT_FOUND

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data.to_dict()}
        return {"ok": False, "error": self.error}
