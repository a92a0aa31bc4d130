"""
Result Normalizer

Shapes a raw ``findNikSidalih`` record into an ``UpstreamRecord`` and derives
the map link from its coordinates.
"""

from typing import Any, Dict, Optional

from .schemas import UpstreamRecord

MAP_URL_TEMPLATE = "https://maps.google.com?q={lat},{lon}"


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coordinate(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    return number


def build_map_url(lat: Any, lon: Any) -> Optional[str]:
    """
    Build a map link when both coordinates are present and non-zero

    Args:
        lat: Latitude as returned upstream (string or number)
        lon: Longitude as returned upstream (string or number)

    Returns:
        Optional[str]: Map URL, or None when either coordinate is missing or zero
    """
    lat_value, lon_value = _coordinate(lat), _coordinate(lon)
    if not lat_value or not lon_value:
        return None
    return MAP_URL_TEMPLATE.format(lat=_text(lat), lon=_text(lon))


def normalize_record(raw: Dict[str, Any]) -> UpstreamRecord:
    fields = {
        name: _text(raw.get(name))
        for name in UpstreamRecord.__dataclass_fields__
        if name != "map_url"
    }
    return UpstreamRecord(
        **fields, map_url=build_map_url(raw.get("lat"), raw.get("lon"))
    )
