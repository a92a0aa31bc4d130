"""
Regional code table (kode wilayah)

The table is a two-column CSV (``kode,nama``). Province codes have 2 digits,
regency/city codes 4 and district codes 6. District names may carry the
postal code as a ``NAME -- 12345`` suffix.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union
import logging

import polars as pl

from ceknik.coreutils.env import env_get

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).resolve().parents[1] / "data" / "wilayah.csv"

REGION_TABLE_SCHEMA = {"kode": pl.String, "nama": pl.String}


@dataclass
class RegionTable:
    provinces: Dict[str, str] = field(default_factory=dict)
    regencies: Dict[str, str] = field(default_factory=dict)
    districts: Dict[str, str] = field(default_factory=dict)

    def province(self, code: str) -> Optional[str]:
        return self.provinces.get(code)

    def regency(self, code: str) -> Optional[str]:
        return self.regencies.get(code)

    def district(self, code: str) -> Optional[str]:
        return self.districts.get(code)

    @classmethod
    def from_frame(cls, df: pl.DataFrame) -> "RegionTable":
        """
        Build the lookup maps from a ``kode,nama`` DataFrame

        Args:
            df: Region table; codes may contain dots (``31.71.01``)

        Returns:
            RegionTable: Maps keyed by undotted code
        """
        cleaned = df.select(
            pl.col("kode").str.replace_all(".", "", literal=True).str.strip_chars(),
            pl.col("nama").str.strip_chars(),
        ).drop_nulls()

        table = cls()
        by_length = {2: table.provinces, 4: table.regencies, 6: table.districts}
        for code, name in cleaned.iter_rows():
            target = by_length.get(len(code))
            if target is not None:
                target[code] = name
        return table


def load_region_table(path: Optional[Union[str, Path]] = None) -> RegionTable:
    """
    Load the region table from CSV

    Args:
        path: CSV path; defaults to ``WILAYAH_PATH`` or the bundled table

    Returns:
        RegionTable: Parsed table
    """
    path = Path(path or env_get("WILAYAH_PATH") or DEFAULT_TABLE_PATH)
    if not path.exists():
        raise FileNotFoundError(f"Region table not found: {path}")

    df = pl.read_csv(path, schema_overrides=REGION_TABLE_SCHEMA)
    table = RegionTable.from_frame(df)
    logger.info(
        f"Loaded region table from {path}: {len(table.provinces)} provinces, "
        f"{len(table.regencies)} regencies, {len(table.districts)} districts"
    )
    return table
