"""
NIK Decoder - attributes encoded in the identity number itself

Layout of a 16-digit NIK::

    PP KK CC DD MM YY SSSS
    |  |  |  |  |  |  serial
    |  |  |  |  |  birth year (2 digits)
    |  |  |  |  birth month
    |  |  |  birth day, +40 for women
    |  |  district
    |  regency/city
    province
"""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from .regions import RegionTable

MONTH_NAMES = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "Nopember", "Desember",
]
DAY_NAMES = ["Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"]
PASARAN = ["Wage", "Kliwon", "Legi", "Pahing", "Pon"]
PASARAN_EPOCH = date(1970, 1, 1)  # Kamis Wage

# month -> (first day of the later sign, sign before that day, sign from that day)
ZODIAC_BOUNDARIES = {
    1: (20, "Capricorn", "Aquarius"),
    2: (19, "Aquarius", "Pisces"),
    3: (21, "Pisces", "Aries"),
    4: (20, "Aries", "Taurus"),
    5: (21, "Taurus", "Gemini"),
    6: (22, "Gemini", "Cancer"),
    7: (23, "Cancer", "Leo"),
    8: (23, "Leo", "Virgo"),
    9: (23, "Virgo", "Libra"),
    10: (24, "Libra", "Scorpio"),
    11: (23, "Scorpio", "Sagitarius"),
    12: (22, "Sagitarius", "Capricorn"),
}


class InvalidNikError(ValueError):
    """NIK is not 16 digits or encodes an impossible birth date"""


class RegionNotFoundError(LookupError):
    """Region codes of the NIK are not in the region table"""


@dataclass(frozen=True)
class NikAttributes:
    nik: str
    kelamin: str
    lahir: str
    provinsi: str
    kotakab: str
    kecamatan: str
    kodepos: str
    uniqcode: str
    pasaran: str
    usia: str
    ultah: str
    zodiak: str


def is_valid_nik(nik: str) -> bool:
    return len(nik) == 16 and nik.isdigit()


def zodiac(day: int, month: int) -> str:
    boundary, before, after = ZODIAC_BOUNDARIES[month]
    return before if day < boundary else after


def pasaran(birth: date) -> str:
    """Javanese weekday with market day, e.g. 'Jumat Legi, 17 Agustus 1945'"""
    market = PASARAN[(birth - PASARAN_EPOCH).days % 5]
    day_name = DAY_NAMES[birth.weekday()]
    return f"{day_name} {market}, {birth.day} {MONTH_NAMES[birth.month - 1]} {birth.year}"


def _birthday_in(year: int, birth: date) -> date:
    # 29 February falls back to 1 March in non-leap years
    if birth.month == 2 and birth.day == 29 and not calendar.isleap(year):
        return date(year, 3, 1)
    return birth.replace(year=year)


def age_and_next_birthday(birth: date, today: date) -> Tuple[str, str]:
    """
    Age as years/months/days and time left until the next birthday

    Returns:
        Tuple[str, str]: ('33 Tahun 2 Bulan 5 Hari', '9 Bulan 20 Hari')
    """
    years = today.year - birth.year
    months = today.month - birth.month
    days = today.day - birth.day
    if days < 0:
        prev_month = today.month - 1 or 12
        prev_year = today.year if today.month > 1 else today.year - 1
        days += calendar.monthrange(prev_year, prev_month)[1]
        months -= 1
    if months < 0:
        months += 12
        years -= 1

    upcoming = _birthday_in(today.year, birth)
    if upcoming < today:
        upcoming = _birthday_in(today.year + 1, birth)
    remaining = (upcoming - today).days

    return (
        f"{years} Tahun {months} Bulan {days} Hari",
        f"{remaining // 30} Bulan {remaining % 30} Hari",
    )


def birth_year(yy: str, today: date) -> int:
    """Two-digit years below the current two-digit year are 20xx, the rest 19xx"""
    if yy < f"{today.year % 100:02d}":
        return 2000 + int(yy)
    return 1900 + int(yy)


def decode_nik(nik: str, regions: RegionTable, today: Optional[date] = None) -> NikAttributes:
    """
    Decode region, birth date, sex and derived traits from a NIK

    Args:
        nik: 16-digit NIK
        regions: Region table for province/regency/district names
        today: Reference date for age calculations (defaults to today)

    Returns:
        NikAttributes: Decoded attributes

    Raises:
        InvalidNikError: NIK malformed or birth date impossible
        RegionNotFoundError: Any of the three region codes is unknown
    """
    nik = (nik or "").strip()
    if not is_valid_nik(nik):
        raise InvalidNikError("Format NIK harus 16 digit")

    today = today or date.today()

    province = regions.province(nik[:2])
    regency = regions.regency(nik[:4])
    district_raw = regions.district(nik[:6])
    if not province or not regency or not district_raw:
        raise RegionNotFoundError("Kode wilayah NIK tidak ditemukan")

    district, _, postcode = district_raw.upper().partition(" -- ")

    day_raw = int(nik[6:8])
    month = int(nik[8:10])
    female = day_raw > 40
    day = day_raw - 40 if female else day_raw
    year = birth_year(nik[10:12], today)

    try:
        birth = date(year, month, day)
    except ValueError as e:
        raise InvalidNikError(f"Tanggal lahir tidak valid: {e}") from e

    usia, ultah = age_and_next_birthday(birth, today)

    return NikAttributes(
        nik=nik,
        kelamin="PEREMPUAN" if female else "LAKI-LAKI",
        lahir=f"{day:02d}/{month:02d}/{year}",
        provinsi=province,
        kotakab=regency,
        kecamatan=district.strip(),
        kodepos=postcode.strip(),
        uniqcode=nik[12:16],
        pasaran=pasaran(birth),
        usia=usia,
        ultah=f"{ultah} Lagi",
        zodiak=zodiac(day, month),
    )
