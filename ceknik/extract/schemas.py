"""
Wire format of the KPU GraphQL endpoint
"""

RECORD_FIELD = "findNikSidalih"

# Fields requested from the endpoint, in the order the site's own form asks for them
RECORD_FIELDS = (
    "nama",
    "nik",
    "nkk",
    "provinsi",
    "kabupaten",
    "kecamatan",
    "kelurahan",
    "tps",
    "alamat",
    "lat",
    "lon",
    "metode",
)

QUERY_TEMPLATE = (
    '{{ {field}(nik:"{nik}", wilayah_id:0, token:"{token}")'
    "{{ {fields} }} }}"
)


def build_query(nik: str, token: str) -> dict:
    """Build the GraphQL request body for one NIK"""
    return {
        "query": QUERY_TEMPLATE.format(
            field=RECORD_FIELD,
            nik=nik,
            token=token,
            fields=" ".join(RECORD_FIELDS),
        )
    }
