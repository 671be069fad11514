"""
POS base URL derivation.

    mpluskassa: https://api.mpluskassa.nl:<port>
    untill:     http://<ip>:<port>/api/v1/<database>

derive_base_url() builds the URL from the provider fields and returns ""
when a required field is missing. parse_base_url() recovers the fields from
a stored URL.
"""

import re

from shared.config.constants import PosType
from shared.config.settings import settings

MPLUSKASSA_PORT_PATTERN = re.compile(r":(\d+)$")
UNTILL_URL_PATTERN = re.compile(r"^https?://([^:/]+):(\d+)/api/v1/(.+)$")


def derive_base_url(
    pos_type: str | None,
    port: str | int | None = None,
    ip: str | None = None,
    database: str | None = None,
) -> str:
    port = str(port).strip() if port is not None else ""
    ip = (ip or "").strip()
    database = (database or "").strip()

    if pos_type == PosType.MPLUSKASSA:
        if not port:
            return ""
        return f"https://{settings.mpluskassa_host}:{port}"

    if pos_type == PosType.UNTILL:
        if not (ip and port and database):
            return ""
        return f"http://{ip}:{port}/api/v1/{database}"

    return ""


def parse_base_url(pos_type: str | None, base_url: str | None) -> dict[str, str]:
    """Provider fields from a stored base URL. Unknown shapes give empty fields."""
    fields = {"port": "", "ip": "", "database": ""}
    if not base_url:
        return fields

    if pos_type == PosType.MPLUSKASSA:
        match = MPLUSKASSA_PORT_PATTERN.search(base_url)
        if match:
            fields["port"] = match.group(1)

    elif pos_type == PosType.UNTILL:
        match = UNTILL_URL_PATTERN.match(base_url)
        if match:
            fields["ip"], fields["port"], fields["database"] = match.groups()

    return fields
