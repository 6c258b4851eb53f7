"""aioresponses helpers that stand in for the upstream Star Wars API."""

from __future__ import annotations

import re
from typing import Any

from aioresponses import aioresponses

BASE_URL = "https://swapi.test/api"


def register_records(
    mocked: aioresponses, collection: str, records: dict[int, dict[str, Any]]
) -> None:
    """Serve ``records`` by index; every other index in ``collection`` is a 404."""
    for index, body in records.items():
        mocked.get(f"{BASE_URL}/{collection}/{index}/", payload=body, repeat=True)
    mocked.get(
        re.compile(rf"^{re.escape(BASE_URL)}/{collection}/\d+/$"),
        status=404,
        payload={"detail": "Not found"},
        repeat=True,
    )
