"""Field whitelisting for create/update payloads."""

from collections.abc import Iterable, Mapping
from typing import Any


def filter_body(payload: Mapping[str, Any], allowed_fields: Iterable[str]) -> dict[str, Any]:
    """Project ``payload`` onto ``allowed_fields``.

    Keys outside the whitelist are dropped. Whitelisted keys the client did
    not send are left out rather than set to None, so a partial update only
    touches what was submitted.
    """
    return {name: payload[name] for name in allowed_fields if name in payload}
