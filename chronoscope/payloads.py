"""Decoding of opaque payload blobs into display strings."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Optional, Sequence

from pydantic import BaseModel

from .contracts import Payload

logger = logging.getLogger(__name__)

# Rendered for a payload without usable data.
MISSING_DATA = "null"


def decode_payload(payload: Optional[Payload]) -> str:
    """Decode a single payload's base64 ``data`` as text.

    Missing, empty or malformed data renders as ``"null"``.
    """
    if payload is None or not payload.data:
        return MISSING_DATA
    try:
        raw = base64.b64decode(payload.data, validate=True)
    except (binascii.Error, ValueError):
        logger.debug("Payload data is not valid base64, treating it as absent")
        return MISSING_DATA
    return raw.decode("utf-8", errors="replace")


def decode_payloads(payloads: Optional[Sequence[Optional[Payload]]]) -> Optional[str]:
    """Decode a payload list for display.

    ``None`` or an empty list gives ``None``. A single payload gives its decoded
    text; several give ``"[a, b, ...]"``.
    """
    if not payloads:
        return None
    if len(payloads) == 1:
        return decode_payload(payloads[0])
    return "[" + ", ".join(decode_payload(p) for p in payloads) + "]"


def json_snapshot(value: Any) -> str:
    """Serialize a raw attribute block or failure to compact JSON."""
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True, exclude_none=True)
    return json.dumps(value, separators=(",", ":"), default=str)
