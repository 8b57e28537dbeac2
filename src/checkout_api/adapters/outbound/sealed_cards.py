"""Sealed JSON card codec for the in-memory card vault.

Card lists are serialized as canonical JSON and signed with HMAC-SHA256
keyed by the customer secret. Opening a blob with another secret fails.
This keeps card data tied to its owner in development wiring; it does not
hide the card data.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
from datetime import date
from typing import Sequence, Tuple

from checkout_api.core.domain.model.catalog import CardDetails
from checkout_api.core.domain.model.errors import CardDecryptionError


def seal_card_details(cards: Sequence[CardDetails], secret: str) -> bytes:
    payload = json.dumps(
        [
            {"reference": c.reference, "expires_at": c.expires_at.isoformat()}
            for c in cards
        ],
        ensure_ascii=False,
        sort_keys=True,
        separators=(",", ":"),
    ).encode("utf-8")
    return base64.b64encode(_sign(payload, secret) + b"." + payload)


def open_sealed_card_details(blob: bytes, secret: str) -> Tuple[CardDetails, ...]:
    if not blob:
        return ()

    try:
        raw = base64.b64decode(blob, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CardDecryptionError(message=f"malformed card blob: {e}") from e

    mac, sep, payload = raw.partition(b".")
    if not sep or not hmac.compare_digest(mac, _sign(payload, secret)):
        raise CardDecryptionError(message="card blob does not match customer secret")

    try:
        entries = json.loads(payload)
        return tuple(
            CardDetails(
                reference=str(e["reference"]),
                expires_at=date.fromisoformat(e["expires_at"]),
            )
            for e in entries
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CardDecryptionError(message=f"unreadable card blob: {e}") from e


def _sign(payload: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest().encode(
        "ascii"
    )
