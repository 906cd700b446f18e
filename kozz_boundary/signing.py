"""Payload signing for messages sent to the hub.

The signature is a hex HMAC-SHA256 over the canonical JSON form of the
payload (sorted keys, compact separators, ``signature`` excluded).
"""

import hashlib
import hmac
import json
from typing import Any, Optional

SIGNATURE_FIELD = "signature"


def canonical_json(payload: dict) -> str:
    """Serialize a payload the same way on both ends of the channel."""
    unsigned = {k: v for k, v in payload.items() if k != SIGNATURE_FIELD}
    return json.dumps(unsigned, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_signature(payload: dict, secret: str) -> str:
    return hmac.new(
        secret.encode("utf-8"),
        canonical_json(payload).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def sign_payload(payload: dict, secret: Optional[str]) -> dict[str, Any]:
    """Return a copy of ``payload`` with a ``signature`` field.

    With no secret the signature is ``None``; the hub decides whether it
    accepts unsigned boundaries.
    """
    signed = dict(payload)
    signed[SIGNATURE_FIELD] = compute_signature(payload, secret) if secret else None
    return signed


def verify_payload(payload: dict, secret: str) -> bool:
    """Check a signed payload against ``secret``."""
    signature = payload.get(SIGNATURE_FIELD)
    if not isinstance(signature, str) or not secret:
        return False
    return hmac.compare_digest(signature, compute_signature(payload, secret))
