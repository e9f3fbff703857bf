from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Final

KEY_BYTES: Final[int] = 32
DIGEST: Final = hashlib.sha3_256


class EntropySourceFailure(RuntimeError):
    """The OS could not supply cryptographically strong random bytes."""


def generate_key(num_bytes: int = KEY_BYTES) -> str:
    # Never fall back to a non-cryptographic source here.
    try:
        raw = secrets.token_bytes(num_bytes)
    except (OSError, NotImplementedError) as exc:
        raise EntropySourceFailure("unable to read from the system CSPRNG") from exc
    return raw.hex()


def compute_commitment(message: str, key: str) -> str:
    """HMAC-SHA3-256 of ``message`` keyed with the hex key text, as lowercase hex.

    The key is used exactly as displayed (its UTF-8 text, not the decoded
    bytes) so players can check the reveal with any HMAC calculator.
    """

    return hmac.new(key.encode("utf-8"), message.encode("utf-8"), DIGEST).hexdigest()


def verify_commitment(*, expected_commitment: str, message: str, key: str) -> bool:
    computed = compute_commitment(message, key)
    return hmac.compare_digest(expected_commitment.strip().lower().encode("utf-8"), computed.encode("ascii"))
