"""Content fingerprints and canonical hashing helpers.

``fingerprint`` is the single content-integrity function of the registry:
registration-time batch hashing and update-time single-item hashing both
go through it, so content supplied later can be matched against a
fingerprint stored earlier.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable
from typing import Any

FINGERPRINT_SIZE = 32  # bytes


def fingerprint(data: bytes) -> str:
    """Return the BLAKE2b-256 hex digest of raw bytes."""
    return hashlib.blake2b(data, digest_size=FINGERPRINT_SIZE).hexdigest()


def fingerprint_many(items: Iterable[bytes]) -> list[str]:
    """Fingerprint each item, preserving order."""
    return [fingerprint(item) for item in items]


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes — deterministic, sorted, compact."""
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def compute_entry_hash(entry_dict: dict[str, Any]) -> str:
    """SHA-256 of an event ledger entry, excluding its own entry_hash field."""
    d = {k: v for k, v in entry_dict.items() if k != "entry_hash"}
    return sha256_hex(canonical_json_bytes(d))
