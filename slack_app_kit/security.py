"""Utilities for validating Slack request signatures."""

from __future__ import annotations

import hmac
import time
from hashlib import sha256

SLACK_SIGNATURE_HEADER = "X-Slack-Signature"
SLACK_TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"

VERSION = "v0"


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"Expected str or bytes, got {type(value).__name__}")


def compute_signature(signing_secret: str | bytes, timestamp: str | bytes, body: str | bytes) -> str:
    """Return Slack-compatible signature for the provided payload."""

    basestring = b":".join((VERSION.encode("ascii"), _to_bytes(timestamp), _to_bytes(body)))
    digest = hmac.new(_to_bytes(signing_secret), basestring, sha256).hexdigest()
    return f"{VERSION}={digest}"


def verify_signature(
    signing_secret: str | bytes,
    timestamp: str | bytes,
    body: str | bytes,
    signature: str | bytes,
) -> bool:
    """Return True when *signature* matches the one computed for *body*.

    Malformed input never raises; it simply fails the comparison.
    """

    if not signature:
        return False
    try:
        expected = compute_signature(signing_secret, timestamp, body)
        return hmac.compare_digest(expected.encode("ascii"), _to_bytes(signature))
    except (TypeError, UnicodeError):
        return False


def is_fresh_timestamp(timestamp: str, tolerance: int) -> bool:
    """Return True when *timestamp* lies within *tolerance* seconds of now."""

    try:
        request_ts = int(timestamp)
    except (TypeError, ValueError):
        return False
    return abs(int(time.time()) - request_ts) <= tolerance
