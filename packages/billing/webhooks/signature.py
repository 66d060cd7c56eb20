"""Creem webhook signature verification."""

import hashlib
import hmac
from typing import Optional

from common.core.exceptions import WebhookSignatureError

SIGNATURE_HEADER = "creem-signature"


def compute_signature(payload: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()


def verify_creem_signature(
    payload: bytes, signature: Optional[str], secret: Optional[str]
) -> None:
    """
    Check the hex HMAC-SHA256 of the raw body against the signature header.

    No-op when no secret is configured.
    """
    if not secret:
        return

    if not signature:
        raise WebhookSignatureError(f"Missing {SIGNATURE_HEADER} header")

    if not hmac.compare_digest(compute_signature(payload, secret), signature):
        raise WebhookSignatureError("Invalid webhook signature")
