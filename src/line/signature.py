"""X-Line-Signature verification."""

import base64
import hashlib
import hmac


def compute_signature(body: bytes, channel_secret: str) -> str:
    """Base64-encoded HMAC-SHA256 of *body* keyed by the channel secret."""
    digest = hmac.new(channel_secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(body: bytes, signature: str, channel_secret: str) -> bool:
    """Check a webhook signature. An empty secret or signature never verifies."""
    if not channel_secret or not signature:
        return False
    return hmac.compare_digest(compute_signature(body, channel_secret), signature)
