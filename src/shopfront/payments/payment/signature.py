"""Payment signatures — HMAC-SHA256 over ``provider_order_id|provider_payment_id``."""

import hashlib
import hmac


def compute_signature(secret: str, provider_order_id: str, provider_payment_id: str) -> str:
    message = f"{provider_order_id}|{provider_payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def signature_matches(secret: str, provider_order_id: str, provider_payment_id: str, signature: str) -> bool:
    # Compared as bytes; compare_digest rejects str holding non-ASCII characters
    expected = compute_signature(secret, provider_order_id, provider_payment_id)
    return hmac.compare_digest(expected.encode(), (signature or "").encode())
