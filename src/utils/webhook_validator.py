"""
GitHub webhook signature validation utilities
"""

import hashlib
import hmac
from typing import Mapping, Optional

import structlog

logger = structlog.get_logger()

SIGNATURE_PREFIX = "sha256="


def compute_github_signature(payload: bytes, secret: str) -> str:
    """
    Compute the X-Hub-Signature-256 value GitHub sends for a payload

    Args:
        payload: Raw request body as bytes
        secret: Webhook secret configured in GitHub

    Returns:
        str: "sha256=" followed by the hex HMAC-SHA256 digest
    """
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


def validate_github_webhook(
    payload: bytes, signature: Optional[str], secret: str
) -> bool:
    """
    Validate GitHub webhook signature

    The digest is computed over the raw bytes exactly as received. Parsing
    and re-encoding the body first would change whitespace and key order.

    Args:
        payload: Raw request body as bytes
        signature: X-Hub-Signature-256 header value, None when absent
        secret: Webhook secret configured in GitHub

    Returns:
        bool: True if signature is valid, False otherwise
    """
    if not signature:
        logger.warning("Missing webhook signature")
        return False

    if not secret:
        logger.error("Webhook secret is not configured")
        return False

    if not signature.startswith(SIGNATURE_PREFIX):
        logger.warning("Invalid signature format", signature_prefix=signature[:7])
        return False

    expected_signature = compute_github_signature(payload, secret)

    # Use constant-time comparison to prevent timing attacks
    is_valid = hmac.compare_digest(
        signature.encode("utf-8"), expected_signature.encode("utf-8")
    )

    if not is_valid:
        logger.warning(
            "Invalid webhook signature",
            expected_prefix=expected_signature[7:15],
            received_prefix=signature[7:15],
        )

    return is_valid


def extract_github_event_type(headers: Mapping[str, str]) -> str:
    """
    Extract GitHub event type from webhook headers

    Args:
        headers: Request headers mapping

    Returns:
        str: Event type (e.g., 'push', 'pull_request')
    """
    return headers.get("X-GitHub-Event") or headers.get("x-github-event") or "unknown"


def extract_github_delivery_id(headers: Mapping[str, str]) -> Optional[str]:
    """Extract the X-GitHub-Delivery GUID, None when the header is missing"""
    return headers.get("X-GitHub-Delivery") or headers.get("x-github-delivery") or None
