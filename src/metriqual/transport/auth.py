"""
Authorization header selection.

The gateway accepts two bearer credentials:
1. Proxy key (``mql-...``) for chat and other proxied calls
2. Session token for management operations

When both are configured the session token is sent.
"""

from __future__ import annotations

AUTHORIZATION = "Authorization"


def select_credential(api_key: str | None, token: str | None) -> str | None:
    """Pick the credential to send, session token first."""
    return token or api_key or None


def get_auth_header(api_key: str | None = None, token: str | None = None) -> dict[str, str]:
    """Get the authorization header for the configured credentials.

    Args:
        api_key: Proxy key
        token: Session token

    Returns:
        Dictionary with the Authorization header, or empty if no credential
    """
    credential = select_credential(api_key, token)
    if not credential:
        return {}
    return {AUTHORIZATION: f"Bearer {credential}"}
