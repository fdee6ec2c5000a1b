"""Client identity resolution for rate governance."""

from __future__ import annotations

from typing import Any
from collections.abc import Collection

from storefront.state.rate import ClientIdentity

FALLBACK_IDENTITY = "unknown"


def _peer_address(request: Any) -> str:
    client = getattr(request, "client", None)
    host = getattr(client, "host", None) if client is not None else None
    return host or FALLBACK_IDENTITY


def client_identity(
    request: Any,
    *,
    trust_proxy_headers: bool = False,
    trusted_proxies: Collection[str] = (),
) -> ClientIdentity:
    """Return the client address a request is governed by.

    The socket peer is the identity unless proxy headers are trusted and the
    peer is itself a trusted proxy. Then the right-most x-forwarded-for hop
    that is not a trusted proxy wins, then x-real-ip.
    """
    peer = _peer_address(request)
    if not trust_proxy_headers or peer not in trusted_proxies:
        return ClientIdentity(address=peer)

    hops = [hop.strip() for hop in (request.headers.get("x-forwarded-for") or "").split(",")]
    for hop in reversed(hops):
        if hop and hop not in trusted_proxies:
            return ClientIdentity(address=hop, forwarded=True)

    real_ip = (request.headers.get("x-real-ip") or "").strip()
    if real_ip and real_ip not in trusted_proxies:
        return ClientIdentity(address=real_ip, forwarded=True)
    return ClientIdentity(address=peer)


def anonymize_ip(identity: str) -> str:
    if not identity:
        return "unknown"
    parts = identity.split(".")
    if len(parts) == 4:
        return f"{parts[0]}.{parts[1]}.xxx.xxx"
    return f"{identity[:8]}xxx"


__all__ = ["FALLBACK_IDENTITY", "anonymize_ip", "client_identity"]
