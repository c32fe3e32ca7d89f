from __future__ import annotations

from flask import Request

# Sent by the mobile app with the device's Wi-Fi address.
LOCAL_IP_HEADERS = ("X-Client-Local-IP", "X-Wifi-IP")
LOCAL_IP_BODY_FIELDS = ("clientIP", "localIP")


def resolve_client_ip(request: Request) -> str:
    """Pick the address to check against the office networks.

    Device-reported local IPs win over the socket address, which behind NAT is
    the office's public address. X-Forwarded-For is honoured through ProxyFix.
    """
    for header in LOCAL_IP_HEADERS:
        value = request.headers.get(header)
        if value and value.strip():
            return value.strip()

    body = request.get_json(silent=True) or {}
    if isinstance(body, dict):
        for field in LOCAL_IP_BODY_FIELDS:
            value = body.get(field)
            if isinstance(value, str) and value.strip():
                return value.strip()

    return request.remote_addr or "unknown"
