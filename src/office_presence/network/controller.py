from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import login_required
from ..container import Container
from .client_ip import resolve_client_ip


def register(app: Flask, container: Container) -> None:
    @app.route("/api/network/my-ip", methods=["GET"], endpoint="network_my_ip")
    @login_required
    def my_ip():
        decision = container.network_gate.check(resolve_client_ip(request))
        return jsonify({"ip": decision.client_ip, "allowed": decision.allowed, "reason": decision.reason})
