from __future__ import annotations

import logging

from office_presence.network.model import NetworkConfig
from office_presence.network.policy import NetworkAccessPolicy, NetworkGate, OnEmpty


class StaticNetworks:
    def __init__(self, *configs):
        self.configs = list(configs)

    def list_active(self):
        return [c for c in self.configs if c.is_active]


OFFICE = NetworkConfig(config_id=1, name="Office WiFi", ip_address="192.168.1.0", subnet="/24")


def test_gate_admits_office_ip_and_denies_outsider():
    gate = NetworkGate(StaticNetworks(OFFICE), NetworkAccessPolicy())

    assert gate.check("192.168.1.10").allowed is True
    denied = gate.check("10.0.0.5")
    assert denied.allowed is False
    assert denied.client_ip == "10.0.0.5"


def test_no_configs_denies_by_default():
    gate = NetworkGate(StaticNetworks(), NetworkAccessPolicy())

    assert gate.check("192.168.1.10").allowed is False


def test_no_configs_fail_open_is_explicit(caplog):
    gate = NetworkGate(StaticNetworks(), NetworkAccessPolicy(on_empty=OnEmpty.ALLOW))

    with caplog.at_level(logging.WARNING):
        decision = gate.check("10.0.0.5")

    assert decision.allowed is True
    assert "fail-open" in caplog.text


def test_disabled_validation_admits_anything():
    gate = NetworkGate(StaticNetworks(OFFICE), NetworkAccessPolicy(enabled=False))

    assert gate.check("8.8.8.8").allowed is True


def test_loopback_only_when_allowed():
    strict = NetworkGate(StaticNetworks(OFFICE), NetworkAccessPolicy())
    relaxed = NetworkGate(StaticNetworks(OFFICE), NetworkAccessPolicy(allow_loopback=True))

    assert strict.check("::1").allowed is False
    assert relaxed.check("::1").allowed is True


def test_policy_from_settings():
    class Settings:
        IP_VALIDATION_ENABLED = True
        NETWORK_FAIL_OPEN = True
        ALLOW_LOOPBACK_IP = False

    policy = NetworkAccessPolicy.from_settings(Settings)

    assert policy.enabled is True
    assert policy.on_empty == OnEmpty.ALLOW
    assert policy.allow_loopback is False
