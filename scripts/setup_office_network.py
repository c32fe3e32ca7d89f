"""Register an office network.

Usage:
    python scripts/setup_office_network.py "Main Office" 192.168.1.1 255.255.255.0
    python scripts/setup_office_network.py "Main Office" 192.168.1.0 /24
"""

from __future__ import annotations

import argparse
import importlib

from dotenv import load_dotenv

from office_presence.database.bootstrap import ensure_network_config
from office_presence.settings import get_settings_module


def main() -> None:
    parser = argparse.ArgumentParser(description="Register an office network for check-in/out.")
    parser.add_argument("name", help="Display name, e.g. 'Office WiFi'")
    parser.add_argument("ip_address", help="Network or gateway IPv4 address")
    parser.add_argument("subnet", nargs="?", default=None, help="Dotted mask or CIDR ('/24', '10.0.0.0/8')")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    if ensure_network_config(db_config, name=args.name, ip_address=args.ip_address, subnet=args.subnet):
        print(f"OK: Registered {args.name} -> {args.ip_address} (subnet={args.subnet or 'not set'})")
    else:
        print(f"Network with IP {args.ip_address} already exists")


if __name__ == "__main__":
    main()
