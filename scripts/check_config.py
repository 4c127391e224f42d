#!/usr/bin/env python3
"""
Service Bus JMS Configuration Check

Loads settings from the environment (SERVICEBUS_* variables and the
--env-file), layers an optional .properties file on top (its keys win),
validates them and prints the effective connection factory options.

Usage:
    python scripts/check_config.py
    python scripts/check_config.py --properties application.properties
    python scripts/check_config.py --env-file staging.env

Exit codes:
    0 - Configuration valid
    1 - Configuration invalid
"""

from __future__ import annotations

import argparse
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from servicebus_jms.config.listener import ContainerKind
from servicebus_jms.config.logging import configure_logging
from servicebus_jms.config.properties import load_settings, read_properties
from servicebus_jms.config.settings import ServiceBusJmsSettings
from servicebus_jms.connection import build_connection_options
from servicebus_jms.core.exceptions import ConfigurationError


class Colors:
    """ANSI color codes for terminal output."""

    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    NC = "\033[0m"  # No Color


def load(properties_path: str | None, prefix: str) -> ServiceBusJmsSettings:
    """Load settings from the environment, with a properties file layered on top."""
    if properties_path:
        return load_settings(read_properties(properties_path), prefix=prefix, include_environment=True)
    return ServiceBusJmsSettings()


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate Service Bus JMS settings")
    parser.add_argument("--properties", help="Path to a .properties file")
    parser.add_argument("--prefix", default="servicebus", help="Key prefix in the properties file")
    parser.add_argument("--env-file", default=".env", help="Environment file to load first")
    args = parser.parse_args()

    # Existing environment variables take precedence over the file
    load_dotenv(args.env_file)
    configure_logging()

    try:
        settings = load(args.properties, args.prefix)
        options = build_connection_options(settings)
    except (ConfigurationError, ValidationError) as e:
        print(f"{Colors.RED}[FAIL]{Colors.NC} {e}")
        return 1

    print(f"{Colors.GREEN}[OK]{Colors.NC} Service Bus JMS configuration is valid")
    print(f"  pricing tier: {settings.tier.value}")
    print(f"  remote uri:   {options.remote_uri}")
    print(f"  username:     {options.username or '-'}")
    print(f"  client id:    {options.client_id or '-'}")
    for name, value in options.prefetch.items():
        print(f"  prefetch {name}: {value}")
    for kind in ContainerKind:
        container = settings.listener.container_options(kind, client_id=settings.topic_client_id)
        print(f"  {kind.value} listener: {container}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
