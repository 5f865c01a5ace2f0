"""Process configuration for the LeetCode MCP server.

Values come from environment variables and may be overridden by
``--key=value`` (or ``--key value``) command-line flags.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

TRUTHY = {"1", "true", "yes", "on"}
TRANSPORTS = ("stdio", "http")

USAGE = """\
Usage: leetcode-mcp-server [--session=<cookie>] [--csrf=<token>] [--transport=stdio|http]

Options:
  --session   LeetCode session cookie (or LEETCODE_SESSION)
  --csrf      LeetCode CSRF token (or LEETCODE_CSRF); fetched automatically when omitted
  --transport stdio (default) or http (or MCP_TRANSPORT)
  --help      Show this message and exit

Environment:
  LEETCODE_BASE_URL       Upstream site (default https://leetcode.com)
  HTTP_READ_TIMEOUT       Upstream request timeout in seconds (default 30)
  LOG_LEVEL               Logging level (default INFO)
  LEETCODE_ENABLE_SUBMIT  Register the submit_solution tool (default off)
  METRICS_EXPORTER        Serve Prometheus metrics over HTTP (default off)
  METRICS_BIND            host:port for the metrics exporter (default 127.0.0.1:9099)
"""


class ConfigError(Exception):
    pass


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


def parse_cli_flags(argv: Sequence[str]) -> Dict[str, str]:
    """Collect ``--key=value`` and ``--key value`` pairs; bare flags map to ``"true"``."""
    flags: Dict[str, str] = {}
    i = 0
    args = list(argv)
    while i < len(args):
        arg = args[i]
        i += 1
        if not arg.startswith("--"):
            continue
        key = arg[2:]
        if "=" in key:
            key, value = key.split("=", 1)
        elif i < len(args) and not args[i].startswith("--"):
            value = args[i]
            i += 1
        else:
            value = "true"
        flags[key] = value
    return flags


@dataclass
class ServerConfig:
    session: str
    csrf: Optional[str] = None
    base_url: str = "https://leetcode.com"
    timeout: float = 30.0
    log_level: str = "INFO"
    enable_submit: bool = False
    transport: str = "stdio"
    metrics_exporter: bool = False
    metrics_bind: str = "127.0.0.1:9099"
    show_help: bool = False

    @classmethod
    def from_env(cls, argv: Optional[List[str]] = None) -> "ServerConfig":
        flags = parse_cli_flags(argv or [])
        if "help" in flags:
            return cls(session="", show_help=True)

        session = (flags.get("session") or os.getenv("LEETCODE_SESSION", "")).strip()
        if not session:
            raise ConfigError(
                "LeetCode session is required: set LEETCODE_SESSION or pass --session=<cookie>"
            )
        csrf = (flags.get("csrf") or os.getenv("LEETCODE_CSRF", "")).strip() or None

        transport = (flags.get("transport") or os.getenv("MCP_TRANSPORT", "stdio")).strip().lower()
        if transport not in TRANSPORTS:
            raise ConfigError(f"Unsupported transport: {transport}")

        raw_timeout = os.getenv("HTTP_READ_TIMEOUT", "30")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"HTTP_READ_TIMEOUT must be a number, got {raw_timeout!r}")

        return cls(
            session=session,
            csrf=csrf,
            base_url=os.getenv("LEETCODE_BASE_URL", "https://leetcode.com").rstrip("/"),
            timeout=timeout,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            enable_submit=env_flag("LEETCODE_ENABLE_SUBMIT"),
            transport=transport,
            metrics_exporter=env_flag("METRICS_EXPORTER"),
            metrics_bind=os.getenv("METRICS_BIND", "127.0.0.1:9099"),
        )
