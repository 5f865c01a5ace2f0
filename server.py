"""LeetCode MCP server entry point.

Startup order: parse config, configure logging, build the shared
LeetCodeService, create the dispatcher, register tools and resources, then
serve MCP over stdio (or HTTP when ``--transport=http``).
"""
from __future__ import annotations

import asyncio
import json
import logging
import sys
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Dict, List, Optional, Tuple

from config import USAGE, ConfigError, ServerConfig
from core import MCPServer
from core.envelope import rpc_error
from core.server import PARSE_ERROR
from handlers.registry import register_leetcode_resources, register_leetcode_tools
from leetcode import LeetCodeService
from observability.metrics import metrics_content_type, metrics_payload_bytes

SERVER_NAME = "leetcode-mcp-server"
SERVER_VERSION = "1.0.0"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    # stdout carries the protocol; logs always go to stderr
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        stream=sys.stderr,
        format=LOG_FORMAT,
        force=True,
    )


async def build_server(config: ServerConfig) -> Tuple[MCPServer, LeetCodeService]:
    """Create the service and dispatcher and register every unit.

    Any failure here is a startup fault: the service is closed and the
    exception propagates so nothing is served.
    """
    service = await LeetCodeService.create(
        config.session, config.csrf, base_url=config.base_url, timeout=config.timeout
    )
    try:
        server = MCPServer(SERVER_NAME, SERVER_VERSION)
        register_leetcode_tools(server, service, enable_submit=config.enable_submit)
        register_leetcode_resources(server, service)
    except Exception:
        await service.close()
        raise
    return server, service


# --- /metrics exporter ---

class _MetricsHandler(BaseHTTPRequestHandler):
    def do_GET(self):  # noqa: N802
        if self.path != "/metrics":
            self.send_response(404)
            self.end_headers()
            return
        body = metrics_payload_bytes()
        self.send_response(200)
        self.send_header("Content-Type", metrics_content_type())
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):  # noqa: A002
        logger.debug("metrics: " + format, *args)


def start_metrics_exporter(bind: str) -> Optional[threading.Thread]:
    host, port = bind.split(":", 1)

    def _serve_metrics():
        try:
            httpd = HTTPServer((host, int(port)), _MetricsHandler)
            httpd.serve_forever()
        except Exception as e:
            logger.warning("Metrics server disabled: %s", e)

    thread = threading.Thread(target=_serve_metrics, name="metrics-http", daemon=True)
    thread.start()
    logger.info("/metrics exporter on http://%s:%s/metrics", host, port)
    return thread


# --- stdio transport ---

class StdioTransport:
    """Reads MCP messages from stdin and writes responses to stdout.

    Accepts both newline-delimited JSON and ``Content-Length`` framed
    messages; once a framed message is seen, responses are framed too.
    """

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.use_headers = False
        self._write_lock = threading.Lock()

    def read_message(self) -> Optional[bytes]:
        """Blocking read of one message body; returns None at EOF."""
        while True:
            line = self.stdin.readline()
            if not line:
                return None
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.lower().startswith(b"content-length:"):
                self.use_headers = True
                length = int(stripped.split(b":", 1)[1].strip())
                # consume remaining headers until blank line
                while True:
                    header = self.stdin.readline()
                    if not header or header in (b"\r\n", b"\n"):
                        break
                return self.stdin.read(length)
            return stripped

    def send(self, obj: Dict[str, Any]) -> None:
        body = json.dumps(obj, ensure_ascii=False).encode("utf-8")
        with self._write_lock:
            if self.use_headers:
                self.stdout.write(f"Content-Length: {len(body)}\r\n\r\n".encode("utf-8"))
                self.stdout.write(body)
            else:
                self.stdout.write(body + b"\n")
            self.stdout.flush()


async def _dispatch(server: MCPServer, transport: StdioTransport, message: Any) -> None:
    try:
        response = await server.handle_message(message)
    except Exception as e:
        logger.error("Error processing message: %s", e)
        return
    if response is not None:
        transport.send(response)


async def serve_stdio(server: MCPServer, transport: Optional[StdioTransport] = None) -> None:
    """Serve until stdin closes; each request runs as its own task."""
    transport = transport or StdioTransport()
    loop = asyncio.get_running_loop()
    pending: List[asyncio.Task] = []
    logger.info("Serving MCP over stdio")
    while True:
        try:
            raw = await loop.run_in_executor(None, transport.read_message)
        except ValueError as e:
            logger.error("Header parse error: %s", e)
            continue
        if raw is None:
            break
        try:
            message = json.loads(raw.decode("utf-8", errors="replace"))
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON received: %s", e)
            transport.send(rpc_error(None, PARSE_ERROR, "Parse error"))
            continue
        pending = [t for t in pending if not t.done()]
        pending.append(asyncio.create_task(_dispatch(server, transport, message)))
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
    logger.info("stdin closed, shutting down")


async def run(config: ServerConfig) -> None:
    server, service = await build_server(config)
    try:
        if config.transport == "http":
            import remote_server

            await remote_server.serve(server)
        else:
            await serve_stdio(server)
    finally:
        await service.close()


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the LeetCode MCP server."""
    argv = sys.argv[1:] if argv is None else argv
    try:
        config = ServerConfig.from_env(argv)
    except ConfigError as e:
        configure_logging()
        logger.error("Configuration error: %s", e)
        print(f"Error: {e}\n\n{USAGE}", file=sys.stderr)
        sys.exit(1)

    if config.show_help:
        print(USAGE)
        sys.exit(0)

    configure_logging(config.log_level)
    logger.info("LeetCode MCP Server v%s starting...", SERVER_VERSION)
    logger.info("Upstream: %s (submit tool %s)", config.base_url,
                "enabled" if config.enable_submit else "disabled")

    if config.metrics_exporter:
        start_metrics_exporter(config.metrics_bind)

    try:
        asyncio.run(run(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception as e:
        logger.error("Server startup error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
