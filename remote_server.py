import json
import logging
import os
import time
from typing import Dict, Optional

from fastapi import FastAPI, Header, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import MCPServer
from core.envelope import rpc_error
from core.server import INVALID_REQUEST, PARSE_ERROR

logger = logging.getLogger(__name__)


def _env_enabled() -> bool:
    return os.getenv("REMOTE_ENABLED", "false").strip().lower() in {"1", "true", "yes", "on"}


def _get_remote_token() -> str:
    # read on every request so tests can monkeypatch the environment
    return os.getenv("MCP_REMOTE_TOKEN", "").strip()


# Simple token-bucket rate limiter per client key (token or IP)
class TokenBucket:
    def __init__(self, rate: float, burst: int):
        self.rate = rate
        self.capacity = burst
        self.tokens = burst
        self.timestamp = time.monotonic()

    def allow(self) -> bool:
        now = time.monotonic()
        elapsed = now - self.timestamp
        self.timestamp = now
        self.tokens = min(self.capacity, self.tokens + elapsed * self.rate)
        if self.tokens >= 1:
            self.tokens -= 1
            return True
        return False


def _client_key(request: Request, authorization: Optional[str]) -> str:
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1]
    return request.client.host if request.client else "unknown"


def _check_auth(authorization: Optional[str]) -> None:
    token_env = _get_remote_token()
    if token_env:
        if not authorization or not authorization.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Unauthorized: Missing Bearer token")
        token = authorization.split(" ", 1)[1]
        if token != token_env:
            raise HTTPException(status_code=401, detail="Unauthorized: Invalid token")


def create_app(server: MCPServer, *, enabled: Optional[bool] = None,
               rate_limit_rps: Optional[float] = None, rate_limit_burst: Optional[int] = None) -> FastAPI:
    """Expose ``server`` over HTTP: ``POST /rpc`` and ``WS /ws`` take raw MCP JSON-RPC messages."""
    remote_enabled = _env_enabled() if enabled is None else enabled
    rps = rate_limit_rps if rate_limit_rps is not None else float(os.getenv("RATE_LIMIT_RPS", "10"))
    burst = rate_limit_burst if rate_limit_burst is not None else int(os.getenv("RATE_LIMIT_BURST", "20"))
    buckets: Dict[str, TokenBucket] = {}

    app = FastAPI(title="LeetCode MCP Remote Server", version=server.version)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.state.mcp_server = server

    def _rate_limit(request: Request, authorization: Optional[str]) -> None:
        key = _client_key(request, authorization)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = TokenBucket(rps, burst)
            buckets[key] = bucket
        if not bucket.allow():
            raise HTTPException(status_code=429, detail="Rate limit exceeded")

    @app.post("/rpc")
    async def rpc_endpoint(request: Request, authorization: Optional[str] = Header(None)):
        if not remote_enabled:
            raise HTTPException(status_code=403, detail="Remote access disabled")
        _check_auth(authorization)
        _rate_limit(request, authorization)
        try:
            payload = await request.json()
        except ValueError:
            return JSONResponse(rpc_error(None, PARSE_ERROR, "Parse error"), status_code=400)
        if not isinstance(payload, dict):
            return JSONResponse(rpc_error(None, INVALID_REQUEST, "Invalid Request"), status_code=400)
        result = await server.handle_message(payload)
        if result is None:
            # notification: nothing to return
            return JSONResponse({}, status_code=202)
        return JSONResponse(result)

    @app.websocket("/ws")
    async def ws_endpoint(ws: WebSocket):
        if not remote_enabled:
            await ws.close(code=4403)
            return
        token_env = _get_remote_token()
        if token_env and ws.query_params.get("token") != token_env:
            await ws.close(code=4401)
            return
        await ws.accept()
        bucket = TokenBucket(rps, burst)
        try:
            while True:
                data = await ws.receive_text()
                if not bucket.allow():
                    await ws.send_text(json.dumps({"jsonrpc": "2.0", "error": {"code": 429, "message": "Rate limit exceeded"}}))
                    continue
                try:
                    payload = json.loads(data)
                except ValueError:
                    await ws.send_text(json.dumps(rpc_error(None, PARSE_ERROR, "Parse error")))
                    continue
                result = await server.handle_message(payload)
                if result is not None:
                    await ws.send_text(json.dumps(result, ensure_ascii=False))
        except WebSocketDisconnect:
            logger.debug("WebSocket client disconnected")

    return app


async def serve(server: MCPServer) -> None:
    app = create_app(server, enabled=True)
    bind = os.getenv("REMOTE_BIND", "127.0.0.1:8787")
    host, port = bind.split(":", 1)
    import uvicorn

    config = uvicorn.Config(app, host=host, port=int(port), log_level="info")
    logger.info("Serving MCP over HTTP on %s:%s", host, port)
    await uvicorn.Server(config).serve()
