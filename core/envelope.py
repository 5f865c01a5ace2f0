from __future__ import annotations

import json
from typing import Any, Dict, Optional

JSON_MIME_TYPE = "application/json"


def to_json_text(payload: Any) -> str:
    """Serialize a payload the way every envelope carries it: compact JSON text."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)


def error_payload(error: str, message: str) -> Dict[str, str]:
    return {"error": error, "message": message}


def tool_response(payload: Any) -> Dict[str, Any]:
    """Build a valid MCP tool result with a single text content item."""
    return {"content": [{"type": "text", "text": to_json_text(payload)}]}


def resource_response(uri: str, payload: Any, mime_type: str = JSON_MIME_TYPE) -> Dict[str, Any]:
    return {"contents": [{"uri": uri, "text": to_json_text(payload), "mimeType": mime_type}]}


def rpc_result(message_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": message_id, "result": result}


def rpc_error(message_id: Any, code: int, message: str, data: Optional[Any] = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": message_id, "error": error}
