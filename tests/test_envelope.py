import json

from core.envelope import (
    JSON_MIME_TYPE,
    error_payload,
    resource_response,
    rpc_error,
    rpc_result,
    to_json_text,
    tool_response,
)


def test_tool_response_is_single_text_item():
    resp = tool_response({"a": 1, "b": [1, 2]})
    assert list(resp.keys()) == ["content"]
    assert len(resp["content"]) == 1
    item = resp["content"][0]
    assert item["type"] == "text"
    assert json.loads(item["text"]) == {"a": 1, "b": [1, 2]}


def test_json_text_is_compact_and_keeps_unicode():
    assert to_json_text({"title": "两数之和", "n": 1}) == '{"title":"两数之和","n":1}'


def test_error_payload_shape():
    resp = tool_response(error_payload("Failed to fetch problem details", "not found"))
    assert json.loads(resp["content"][0]["text"]) == {
        "error": "Failed to fetch problem details",
        "message": "not found",
    }


def test_resource_response_carries_uri_and_mime():
    resp = resource_response("problem://two-sum", {"titleSlug": "two-sum"})
    assert resp == {
        "contents": [
            {"uri": "problem://two-sum", "text": '{"titleSlug":"two-sum"}', "mimeType": JSON_MIME_TYPE}
        ]
    }


def test_rpc_helpers():
    assert rpc_result(7, {"x": 1}) == {"jsonrpc": "2.0", "id": 7, "result": {"x": 1}}
    err = rpc_error(8, -32602, "bad")
    assert err["error"] == {"code": -32602, "message": "bad"}
    assert "data" not in err["error"]
    assert rpc_error(9, -32002, "missing", {"uri": "x://y"})["error"]["data"] == {"uri": "x://y"}
