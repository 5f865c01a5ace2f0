import asyncio
import json

from conftest import RecordingServer, StubService
from core import MCPServer
from handlers.registry import register_leetcode_resources, register_leetcode_tools

EXPECTED_TOOLS = [
    "get_daily_challenge",
    "get_problem",
    "search_problems",
    "get_user_contest_ranking",
    "list_problem_solutions",
    "get_problem_solution",
    "get_user_profile",
    "get_recent_submissions",
    "get_recent_ac_submissions",
    "get_user_status",
    "get_all_submissions",
    "get_problem_submission_report",
    "get_problem_progress",
]

EXPECTED_RESOURCES = {
    "problem-categories": "categories://problems/all",
    "problem-tags": "tags://problems/all",
    "problem-langs": "langs://problems/all",
    "problem-detail": "problem://{titleSlug}",
    "problem-solution": "solution://{topicId}",
}


def test_register_tools_in_order(recording_server, stub_service):
    register_leetcode_tools(recording_server, stub_service)
    assert list(recording_server.tools) == EXPECTED_TOOLS
    for meta in recording_server.tools.values():
        assert meta["description"]
        assert meta["inputSchema"]["type"] == "object"


def test_submit_tool_is_opt_in(stub_service):
    off, on = RecordingServer(), RecordingServer()
    register_leetcode_tools(off, stub_service)
    register_leetcode_tools(on, stub_service, enable_submit=True)
    assert "submit_solution" not in off.tools
    assert list(on.tools)[-1] == "submit_solution"


def test_register_resources(recording_server, stub_service):
    register_leetcode_resources(recording_server, stub_service)
    assert {name: meta["uri"] for name, meta in recording_server.resources.items()} == EXPECTED_RESOURCES
    for meta in recording_server.resources.values():
        assert meta["metadata"]["mimeType"] == "application/json"


def test_registration_is_idempotent_across_dispatchers(stub_service):
    first, second = RecordingServer(), RecordingServer()
    for server in (first, second):
        register_leetcode_tools(server, stub_service)
        register_leetcode_resources(server, stub_service)
    def tool_set(server):
        return [(n, m["description"], m["inputSchema"]) for n, m in server.tools.items()]

    def resource_set(server):
        return [(n, m["uri"], m["metadata"]) for n, m in server.resources.items()]

    assert tool_set(first) == tool_set(second)
    assert resource_set(first) == resource_set(second)
    assert all(m["metadata"]["description"] for m in first.resources.values())


def test_end_to_end_through_dispatcher():
    service = StubService(results={"fetch_problem": {"title": "Two Sum"},
                                   "fetch_problem_simplified": {"title": "Two Sum"}})
    server = MCPServer()
    register_leetcode_tools(server, service)
    register_leetcode_resources(server, service)

    listed = asyncio.run(server.handle_message({"jsonrpc": "2.0", "id": 1, "method": "tools/list"}))
    assert [t["name"] for t in listed["result"]["tools"]] == EXPECTED_TOOLS

    called = asyncio.run(server.handle_message({"jsonrpc": "2.0", "id": 2, "method": "tools/call",
                                                "params": {"name": "get_problem",
                                                           "arguments": {"titleSlug": "two-sum"}}}))
    text = called["result"]["content"][0]["text"]
    assert json.loads(text) == {"titleSlug": "two-sum", "problem": {"title": "Two Sum"}}

    read = asyncio.run(server.handle_message({"jsonrpc": "2.0", "id": 3, "method": "resources/read",
                                              "params": {"uri": "problem://two-sum"}}))
    assert read["result"]["contents"][0]["text"] == '{"titleSlug":"two-sum","problem":{"title":"Two Sum"}}'

    static = asyncio.run(server.handle_message({"jsonrpc": "2.0", "id": 4, "method": "resources/list"}))
    assert [r["name"] for r in static["result"]["resources"]] == ["problem-categories", "problem-tags",
                                                                   "problem-langs"]


def test_search_problems_rejects_unknown_tag_before_upstream():
    service = StubService()
    server = MCPServer()
    register_leetcode_tools(server, service)
    resp = asyncio.run(server.handle_message({"jsonrpc": "2.0", "id": 5, "method": "tools/call",
                                              "params": {"name": "search_problems",
                                                         "arguments": {"tags": ["not-a-tag"]}}}))
    assert resp["error"]["code"] == -32602
    assert service.calls == []
