import asyncio
import json

import pytest

from conftest import StubService
from handlers.registry import build_leetcode_resources
from leetcode.constants import PROBLEM_CATEGORIES, PROBLEM_TAGS, PROGRAMMING_LANGS

STATIC = {
    "problem-categories": ("categories://problems/all", PROBLEM_CATEGORIES),
    "problem-tags": ("tags://problems/all", PROBLEM_TAGS),
    "problem-langs": ("langs://problems/all", PROGRAMMING_LANGS),
}


def _resources(service):
    return {r.name: r for r in build_leetcode_resources(service)}


@pytest.mark.parametrize("name", sorted(STATIC))
def test_static_resources_list_constants(name):
    uri, expected = STATIC[name]
    service = StubService()
    resp = asyncio.run(_resources(service)[name].handle(uri, {}))
    item = resp["contents"][0]
    assert item["uri"] == uri
    assert item["mimeType"] == "application/json"
    assert json.loads(item["text"]) == list(expected)
    assert service.calls == []


def test_problem_detail_exact_text():
    service = StubService(results={"fetch_problem": {"title": "Two Sum"}})
    resp = asyncio.run(_resources(service)["problem-detail"].handle("problem://two-sum", {"titleSlug": "two-sum"}))
    assert resp == {
        "contents": [
            {
                "uri": "problem://two-sum",
                "text": '{"titleSlug":"two-sum","problem":{"title":"Two Sum"}}',
                "mimeType": "application/json",
            }
        ]
    }
    assert service.calls[0][:2] == ("fetch_problem", ("two-sum",))


def test_problem_solution_resource():
    service = StubService(results={"fetch_solution_article_detail": {"title": "Hash map"}})
    resp = asyncio.run(_resources(service)["problem-solution"].handle("solution://99", {"topicId": "99"}))
    assert json.loads(resp["contents"][0]["text"]) == {"topicId": "99", "solution": {"title": "Hash map"}}


@pytest.mark.parametrize("name,uri,variables,error", [
    ("problem-detail", "problem://nope", {"titleSlug": "nope"}, "Failed to fetch problem detail"),
    ("problem-solution", "solution://1", {"topicId": "1"}, "Failed to fetch solution"),
])
def test_dynamic_resource_error_envelope(name, uri, variables, error):
    service = StubService(error=RuntimeError("boom"))
    resp = asyncio.run(_resources(service)[name].handle(uri, variables))
    assert len(resp["contents"]) == 1
    assert resp["contents"][0]["uri"] == uri
    assert json.loads(resp["contents"][0]["text"]) == {"error": error, "message": "boom"}
