import asyncio
import json

import pytest

import leetcode.service as service_module
from leetcode import AuthenticationRequiredError, LeetCodeService, LeetCodeServiceError


def _service(monkeypatch, graphql=None, rest=None, csrf="csrf-token"):
    """Build an initialized service whose transport methods return canned data."""
    service = LeetCodeService("session-cookie", csrf)
    asyncio.run(service.init())
    calls = []

    async def fake_graphql(query, variables=None):
        calls.append(("graphql", variables))
        return graphql(query, variables) if callable(graphql) else (graphql or {})

    async def fake_request_json(method, path, *, json_data=None, params=None, referer=None):
        calls.append((method, path, params, json_data))
        return rest(method, path) if callable(rest) else rest

    monkeypatch.setattr(service, "_graphql", fake_graphql)
    monkeypatch.setattr(service, "_request_json", fake_request_json)
    return service, calls


def test_blank_session_rejected():
    with pytest.raises(ValueError):
        LeetCodeService("   ")
    with pytest.raises(ValueError):
        asyncio.run(LeetCodeService.create(""))


def test_create_wraps_init_failure(monkeypatch):
    async def failing_fetch(self):
        raise LeetCodeServiceError("no cookie")

    monkeypatch.setattr(LeetCodeService, "_fetch_csrf_token", failing_fetch)
    with pytest.raises(LeetCodeServiceError) as exc:
        asyncio.run(LeetCodeService.create("session-cookie"))
    assert "Failed to initialize LeetCodeService" in str(exc.value)


def test_init_with_csrf_is_authenticated_without_network():
    service = LeetCodeService("session-cookie", "csrf")
    assert not service.is_authenticated()
    asyncio.run(service.init())
    assert service.is_authenticated()
    headers = service._headers()
    assert headers["x-csrftoken"] == "csrf"
    assert "LEETCODE_SESSION=session-cookie" in headers["Cookie"]


def test_daily_challenge(monkeypatch):
    service, _ = _service(monkeypatch, graphql={"activeDailyCodingChallengeQuestion": {"link": "/problems/x/"}})
    assert asyncio.run(service.fetch_daily_challenge()) == {"link": "/problems/x/"}


def test_problem_simplified(monkeypatch):
    question = {
        "questionId": "1",
        "title": "Two Sum",
        "content": "<p>...</p>",
        "difficulty": "Easy",
        "topicTags": [{"name": "Array", "slug": "array"}, {"name": "Hash Table", "slug": "hash-table"}],
        "codeSnippets": [{"langSlug": "python3", "code": "..."}, {"langSlug": "rust", "code": "..."}],
        "exampleTestcases": "[2,7,11,15]\n9",
        "hints": ["use a map"],
        "similarQuestions": json.dumps([
            {"titleSlug": "3sum", "difficulty": "Medium"},
            {"titleSlug": "4sum", "difficulty": "Medium"},
            {"titleSlug": "two-sum-ii", "difficulty": "Medium"},
            {"titleSlug": "two-sum-iii", "difficulty": "Easy"},
        ]),
    }
    service, _ = _service(monkeypatch, graphql={"question": question})
    result = asyncio.run(service.fetch_problem_simplified("two-sum"))
    assert result["topicTags"] == ["array", "hash-table"]
    assert [s["langSlug"] for s in result["codeSnippets"]] == ["python3"]
    assert [q["titleSlug"] for q in result["similarQuestions"]] == ["3sum", "4sum", "two-sum-ii"]


def test_problem_simplified_bad_similar_questions(monkeypatch):
    service, _ = _service(monkeypatch, graphql={"question": {"title": "X", "similarQuestions": "not json"}})
    assert asyncio.run(service.fetch_problem_simplified("x"))["similarQuestions"] == []


def test_problem_simplified_missing(monkeypatch):
    service, _ = _service(monkeypatch, graphql={"question": None})
    with pytest.raises(LeetCodeServiceError, match="Problem ghost not found"):
        asyncio.run(service.fetch_problem_simplified("ghost"))


def test_search_problems_filters(monkeypatch):
    data = {"problemsetQuestionList": {"total": 1, "questions": [
        {"title": "Two Sum", "titleSlug": "two-sum", "difficulty": "Easy", "acRate": 50.0,
         "topicTags": [{"slug": "array"}]},
    ]}}
    service, calls = _service(monkeypatch, graphql=data)
    result = asyncio.run(service.search_problems(category="algorithms", tags=["array"], difficulty="easy",
                                                 limit=5, offset=10, search_keywords="sum"))
    assert result == {"total": 1, "questions": [{"title": "Two Sum", "titleSlug": "two-sum", "difficulty": "Easy",
                                                 "acRate": 50.0, "topicTags": ["array"]}]}
    variables = calls[0][1]
    assert variables["categorySlug"] == "algorithms"
    assert variables["skip"] == 10 and variables["limit"] == 5
    assert variables["filters"] == {"difficulty": "EASY", "tags": ["array"], "searchKeywords": "sum"}


def test_search_problems_empty(monkeypatch):
    service, _ = _service(monkeypatch, graphql={})
    assert asyncio.run(service.search_problems()) == {"total": 0, "questions": []}


def test_contest_ranking_filters_attended(monkeypatch):
    data = {"userContestRanking": {"rating": 1500},
            "userContestRankingHistory": [{"attended": True, "contest": {"title": "A"}},
                                          {"attended": False, "contest": {"title": "B"}}]}
    service, _ = _service(monkeypatch, graphql=lambda q, v: json.loads(json.dumps(data)))
    attended = asyncio.run(service.fetch_user_contest_ranking("alice"))
    assert [c["contest"]["title"] for c in attended["userContestRankingHistory"]] == ["A"]
    everything = asyncio.run(service.fetch_user_contest_ranking("alice", attended=False))
    assert len(everything["userContestRankingHistory"]) == 2


def test_auth_required_operations(monkeypatch):
    service = LeetCodeService("session-cookie")
    with pytest.raises(AuthenticationRequiredError):
        asyncio.run(service.fetch_user_status())
    with pytest.raises(AuthenticationRequiredError):
        asyncio.run(service.submit_solution("code", "python3", "1", "two-sum"))


def test_user_status(monkeypatch):
    service, _ = _service(monkeypatch, graphql={"userStatus": {"isSignedIn": True, "username": "alice"}})
    assert asyncio.run(service.fetch_user_status()) == {
        "isSignedIn": True, "username": "alice", "avatar": "", "isAdmin": False, "isPremium": False,
    }


def test_all_submissions_local_filters(monkeypatch):
    body = {"submissions_dump": [
        {"id": 1, "lang": "python3", "status_display": "Accepted"},
        {"id": 2, "lang": "cpp", "status_display": "Accepted"},
        {"id": 3, "lang": "python3", "status_display": "Wrong Answer"},
    ], "has_next": True, "last_key": "k"}
    service, calls = _service(monkeypatch, rest=body)
    result = asyncio.run(service.fetch_user_all_submissions(limit=20, question_slug="two-sum", lang="python3",
                                                            status="AC"))
    assert [s["id"] for s in result["submissions"]] == [1]
    assert result["hasNext"] is True and result["lastKey"] == "k"
    method, path, params, _ = calls[0]
    assert (method, path) == ("GET", "/api/submissions/")
    assert params == {"offset": 0, "limit": 20, "question__slug": "two-sum"}


def test_solution_articles_keep_visible_nodes(monkeypatch):
    data = {"ugcArticleSolutionArticles": {
        "totalNum": 2,
        "pageInfo": {"hasNextPage": True},
        "edges": [
            {"node": {"topicId": 10, "slug": "hash-map", "canSee": True}},
            {"node": {"topicId": 11, "slug": "hidden", "canSee": False}},
        ],
    }}
    service, calls = _service(monkeypatch, graphql=data)
    result = asyncio.run(service.fetch_question_solution_articles("two-sum", {"limit": 3}))
    assert result["totalNum"] == 2 and result["hasNextPage"] is True
    assert [a["topicId"] for a in result["articles"]] == [10]
    assert result["articles"][0]["articleUrl"] == "https://leetcode.com/problems/two-sum/solutions/10/hash-map"
    assert calls[0][1]["first"] == 3 and calls[0][1]["orderBy"] == "HOT"


def test_solution_articles_empty(monkeypatch):
    service, _ = _service(monkeypatch, graphql={})
    assert asyncio.run(service.fetch_question_solution_articles("two-sum")) == {
        "totalNum": 0, "hasNextPage": False, "articles": [],
    }


def test_submit_solution_polls_until_success(monkeypatch):
    monkeypatch.setattr(service_module, "SUBMISSION_POLL_INTERVAL", 0)
    polls = iter([{"state": "PENDING"}, {"state": "STARTED"},
                  {"state": "SUCCESS", "status_msg": "Accepted", "status_runtime": "3 ms",
                   "total_correct": 63, "total_testcases": 63}])

    def rest(method, path):
        if method == "POST":
            return {"submission_id": 555}
        return next(polls)

    service, calls = _service(monkeypatch, rest=rest)
    result = asyncio.run(service.submit_solution("code", "python3", "1", "two-sum"))
    assert result["submissionId"] == 555
    assert result["accepted"] is True and result["runtime"] == "3 ms"
    assert calls[0][1] == "/problems/two-sum/submit/"
    assert calls[0][3] == {"lang": "python3", "question_id": "1", "typed_code": "code"}
    assert len(calls) == 4


def test_submit_solution_times_out(monkeypatch):
    monkeypatch.setattr(service_module, "SUBMISSION_POLL_INTERVAL", 0)
    monkeypatch.setattr(service_module, "SUBMISSION_POLL_ATTEMPTS", 2)

    def rest(method, path):
        return {"submission_id": 9} if method == "POST" else {"state": "PENDING"}

    service, _ = _service(monkeypatch, rest=rest)
    result = asyncio.run(service.submit_solution("code", "python3", "1", "two-sum"))
    assert result == {"submissionId": 9, "status": "PENDING", "message": "Timed out waiting for submission result"}


def test_graphql_errors_raise(monkeypatch):
    service = LeetCodeService("session-cookie", "csrf")

    async def fake_request_json(method, path, **kwargs):
        return {"errors": [{"message": "That user does not exist."}]}

    monkeypatch.setattr(service, "_request_json", fake_request_json)
    with pytest.raises(LeetCodeServiceError, match="That user does not exist."):
        asyncio.run(service.fetch_user_profile("ghost"))


def test_solution_articles_limit_defaults_and_zero(monkeypatch):
    service, calls = _service(monkeypatch, graphql={})
    asyncio.run(service.fetch_question_solution_articles("two-sum"))
    asyncio.run(service.fetch_question_solution_articles("two-sum", {"limit": 0}))
    assert calls[0][1]["first"] == 10
    assert calls[1][1]["first"] == 0
