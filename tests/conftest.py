import os
import sys
import pathlib

import pytest

# Ensure project root is importable in tests
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SERVICE_METHODS = [
    "fetch_daily_challenge",
    "fetch_problem",
    "fetch_problem_simplified",
    "search_problems",
    "fetch_user_profile",
    "fetch_user_contest_ranking",
    "fetch_user_recent_submissions",
    "fetch_user_recent_ac_submissions",
    "fetch_user_status",
    "fetch_user_all_submissions",
    "fetch_user_submission_detail",
    "fetch_user_progress_question_list",
    "fetch_question_solution_articles",
    "fetch_solution_article_detail",
    "submit_solution",
]


class StubService:
    """Stands in for LeetCodeService: every fetch resolves to a canned value or raises ``error``."""

    def __init__(self, result=None, error=None, authenticated=True, results=None):
        self.result = {"ok": True} if result is None else result
        self.results = dict(results or {})
        self.error = error
        self.authenticated = authenticated
        self.calls = []

    def is_authenticated(self):
        return self.authenticated

    def __getattr__(self, name):
        if name not in SERVICE_METHODS:
            raise AttributeError(name)

        async def _call(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            if self.error is not None:
                raise self.error
            return self.results.get(name, self.result)

        return _call


class RecordingServer:
    """Records register_tool/register_resource calls without dispatching."""

    def __init__(self):
        self.tools = {}
        self.resources = {}

    def register_tool(self, name, description, input_schema, handler):
        self.tools[name] = {"description": description, "inputSchema": input_schema, "handler": handler}

    def register_resource(self, name, uri_template, metadata, handler):
        self.resources[name] = {"uri": uri_template, "metadata": metadata, "handler": handler}


@pytest.fixture
def stub_service():
    return StubService()


@pytest.fixture
def recording_server():
    return RecordingServer()
