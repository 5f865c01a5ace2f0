from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from .constants import SNIPPET_LANGS
from .queries import (
    DAILY_CHALLENGE_QUERY,
    PROBLEM_QUERY,
    RECENT_AC_SUBMISSIONS_QUERY,
    RECENT_SUBMISSIONS_QUERY,
    SEARCH_PROBLEMS_QUERY,
    SOLUTION_ARTICLE_DETAIL_QUERY,
    SOLUTION_ARTICLES_QUERY,
    SUBMISSION_DETAIL_QUERY,
    USER_CONTEST_QUERY,
    USER_PROFILE_QUERY,
    USER_PROGRESS_QUESTIONS_QUERY,
    USER_STATUS_QUERY,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://leetcode.com"
DEFAULT_TIMEOUT = 30.0

SUBMISSION_POLL_ATTEMPTS = 10
SUBMISSION_POLL_INTERVAL = 1.0


class LeetCodeServiceError(Exception):
    """Raised when LeetCode rejects a request or returns an unusable payload."""


class AuthenticationRequiredError(LeetCodeServiceError):
    pass


class LeetCodeService:
    """Async access to the LeetCode GraphQL and REST endpoints.

    Instances are created with :meth:`create`, which validates the session
    cookie and resolves the CSRF token before anything else touches the
    network. One instance is shared (read-only) by every tool and resource.
    """

    def __init__(self, session_cookie: str, csrf_token: Optional[str] = None,
                 base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT):
        if not session_cookie or not session_cookie.strip():
            raise ValueError("Session cookie cannot be empty.")
        self.session_cookie = session_cookie.strip()
        self.csrf_token = (csrf_token or "").strip() or None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.aio_session: Optional[aiohttp.ClientSession] = None
        self._initialized = False

    @classmethod
    async def create(cls, session_cookie: str, csrf_token: Optional[str] = None, *,
                     base_url: str = DEFAULT_BASE_URL,
                     timeout: float = DEFAULT_TIMEOUT) -> "LeetCodeService":
        """Build and initialize a service; fails fast on a missing session."""
        logger.info("Creating LeetCodeService for %s", base_url)
        if not session_cookie or not session_cookie.strip():
            raise ValueError("Session cookie cannot be empty for LeetCodeService initialization.")
        service = cls(session_cookie, csrf_token, base_url=base_url, timeout=timeout)
        try:
            await service.init()
        except Exception as e:
            await service.close()
            raise LeetCodeServiceError(f"Failed to initialize LeetCodeService: {e}") from e
        logger.info("LeetCodeService initialized (authenticated=%s)", service.is_authenticated())
        return service

    async def init(self) -> None:
        if self._initialized:
            logger.warning("LeetCodeService already initialized, skipping")
            return
        if not self.csrf_token:
            self.csrf_token = await self._fetch_csrf_token()
        self._initialized = True

    def is_authenticated(self) -> bool:
        return self._initialized and bool(self.session_cookie) and bool(self.csrf_token)

    async def close(self) -> None:
        if self.aio_session is not None:
            await self.aio_session.close()
            self.aio_session = None

    # --- HTTP plumbing ---

    def _get_session(self) -> aiohttp.ClientSession:
        if self.aio_session is None or self.aio_session.closed:
            self.aio_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self.aio_session

    def _headers(self, referer: Optional[str] = None) -> Dict[str, str]:
        cookies = [f"LEETCODE_SESSION={self.session_cookie}"]
        headers = {
            "Content-Type": "application/json",
            "Origin": self.base_url,
            "Referer": referer or f"{self.base_url}/",
            "User-Agent": "Mozilla/5.0 leetcode-mcp-server",
        }
        if self.csrf_token:
            cookies.append(f"csrftoken={self.csrf_token}")
            headers["x-csrftoken"] = self.csrf_token
        headers["Cookie"] = "; ".join(cookies)
        return headers

    async def _fetch_csrf_token(self) -> str:
        session = self._get_session()
        try:
            async with session.get(f"{self.base_url}/graphql/", headers=self._headers()) as response:
                morsel = response.cookies.get("csrftoken")
                if morsel is not None and morsel.value:
                    return morsel.value
        except asyncio.TimeoutError:
            raise LeetCodeServiceError("Request timeout while fetching CSRF token")
        except aiohttp.ClientError as e:
            raise LeetCodeServiceError(f"Request failed: {e}") from e
        raise LeetCodeServiceError("LeetCode did not return a csrftoken cookie")

    async def _request_json(self, method: str, path: str, *, json_data: Optional[dict] = None,
                            params: Optional[dict] = None, referer: Optional[str] = None) -> Any:
        url = f"{self.base_url}{path}"
        session = self._get_session()
        try:
            async with session.request(method, url, json=json_data, params=params,
                                       headers=self._headers(referer)) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise LeetCodeServiceError(f"HTTP {response.status}: {error_text[:200]}")
                return await response.json(content_type=None)
        except asyncio.TimeoutError:
            raise LeetCodeServiceError(f"Request timeout for {method} {path}")
        except aiohttp.ClientError as e:
            raise LeetCodeServiceError(f"Request failed: {e}") from e

    async def _graphql(self, query: str, variables: Optional[dict] = None) -> Dict[str, Any]:
        body = await self._request_json("POST", "/graphql/", json_data={"query": query, "variables": variables or {}})
        if not isinstance(body, dict):
            raise LeetCodeServiceError("Malformed GraphQL response")
        errors = body.get("errors")
        if errors:
            first = errors[0] if isinstance(errors, list) and errors else errors
            message = first.get("message") if isinstance(first, dict) else str(first)
            raise LeetCodeServiceError(f"GraphQL error: {message}")
        return body.get("data") or {}

    def _require_auth(self, action: str) -> None:
        if not self.is_authenticated():
            raise AuthenticationRequiredError(f"Authentication required to {action}")

    # --- Problems ---

    async def fetch_daily_challenge(self) -> Any:
        logger.debug("Fetching daily challenge")
        data = await self._graphql(DAILY_CHALLENGE_QUERY)
        return data.get("activeDailyCodingChallengeQuestion")

    async def fetch_problem(self, title_slug: str) -> Any:
        logger.debug("Fetching problem %s", title_slug)
        data = await self._graphql(PROBLEM_QUERY, {"titleSlug": title_slug})
        return data.get("question")

    async def fetch_problem_simplified(self, title_slug: str) -> Dict[str, Any]:
        problem = await self.fetch_problem(title_slug)
        if not problem:
            raise LeetCodeServiceError(f"Problem {title_slug} not found")

        topic_tags = [tag.get("slug") for tag in problem.get("topicTags") or []]
        code_snippets = [s for s in problem.get("codeSnippets") or [] if s.get("langSlug") in SNIPPET_LANGS]

        similar: List[Dict[str, Any]] = []
        raw_similar = problem.get("similarQuestions")
        if raw_similar:
            try:
                similar = [
                    {"titleSlug": q.get("titleSlug"), "difficulty": q.get("difficulty")}
                    for q in json.loads(raw_similar)[:3]
                ]
            except (ValueError, TypeError, AttributeError) as e:
                logger.error("Error parsing similarQuestions for %s: %s", title_slug, e)

        return {
            "titleSlug": title_slug,
            "questionId": problem.get("questionId"),
            "title": problem.get("title"),
            "content": problem.get("content"),
            "difficulty": problem.get("difficulty"),
            "topicTags": topic_tags,
            "codeSnippets": code_snippets,
            "exampleTestcases": problem.get("exampleTestcases"),
            "hints": problem.get("hints"),
            "similarQuestions": similar,
        }

    async def search_problems(self, category: Optional[str] = None, tags: Optional[List[str]] = None,
                              difficulty: Optional[str] = None, limit: int = 10, offset: int = 0,
                              search_keywords: Optional[str] = None) -> Dict[str, Any]:
        filters: Dict[str, Any] = {}
        if difficulty:
            filters["difficulty"] = difficulty.upper()
        if tags:
            filters["tags"] = tags
        if search_keywords:
            filters["searchKeywords"] = search_keywords
        data = await self._graphql(SEARCH_PROBLEMS_QUERY, {
            "categorySlug": category,
            "limit": limit,
            "skip": offset,
            "filters": filters,
        })
        question_list = data.get("problemsetQuestionList")
        if not question_list:
            return {"total": 0, "questions": []}
        return {
            "total": question_list.get("total"),
            "questions": [
                {
                    "title": q.get("title"),
                    "titleSlug": q.get("titleSlug"),
                    "difficulty": q.get("difficulty"),
                    "acRate": q.get("acRate"),
                    "topicTags": [t.get("slug") for t in q.get("topicTags") or []],
                }
                for q in question_list.get("questions") or []
            ],
        }

    # --- Users ---

    async def fetch_user_profile(self, username: str) -> Any:
        data = await self._graphql(USER_PROFILE_QUERY, {"username": username})
        matched = data.get("matchedUser")
        if not matched:
            return data
        profile = matched.get("profile") or {}
        return {
            "username": matched.get("username"),
            "realName": profile.get("realName"),
            "userAvatar": profile.get("userAvatar"),
            "countryName": profile.get("countryName"),
            "githubUrl": matched.get("githubUrl"),
            "company": profile.get("company"),
            "school": profile.get("school"),
            "ranking": profile.get("ranking"),
            "totalSubmissionNum": (matched.get("submitStats") or {}).get("totalSubmissionNum"),
        }

    async def fetch_user_contest_ranking(self, username: str, attended: bool = True) -> Dict[str, Any]:
        data = await self._graphql(USER_CONTEST_QUERY, {"username": username})
        history = data.get("userContestRankingHistory")
        if history and attended:
            data["userContestRankingHistory"] = [c for c in history if c and c.get("attended")]
        return data

    async def fetch_user_recent_submissions(self, username: str, limit: Optional[int] = None) -> Any:
        data = await self._graphql(RECENT_SUBMISSIONS_QUERY, {"username": username, "limit": limit})
        return data.get("recentSubmissionList")

    async def fetch_user_recent_ac_submissions(self, username: str, limit: Optional[int] = None) -> Any:
        data = await self._graphql(RECENT_AC_SUBMISSIONS_QUERY, {"username": username, "limit": limit})
        return data.get("recentAcSubmissionList")

    async def fetch_user_status(self) -> Dict[str, Any]:
        self._require_auth("fetch user status")
        data = await self._graphql(USER_STATUS_QUERY)
        status = data.get("userStatus") or {}
        return {
            "isSignedIn": status.get("isSignedIn", False),
            "username": status.get("username") or "",
            "avatar": status.get("avatar") or "",
            "isAdmin": status.get("isAdmin", False),
            "isPremium": status.get("isPremium", False),
        }

    async def fetch_user_all_submissions(self, offset: int = 0, limit: int = 20,
                                         question_slug: Optional[str] = None,
                                         last_key: Optional[str] = None,
                                         lang: Optional[str] = None,
                                         status: Optional[str] = None) -> Dict[str, Any]:
        self._require_auth("fetch user submissions")
        params: Dict[str, Any] = {"offset": offset, "limit": limit}
        if question_slug:
            params["question__slug"] = question_slug
        if last_key:
            params["lastkey"] = last_key
        body = await self._request_json("GET", "/api/submissions/", params=params)
        submissions = body.get("submissions_dump") or []
        # The REST endpoint has no lang/status filters; apply them locally
        if lang:
            submissions = [s for s in submissions if s.get("lang") == lang]
        if status:
            wanted = "Accepted" if status == "AC" else "Wrong Answer"
            submissions = [s for s in submissions if s.get("status_display") == wanted]
        return {
            "submissions": submissions,
            "hasNext": bool(body.get("has_next")),
            "lastKey": body.get("last_key"),
        }

    async def fetch_user_submission_detail(self, submission_id: int) -> Any:
        self._require_auth("fetch user submission detail")
        data = await self._graphql(SUBMISSION_DETAIL_QUERY, {"submissionId": submission_id})
        return data.get("submissionDetails")

    async def fetch_user_progress_question_list(self, offset: int = 0, limit: int = 20,
                                                question_status: Optional[str] = None,
                                                difficulty: Optional[List[str]] = None) -> Any:
        self._require_auth("fetch user progress question list")
        filters: Dict[str, Any] = {"skip": offset, "limit": limit}
        if question_status:
            filters["questionStatus"] = question_status
        if difficulty:
            filters["difficulty"] = difficulty
        data = await self._graphql(USER_PROGRESS_QUESTIONS_QUERY, {"filters": filters})
        return data.get("userProgressQuestionList")

    # --- Solutions ---

    async def fetch_question_solution_articles(self, question_slug: str,
                                               options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        options = options or {}
        variables = {
            "questionSlug": question_slug,
            "first": options.get("limit", 10),
            "skip": options.get("skip") or 0,
            "orderBy": options.get("orderBy") or "HOT",
            "userInput": options.get("userInput"),
            "tagSlugs": options.get("tagSlugs") or [],
        }
        data = await self._graphql(SOLUTION_ARTICLES_QUERY, variables)
        articles = data.get("ugcArticleSolutionArticles")
        if not articles:
            return {"totalNum": 0, "hasNextPage": False, "articles": []}

        nodes = []
        for edge in articles.get("edges") or []:
            node = (edge or {}).get("node")
            if not node or not node.get("canSee"):
                continue
            if node.get("topicId") and node.get("slug"):
                node["articleUrl"] = (
                    f"{self.base_url}/problems/{question_slug}/solutions/{node['topicId']}/{node['slug']}"
                )
            nodes.append(node)
        return {
            "totalNum": articles.get("totalNum") or 0,
            "hasNextPage": bool((articles.get("pageInfo") or {}).get("hasNextPage")),
            "articles": nodes,
        }

    async def fetch_solution_article_detail(self, topic_id: str) -> Any:
        data = await self._graphql(SOLUTION_ARTICLE_DETAIL_QUERY, {"topicId": topic_id})
        return data.get("ugcArticleSolutionArticle")

    # --- Submission ---

    async def submit_solution(self, code: str, language: str, question_id: str,
                              question_slug: str) -> Dict[str, Any]:
        """Submit code and poll for the judge verdict.

        Polls a fixed number of times at a fixed interval; a verdict that is
        still pending after the last attempt is reported with status PENDING.
        """
        self._require_auth("submit a solution")
        referer = f"{self.base_url}/problems/{question_slug}/"
        body = await self._request_json(
            "POST", f"/problems/{question_slug}/submit/",
            json_data={"lang": language, "question_id": str(question_id), "typed_code": code},
            referer=referer,
        )
        submission_id = body.get("submission_id") if isinstance(body, dict) else None
        if not submission_id:
            raise LeetCodeServiceError("LeetCode did not return a submission id")
        logger.info("Submitted %s as submission %s", question_slug, submission_id)

        for attempt in range(SUBMISSION_POLL_ATTEMPTS):
            await asyncio.sleep(SUBMISSION_POLL_INTERVAL)
            result = await self._request_json("GET", f"/submissions/detail/{submission_id}/check/",
                                              referer=referer)
            state = (result or {}).get("state")
            logger.debug("Submission %s poll %d: %s", submission_id, attempt + 1, state)
            if state == "SUCCESS":
                return {
                    "submissionId": submission_id,
                    "status": result.get("status_msg"),
                    "accepted": result.get("status_msg") == "Accepted",
                    "runtime": result.get("status_runtime"),
                    "memory": result.get("status_memory"),
                    "totalCorrect": result.get("total_correct"),
                    "totalTestcases": result.get("total_testcases"),
                    "lastTestcase": result.get("last_testcase"),
                    "expectedOutput": result.get("expected_output"),
                    "codeOutput": result.get("code_output"),
                    "compileError": result.get("full_compile_error"),
                    "runtimeError": result.get("full_runtime_error"),
                }

        return {
            "submissionId": submission_id,
            "status": "PENDING",
            "message": "Timed out waiting for submission result",
        }
