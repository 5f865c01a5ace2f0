from __future__ import annotations

from typing import Any, Dict

from leetcode.constants import PROGRAMMING_LANGS

from .base import BaseLeetCodeTool


class GetUserProfileTool(BaseLeetCodeTool):
    name = "get_user_profile"
    description = (
        "Retrieves profile information about a LeetCode user, including user stats, solved problems, "
        "and profile details."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "username": {"type": "string", "description": "LeetCode username to retrieve profile information for"},
        },
        "required": ["username"],
    }
    error_message = "Failed to fetch user profile"

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        username = arguments["username"]
        profile = await self.service.fetch_user_profile(username)
        return {"username": username, "profile": profile}


class GetRecentSubmissionsTool(BaseLeetCodeTool):
    name = "get_recent_submissions"
    description = (
        "Retrieves a user's recent submissions on LeetCode Global, including both accepted and failed "
        "submissions with detailed metadata."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "username": {"type": "string", "description": "LeetCode username to retrieve recent submissions for"},
            "limit": {
                "type": "integer",
                "default": 10,
                "description": "Maximum number of submissions to return (optional, defaults to 10)",
            },
        },
        "required": ["username"],
    }
    error_message = "Failed to fetch recent submissions"

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        username = arguments["username"]
        submissions = await self.service.fetch_user_recent_submissions(username, arguments.get("limit"))
        return {"username": username, "submissions": submissions}


class GetRecentACSubmissionsTool(BaseLeetCodeTool):
    name = "get_recent_ac_submissions"
    description = (
        "Retrieves a user's recent accepted (AC) submissions on LeetCode Global, focusing only on "
        "successfully completed problems."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "username": {
                "type": "string",
                "description": "LeetCode username to retrieve recent accepted submissions for",
            },
            "limit": {
                "type": "integer",
                "default": 10,
                "description": "Maximum number of accepted submissions to return (optional, defaults to 10)",
            },
        },
        "required": ["username"],
    }
    error_message = "Failed to fetch recent AC submissions"

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        username = arguments["username"]
        submissions = await self.service.fetch_user_recent_ac_submissions(username, arguments.get("limit"))
        return {"username": username, "acSubmissions": submissions}


class GetUserStatusTool(BaseLeetCodeTool):
    name = "get_user_status"
    description = (
        "Retrieves the current user's status on LeetCode, including login status, premium membership "
        "details, and user information (requires authentication)."
    )
    input_schema = {"type": "object", "properties": {}}
    error_message = "Failed to fetch user status"
    requires_auth = True

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        return {"status": await self.service.fetch_user_status()}


class GetAllSubmissionsTool(BaseLeetCodeTool):
    name = "get_all_submissions"
    description = (
        "Retrieves a paginated list of user submissions for a specific problem or all problems, "
        "with filtering options. Requires authentication."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "limit": {
                "type": "integer",
                "default": 20,
                "description": "Maximum number of submissions to return per page (defaults to 20)",
            },
            "offset": {
                "type": "integer",
                "default": 0,
                "description": "Number of submissions to skip for pagination",
            },
            "questionSlug": {
                "type": "string",
                "description": "Slug of the problem to filter submissions (e.g., 'two-sum')",
            },
            "lang": {
                "type": "string",
                "enum": PROGRAMMING_LANGS,
                "description": "Programming language filter (e.g., 'python3', 'cpp', 'java')",
            },
            "status": {
                "type": "string",
                "enum": ["AC", "WA"],
                "description": "Submission status filter: 'AC' for Accepted, 'WA' for Wrong Answer",
            },
            "lastKey": {
                "type": "string",
                "description": "Pagination token from a previous response for fetching the next page",
            },
        },
    }
    error_message = "Failed to fetch user submissions"
    requires_auth = True

    async def execute(self, arguments: Dict[str, Any]) -> Any:
        return await self.service.fetch_user_all_submissions(
            offset=arguments.get("offset", 0),
            limit=arguments.get("limit", 20),
            question_slug=arguments.get("questionSlug"),
            last_key=arguments.get("lastKey"),
            lang=arguments.get("lang"),
            status=arguments.get("status"),
        )


class GetProblemSubmissionReportTool(BaseLeetCodeTool):
    name = "get_problem_submission_report"
    description = (
        "Retrieves detailed information about a specific LeetCode submission by its ID, including "
        "source code, runtime stats, and test results (requires authentication)."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "id": {
                "type": "integer",
                "description": "The numerical submission ID to retrieve detailed information for",
            },
        },
        "required": ["id"],
    }
    error_message = "Failed to fetch submission report"
    requires_auth = True

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        submission_id = arguments["id"]
        report = await self.service.fetch_user_submission_detail(submission_id)
        return {"submissionId": submission_id, "report": report}


class GetProblemProgressTool(BaseLeetCodeTool):
    name = "get_problem_progress"
    description = (
        "Retrieves the current user's problem-solving status with filtering options, including detailed "
        "solution history for attempted or solved questions (requires authentication)."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "offset": {
                "type": "integer",
                "default": 0,
                "description": "The number of questions to skip for pagination purposes",
            },
            "limit": {
                "type": "integer",
                "default": 100,
                "description": "The maximum number of questions to return in a single request",
            },
            "questionStatus": {
                "type": "string",
                "enum": ["ATTEMPTED", "SOLVED"],
                "description": "Filter by question status: 'ATTEMPTED' for tried but not necessarily solved, "
                               "'SOLVED' for successfully completed",
            },
            "difficulty": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Filter by difficulty levels (e.g., ['EASY', 'MEDIUM']); all levels when omitted",
            },
        },
    }
    error_message = "Failed to fetch problem progress"
    requires_auth = True

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        filters = {
            "offset": arguments.get("offset", 0),
            "limit": arguments.get("limit", 100),
            "questionStatus": arguments.get("questionStatus"),
            "difficulty": arguments.get("difficulty"),
        }
        progress = await self.service.fetch_user_progress_question_list(
            offset=filters["offset"],
            limit=filters["limit"],
            question_status=filters["questionStatus"],
            difficulty=filters["difficulty"],
        )
        return {"filters": filters, "progress": progress}
