from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from leetcode.constants import DIFFICULTIES, PROBLEM_CATEGORIES, PROBLEM_TAGS

from .base import BaseLeetCodeTool


class GetDailyChallengeTool(BaseLeetCodeTool):
    name = "get_daily_challenge"
    description = (
        "Retrieves today's LeetCode Daily Challenge problem with complete details, "
        "including problem description, constraints, and examples."
    )
    input_schema = {"type": "object", "properties": {}}
    error_message = "Failed to fetch daily challenge"

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        problem = await self.service.fetch_daily_challenge()
        return {"date": datetime.now(timezone.utc).date().isoformat(), "problem": problem}


class GetProblemTool(BaseLeetCodeTool):
    name = "get_problem"
    description = (
        "Retrieves details about a specific LeetCode problem, including its description, "
        "examples, constraints, and related information."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "titleSlug": {
                "type": "string",
                "description": "The URL slug/identifier of the problem (e.g., 'two-sum', 'add-two-numbers') "
                               "as it appears in the LeetCode URL",
            },
        },
        "required": ["titleSlug"],
    }
    error_message = "Failed to fetch problem details"

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        title_slug = arguments["titleSlug"]
        problem = await self.service.fetch_problem_simplified(title_slug)
        return {"titleSlug": title_slug, "problem": problem}


class SearchProblemsTool(BaseLeetCodeTool):
    name = "search_problems"
    description = (
        "Searches for LeetCode problems based on multiple filter criteria including categories, "
        "tags, difficulty levels, and keywords, with pagination support."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "category": {
                "type": "string",
                "enum": PROBLEM_CATEGORIES,
                "default": "all-code-essentials",
                "description": "Problem category filter (e.g., 'algorithms', 'database', 'shell') "
                               "to narrow down the problem domain",
            },
            "tags": {
                "type": "array",
                "items": {"type": "string", "enum": PROBLEM_TAGS},
                "description": "List of topic tags to filter problems by "
                               "(e.g., ['array', 'dynamic-programming', 'tree'])",
            },
            "difficulty": {
                "type": "string",
                "enum": DIFFICULTIES,
                "description": "Problem difficulty level filter to show only problems of a specific difficulty",
            },
            "searchKeywords": {
                "type": "string",
                "description": "Keywords to search in problem titles and descriptions",
            },
            "limit": {
                "type": "integer",
                "default": 10,
                "description": "Maximum number of problems to return in a single request (for pagination)",
            },
            "offset": {
                "type": "integer",
                "description": "Number of problems to skip (for pagination)",
            },
        },
    }
    error_message = "Failed to search problems"

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        problems = await self.service.search_problems(
            category=arguments.get("category"),
            tags=arguments.get("tags"),
            difficulty=arguments.get("difficulty"),
            limit=arguments.get("limit", 10),
            offset=arguments.get("offset") or 0,
            search_keywords=arguments.get("searchKeywords"),
        )
        return {
            "filters": {
                "category": arguments.get("category"),
                "tags": arguments.get("tags"),
                "difficulty": arguments.get("difficulty"),
                "searchKeywords": arguments.get("searchKeywords"),
            },
            "pagination": {"limit": arguments.get("limit"), "offset": arguments.get("offset")},
            "problems": problems,
        }
