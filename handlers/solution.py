from __future__ import annotations

from typing import Any, Dict

from leetcode.constants import SOLUTION_ORDER_BY

from .base import BaseLeetCodeTool


class ListProblemSolutionsTool(BaseLeetCodeTool):
    name = "list_problem_solutions"
    description = (
        "Retrieves a list of community solutions for a specific LeetCode problem, including only "
        "metadata like topicId. To view the full content of a solution, use the 'get_problem_solution' "
        "tool with the topicId returned by this tool."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "questionSlug": {
                "type": "string",
                "description": "The URL slug/identifier of the problem to retrieve solutions for "
                               "(e.g., 'two-sum', 'add-two-numbers')",
            },
            "limit": {
                "type": "integer",
                "default": 10,
                "description": "Maximum number of solutions to return per request",
            },
            "skip": {
                "type": "integer",
                "default": 0,
                "description": "Number of solutions to skip before starting to collect results",
            },
            "orderBy": {
                "type": "string",
                "enum": SOLUTION_ORDER_BY,
                "default": "HOT",
                "description": "Sorting criteria: 'HOT' for trending, 'MOST_VOTES' by upvotes, "
                               "'MOST_RECENT' by publication date",
            },
            "userInput": {
                "type": "string",
                "description": "Search term to filter solutions by title, content, or author name",
            },
            "tagSlugs": {
                "type": "array",
                "items": {"type": "string"},
                "default": [],
                "description": "Tag identifiers to filter solutions by language or problem tags "
                               "(e.g., 'python', 'dynamic-programming')",
            },
        },
        "required": ["questionSlug"],
    }
    error_message = "Failed to fetch solutions"

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        question_slug = arguments["questionSlug"]
        options = {
            "limit": arguments.get("limit", 10),
            "skip": arguments.get("skip", 0),
            "orderBy": arguments.get("orderBy", "HOT"),
            "userInput": arguments.get("userInput"),
            "tagSlugs": arguments.get("tagSlugs") or [],
        }
        articles = await self.service.fetch_question_solution_articles(question_slug, options)
        return {"questionSlug": question_slug, "solutionArticles": articles}


class GetProblemSolutionTool(BaseLeetCodeTool):
    name = "get_problem_solution"
    description = (
        "Retrieves the complete content and metadata of a specific solution, including the full "
        "article text, author information, and related navigation links."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "topicId": {
                "type": "string",
                "description": "The unique topic ID of the solution, as returned in the 'topicId' field "
                               "of 'list_problem_solutions'",
            },
        },
        "required": ["topicId"],
    }
    error_message = "Failed to fetch solution details"

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        topic_id = arguments["topicId"]
        solution = await self.service.fetch_solution_article_detail(topic_id)
        return {"topicId": topic_id, "solution": solution}


class SubmitSolutionTool(BaseLeetCodeTool):
    """Submits code through LeetCode's unofficial endpoints and waits for the verdict.

    Only registered when submission is explicitly enabled in the config.
    """

    name = "submit_solution"
    description = (
        "Submits solution code to a specific LeetCode problem and returns the execution result. "
        "Requires authentication."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "code": {"type": "string", "description": "The solution code to submit."},
            "language": {
                "type": "string",
                "description": "The programming language of the code (e.g., 'python3', 'java', 'cpp').",
            },
            "questionId": {
                "type": "string",
                "description": "The numeric ID of the question (e.g., '1' for Two Sum).",
            },
            "questionSlug": {
                "type": "string",
                "description": "The URL slug of the question (e.g., 'two-sum' for Two Sum).",
            },
        },
        "required": ["code", "language", "questionId", "questionSlug"],
    }
    error_message = "Failed to submit LeetCode solution"
    requires_auth = True

    async def execute(self, arguments: Dict[str, Any]) -> Any:
        return await self.service.submit_solution(
            arguments["code"],
            arguments["language"],
            arguments["questionId"],
            arguments["questionSlug"],
        )
