from __future__ import annotations

from typing import Any, Dict, List

from leetcode.constants import PROBLEM_CATEGORIES, PROBLEM_TAGS, PROGRAMMING_LANGS

from .base import BaseLeetCodeResource


class ProblemCategoriesResource(BaseLeetCodeResource):
    name = "problem-categories"
    uri_template = "categories://problems/all"
    description = (
        "A list of all problem classification categories in the LeetCode platform (algorithms, database, "
        "shell, ...). These categories help organize and filter coding problems by topic area. "
        "Returns an array of all available problem categories."
    )
    error_message = "Failed to fetch problem categories"

    async def fetch_content(self, uri: str, variables: Dict[str, str]) -> List[str]:
        return list(PROBLEM_CATEGORIES)


class ProblemTagsResource(BaseLeetCodeResource):
    name = "problem-tags"
    uri_template = "tags://problems/all"
    description = (
        "A detailed collection of algorithmic and data structure tags used by LeetCode to categorize "
        "problems, such as 'dynamic-programming', 'binary-search', 'array' or 'tree'. Returns an array "
        "of all available problem tags for filtering and searching problems."
    )
    error_message = "Failed to fetch problem tags"

    async def fetch_content(self, uri: str, variables: Dict[str, str]) -> List[str]:
        return list(PROBLEM_TAGS)


class ProblemLanguagesResource(BaseLeetCodeResource):
    name = "problem-langs"
    uri_template = "langs://problems/all"
    description = (
        "A complete list of all programming languages officially supported by LeetCode for code "
        "submission and problem solving."
    )
    error_message = "Failed to fetch problem languages"

    async def fetch_content(self, uri: str, variables: Dict[str, str]) -> List[str]:
        return list(PROGRAMMING_LANGS)


class ProblemDetailResource(BaseLeetCodeResource):
    name = "problem-detail"
    uri_template = "problem://{titleSlug}"
    description = (
        "Provides details about a specific LeetCode problem, including its description, examples, "
        "constraints, and metadata. The titleSlug parameter in the URI identifies the problem."
    )
    error_message = "Failed to fetch problem detail"

    async def fetch_content(self, uri: str, variables: Dict[str, str]) -> Dict[str, Any]:
        title_slug = variables["titleSlug"]
        problem = await self.service.fetch_problem(title_slug)
        return {"titleSlug": title_slug, "problem": problem}


class ProblemSolutionResource(BaseLeetCodeResource):
    name = "problem-solution"
    uri_template = "solution://{topicId}"
    description = (
        "Provides the complete content and metadata of a specific problem solution, including the full "
        "article text, author information, and related navigation links. The topicId in the URI comes "
        "from the 'topicId' field returned by the 'list_problem_solutions' tool."
    )
    error_message = "Failed to fetch solution"

    async def fetch_content(self, uri: str, variables: Dict[str, str]) -> Dict[str, Any]:
        topic_id = variables["topicId"]
        solution = await self.service.fetch_solution_article_detail(topic_id)
        return {"topicId": topic_id, "solution": solution}
