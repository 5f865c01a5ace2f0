from __future__ import annotations

import logging
from typing import List

from .base import BaseLeetCodeResource, BaseLeetCodeTool
from .contest import GetUserContestRankingTool
from .problem import GetDailyChallengeTool, GetProblemTool, SearchProblemsTool
from .resources import (
    ProblemCategoriesResource,
    ProblemDetailResource,
    ProblemLanguagesResource,
    ProblemSolutionResource,
    ProblemTagsResource,
)
from .solution import GetProblemSolutionTool, ListProblemSolutionsTool, SubmitSolutionTool
from .user import (
    GetAllSubmissionsTool,
    GetProblemProgressTool,
    GetProblemSubmissionReportTool,
    GetRecentACSubmissionsTool,
    GetRecentSubmissionsTool,
    GetUserProfileTool,
    GetUserStatusTool,
)

logger = logging.getLogger(__name__)


def build_leetcode_tools(service, *, enable_submit: bool = False) -> List[BaseLeetCodeTool]:
    tools: List[BaseLeetCodeTool] = [
        # Problems
        GetDailyChallengeTool(service),
        GetProblemTool(service),
        SearchProblemsTool(service),
        # Contests
        GetUserContestRankingTool(service),
        # Solutions
        ListProblemSolutionsTool(service),
        GetProblemSolutionTool(service),
        # Users
        GetUserProfileTool(service),
        GetRecentSubmissionsTool(service),
        GetRecentACSubmissionsTool(service),
        GetUserStatusTool(service),
        GetAllSubmissionsTool(service),
        GetProblemSubmissionReportTool(service),
        GetProblemProgressTool(service),
    ]
    if enable_submit:
        tools.append(SubmitSolutionTool(service))
    return tools


def build_leetcode_resources(service) -> List[BaseLeetCodeResource]:
    return [
        ProblemCategoriesResource(service),
        ProblemTagsResource(service),
        ProblemLanguagesResource(service),
        ProblemDetailResource(service),
        ProblemSolutionResource(service),
    ]


def register_leetcode_tools(server, service, *, enable_submit: bool = False) -> List[BaseLeetCodeTool]:
    """Instantiate every LeetCode tool with the shared service and register it.

    Construction errors propagate: a partially registered tool set is not served.
    """
    logger.info("Registering LeetCode tools")
    tools = build_leetcode_tools(service, enable_submit=enable_submit)
    for tool in tools:
        tool.register(server)
    logger.info("Registered %d LeetCode tools", len(tools))
    return tools


def register_leetcode_resources(server, service) -> List[BaseLeetCodeResource]:
    logger.info("Registering LeetCode resources")
    resources = build_leetcode_resources(service)
    for resource in resources:
        resource.register(server)
    logger.info("Registered %d LeetCode resources", len(resources))
    return resources
