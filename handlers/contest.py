from __future__ import annotations

from typing import Any, Dict

from .base import BaseLeetCodeTool


class GetUserContestRankingTool(BaseLeetCodeTool):
    name = "get_user_contest_ranking"
    description = (
        "Retrieves a user's contest ranking information on LeetCode, including overall ranking, "
        "participation history, and performance metrics across contests."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "username": {
                "type": "string",
                "description": "LeetCode username to retrieve contest ranking information for",
            },
            "attended": {
                "type": "boolean",
                "default": True,
                "description": "Whether to include only the contests the user has participated in (true) "
                               "or all contests (false); defaults to true",
            },
        },
        "required": ["username"],
    }
    error_message = "Failed to fetch user contest ranking"

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        username = arguments["username"]
        attended = arguments.get("attended", True)
        ranking = await self.service.fetch_user_contest_ranking(username, attended)
        return {"username": username, "contestRanking": ranking}
