"""LeetCode upstream access: the async service client, its GraphQL documents
and the static reference data (categories, tags, languages)."""

from .service import AuthenticationRequiredError, LeetCodeService, LeetCodeServiceError

__all__ = ["AuthenticationRequiredError", "LeetCodeService", "LeetCodeServiceError"]
