from __future__ import annotations

import logging
import time
from typing import Any, Dict

from core.envelope import JSON_MIME_TYPE, error_payload, resource_response, tool_response
from observability.metrics import record_invocation

logger = logging.getLogger(__name__)

AUTH_REQUIRED_MESSAGE = "Authentication required: start the server with a valid LEETCODE_SESSION"


class BaseLeetCodeTool:
    """Base class for every LeetCode tool.

    Subclasses set ``name``, ``description``, ``input_schema`` and
    ``error_message`` and implement :meth:`execute`, which performs exactly
    one service call and returns the success payload. :meth:`handle` wraps
    that payload (or any failure) in the tool envelope, so a registered
    handler never raises.
    """

    name: str = ""
    description: str = ""
    input_schema: Dict[str, Any] = {"type": "object", "properties": {}}
    error_message: str = ""
    requires_auth: bool = False

    def __init__(self, service) -> None:
        if service is None:
            raise ValueError("A valid LeetCodeService must be provided to the tool.")
        self.service = service

    async def execute(self, arguments: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def register(self, server) -> None:
        server.register_tool(self.name, self.description, self.input_schema, self.handle)

    async def handle(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        start = time.time()
        success = False
        try:
            if self.requires_auth and not self.service.is_authenticated():
                logger.warning("Tool %s called without authentication", self.name)
                response = tool_response(error_payload(self.error_message, AUTH_REQUIRED_MESSAGE))
            else:
                logger.info("Tool %s called with %s", self.name, arguments)
                response = tool_response(await self.execute(arguments))
                success = True
        except Exception as e:
            logger.error("Tool %s failed: %s", self.name, e)
            response = tool_response(error_payload(self.error_message, str(e)))
        record_invocation("tool", self.name, success, time.time() - start)
        return response


class BaseLeetCodeResource:
    """Base class for LeetCode resources addressed by a URI or URI template.

    :meth:`fetch_content` receives the requested URI and the variables
    extracted from ``uri_template`` and returns the payload; static
    resources simply ignore the service.
    """

    name: str = ""
    uri_template: str = ""
    description: str = ""
    mime_type: str = JSON_MIME_TYPE
    error_message: str = ""

    def __init__(self, service) -> None:
        if service is None:
            raise ValueError("A valid LeetCodeService must be provided to the resource.")
        self.service = service

    async def fetch_content(self, uri: str, variables: Dict[str, str]) -> Any:
        raise NotImplementedError

    def register(self, server) -> None:
        server.register_resource(
            self.name,
            self.uri_template,
            {"description": self.description, "mimeType": self.mime_type},
            self.handle,
        )

    async def handle(self, uri: str, variables: Dict[str, str]) -> Dict[str, Any]:
        start = time.time()
        success = False
        logger.debug("Resource %s called for %s", self.name, uri)
        try:
            response = resource_response(uri, await self.fetch_content(uri, variables), self.mime_type)
            success = True
        except Exception as e:
            logger.error("Resource %s failed for %s: %s", self.name, uri, e)
            response = resource_response(uri, error_payload(self.error_message, str(e)), self.mime_type)
        record_invocation("resource", self.name, success, time.time() - start)
        return response
