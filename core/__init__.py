"""Core package for the MCP dispatch layer.

This package houses the protocol-facing components:
- server: JSON-RPC dispatcher routing tool calls and resource reads
- registry: tool and resource tables, URI template matching
- validation: argument checks and defaults against tool input schemas
- envelope: tool/resource result envelopes and JSON-RPC responses
"""

from .server import MCPServer

__all__ = ["MCPServer"]
