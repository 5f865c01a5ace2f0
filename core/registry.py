from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Pattern, Tuple

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]
ResourceHandler = Callable[[str, Dict[str, str]], Awaitable[Dict[str, Any]]]

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass
class ToolEntry:
    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: ToolHandler

    def describe(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


@dataclass
class ResourceEntry:
    name: str
    uri_template: str
    metadata: Dict[str, Any]
    handler: ResourceHandler
    pattern: Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pattern = compile_uri_template(self.uri_template)

    @property
    def is_template(self) -> bool:
        return bool(_PLACEHOLDER.search(self.uri_template))

    def match(self, uri: str) -> Optional[Dict[str, str]]:
        m = self.pattern.fullmatch(uri)
        return m.groupdict() if m else None

    def describe(self) -> Dict[str, Any]:
        key = "uriTemplate" if self.is_template else "uri"
        return {"name": self.name, key: self.uri_template, **self.metadata}


def compile_uri_template(template: str) -> Pattern[str]:
    """Compile ``scheme://{var}`` style templates; each variable matches one path segment."""
    parts = []
    pos = 0
    for m in _PLACEHOLDER.finditer(template):
        parts.append(re.escape(template[pos:m.start()]))
        parts.append(f"(?P<{m.group(1)}>[^/?#]+)")
        pos = m.end()
    parts.append(re.escape(template[pos:]))
    return re.compile("".join(parts))


class ToolRegistry:
    """Tool table keyed by name. Re-registering a name replaces the earlier entry."""

    def __init__(self) -> None:
        self._tools: Dict[str, ToolEntry] = {}

    def register(self, name: str, description: str, input_schema: Dict[str, Any], handler: ToolHandler) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("Tool name must be a non-empty string")
        if name in self._tools:
            logger.warning("Tool %s registered twice; replacing previous handler", name)
        self._tools[name] = ToolEntry(name, description, input_schema or {"type": "object", "properties": {}}, handler)

    def get(self, name: str) -> Optional[ToolEntry]:
        return self._tools.get(name)

    def list_tools(self) -> List[ToolEntry]:
        return list(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


class ResourceRegistry:
    """Resource table keyed by (name, uri_template); lookup walks entries in insertion order."""

    def __init__(self) -> None:
        self._resources: Dict[Tuple[str, str], ResourceEntry] = {}

    def register(self, name: str, uri_template: str, metadata: Dict[str, Any], handler: ResourceHandler) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("Resource name must be a non-empty string")
        if not uri_template:
            raise ValueError("Resource URI must be a non-empty string")
        key = (name, uri_template)
        if key in self._resources:
            logger.warning("Resource %s (%s) registered twice; replacing previous handler", name, uri_template)
        self._resources[key] = ResourceEntry(name, uri_template, dict(metadata or {}), handler)

    def resolve(self, uri: str) -> Optional[Tuple[ResourceEntry, Dict[str, str]]]:
        # Literal URIs win over templates that could also match
        for entry in self._resources.values():
            if not entry.is_template and entry.uri_template == uri:
                return entry, {}
        for entry in self._resources.values():
            if entry.is_template:
                variables = entry.match(uri)
                if variables is not None:
                    return entry, variables
        return None

    def list_resources(self) -> List[ResourceEntry]:
        return [e for e in self._resources.values() if not e.is_template]

    def list_templates(self) -> List[ResourceEntry]:
        return [e for e in self._resources.values() if e.is_template]

    def __len__(self) -> int:
        return len(self._resources)
