from __future__ import annotations

import copy
from typing import Any, Dict, List, Tuple


class ValidationError(Exception):
    """Raised when tool arguments do not match the declared input schema"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _type_matches(value: Any, typ: str) -> bool:
    if typ == "string":
        return isinstance(value, str)
    if typ == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if typ == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if typ == "boolean":
        return isinstance(value, bool)
    if typ == "array":
        return isinstance(value, list)
    if typ == "object":
        return isinstance(value, dict)
    return True


def validate_args_against_schema(args: Dict[str, Any], schema: Dict[str, Any]) -> Tuple[bool, List[str]]:
    props = (schema or {}).get("properties", {})
    required = (schema or {}).get("required", [])
    errors = []
    for key in required:
        if key not in args or args.get(key) is None:
            errors.append(f"Missing required: {key}")
    for key, meta in props.items():
        if key not in args or args[key] is None or not isinstance(meta, dict):
            continue
        val = args[key]
        t = meta.get("type")
        if t and not _type_matches(val, t):
            errors.append(f"{key} expected {t}")
            continue
        enum = meta.get("enum")
        if enum is not None and val not in enum:
            errors.append(f"{key} must be one of {enum}")
        if t == "array":
            item_enum = (meta.get("items") or {}).get("enum")
            if item_enum is not None:
                bad = [v for v in val if v not in item_enum]
                if bad:
                    errors.append(f"{key} contains unsupported values {bad}")
    return (len(errors) == 0), errors


def apply_defaults(args: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``args`` with schema defaults filled for absent keys."""
    filled = dict(args or {})
    for key, meta in ((schema or {}).get("properties") or {}).items():
        if isinstance(meta, dict) and "default" in meta and filled.get(key) is None:
            filled[key] = copy.deepcopy(meta["default"])
    return filled


def validate_arguments(args: Any, schema: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and default tool arguments, raising ValidationError on mismatch."""
    if args is None:
        args = {}
    if not isinstance(args, dict):
        raise ValidationError(["arguments must be an object"])
    props = (schema or {}).get("properties") or {}
    if (schema or {}).get("additionalProperties") is False:
        unknown = sorted(k for k in args if k not in props)
        if unknown:
            raise ValidationError([f"Unexpected argument: {k}" for k in unknown])
    filled = apply_defaults(args, schema)
    ok, errors = validate_args_against_schema(filled, schema)
    if not ok:
        raise ValidationError(errors)
    return filled
