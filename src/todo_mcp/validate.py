from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Dict, Mapping, Pattern

from .shared.errors import ErrorKind, McpError, validation_error

JsonDict = Dict[str, Any]


def _is_type(val: Any, t: str) -> bool:
    if t == "object":
        return isinstance(val, dict)
    if t == "string":
        return isinstance(val, str)
    if t == "integer":
        return isinstance(val, int) and not isinstance(val, bool)
    if t == "number":
        return isinstance(val, (int, float)) and not isinstance(val, bool)
    if t == "boolean":
        return isinstance(val, bool)
    if t == "array":
        return isinstance(val, list)
    return True  # unknown -> don't block


@lru_cache(maxsize=None)
def _compile_pattern(pattern: str) -> Pattern[str]:
    # schema patterns are ECMAScript: a final "$" must not match before a trailing newline
    stem = pattern[:-1]
    if pattern.endswith("$") and (len(stem) - len(stem.rstrip("\\"))) % 2 == 0:
        pattern = stem + r"\Z"
    return re.compile(pattern)


def validate_property(key: str, value: Any, spec: JsonDict) -> None:
    """Check one argument against its property schema; raise on the first violation."""
    t = spec.get("type")
    if t and not _is_type(value, t):
        raise validation_error(f"Parameter '{key}' must be of type {t}")

    if t != "string":
        return
    if "minLength" in spec and len(value) < spec["minLength"]:
        raise validation_error(f"Parameter '{key}' must be at least {spec['minLength']} characters")
    if "maxLength" in spec and len(value) > spec["maxLength"]:
        raise validation_error(f"Parameter '{key}' must be at most {spec['maxLength']} characters")
    if "pattern" in spec and not _compile_pattern(spec["pattern"]).search(value):
        raise validation_error(f"Parameter '{key}' does not match required pattern")
    if "enum" in spec and value not in spec["enum"]:
        raise validation_error(f"Parameter '{key}' must be one of: {', '.join(spec['enum'])}")


def validate_params(params: Any, schema: JsonDict) -> bool:
    """
    JSON-schema-like validator (subset), fail-fast:
      - params must be an object
      - required
      - additionalProperties (bool)
      - per property: type, then minLength/maxLength, pattern, enum
    """
    if not isinstance(params, dict):
        raise validation_error("Tool parameters must be provided as an object")

    props = schema.get("properties", {}) or {}
    required = schema.get("required", []) or []
    additional = schema.get("additionalProperties", True)

    for key in required:
        if key not in params:
            raise validation_error(f"Required parameter '{key}' is missing")

    for key, value in params.items():
        spec = props.get(key)
        if spec is None:
            if additional is False:
                raise validation_error(f"Parameter '{key}' is not supported")
            continue
        validate_property(key, value, spec)
    return True


def validate_arguments(tool_name: str, arguments: Any, schemas: Mapping[str, JsonDict]) -> bool:
    schema = schemas.get(tool_name)
    if schema is None:
        raise McpError(ErrorKind.TOOL_NOT_FOUND, f"Tool '{tool_name}' is not available")
    return validate_params(arguments, schema)
