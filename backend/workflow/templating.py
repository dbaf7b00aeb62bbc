"""Template resolution for step configs.

Placeholders are single-brace identifiers: ``"Hello {name}"``. A placeholder
is replaced only when its identifier is a key of the runtime data; anything
else (unknown keys, stray braces, ``{not an id}``) is left exactly as written.
"""

import json
import re
from typing import Any, Mapping

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def stringify(value: Any) -> str:
    """Render a runtime value the way it should appear inside text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def resolve_template(template: str, data: Mapping[str, Any]) -> str:
    """Replace ``{key}`` placeholders with values from ``data``.

    >>> resolve_template("{x}-{x}/{y}", {"x": 1})
    '1-1/{y}'
    """
    if not isinstance(template, str) or "{" not in template:
        return template

    def _substitute(match: re.Match) -> str:
        key = match.group(1)
        if key in data:
            return stringify(data[key])
        return match.group(0)

    return _PLACEHOLDER.sub(_substitute, template)


def resolve_value(value: Any, data: Mapping[str, Any]) -> Any:
    """Recursively resolve placeholders in strings nested in dicts and lists."""
    if isinstance(value, str):
        return resolve_template(value, data)
    if isinstance(value, dict):
        return {key: resolve_value(item, data) for key, item in value.items()}
    if isinstance(value, list):
        return [resolve_value(item, data) for item in value]
    return value
