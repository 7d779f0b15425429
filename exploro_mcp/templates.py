"""Prompt template rendering for external tools."""

import re
from typing import Any, Mapping

PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _scalar(value: Any) -> str:
    # 30.0 renders as 30
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(f'"{_scalar(item)}"' for item in value)
    return _scalar(value)


def render(template: str, args: Mapping[str, Any]) -> str:
    """Substitute {name} placeholders with argument values.

    List values render as "a", "b". Placeholders without a matching
    argument are left as-is, braces included.
    """

    def replace(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key in args:
            return _format_value(args[key])
        return match.group(0)

    return PLACEHOLDER.sub(replace, template)
