"""Path parameter converters.

Built-in converters for route path segments like ``{id:int}``. A
converter only decides whether a segment is acceptable; captured
values stay strings.
"""

import re

# Regex each captured segment must fully match
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

_COMPILED: dict[str, re.Pattern[str]] = {
    name: re.compile(f"^{pattern}$") for name, pattern in CONVERTERS.items()
}


def accepts(value: str, param_type: str) -> bool:
    """Whether *value* is a valid capture for the *param_type* converter."""
    return _COMPILED[param_type].match(value) is not None
