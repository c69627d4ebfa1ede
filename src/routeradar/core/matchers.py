"""Built-in parameter matchers.

Matchers constrain which values a ``[param=matcher]`` segment accepts.
Only the well-known names below can be checked; user-defined matchers
live in application code and are treated as accepting any value.
"""

import re

MATCHER_PATTERNS: dict[str, re.Pattern[str]] = {
    "integer": re.compile(r"^\d+$"),
    "float": re.compile(r"^\d*\.?\d+$"),
    "alpha": re.compile(r"^[a-zA-Z]+$"),
    "alphanumeric": re.compile(r"^[a-zA-Z0-9]+$"),
    "uuid": re.compile(
        r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
        re.IGNORECASE,
    ),
    "date": re.compile(r"^\d{4}-\d{2}-\d{2}$"),
}


def matches(matcher: str, value: str) -> bool:
    """Check a segment value against a named matcher.

    Args:
        matcher: Matcher name (e.g., "integer")
        value: URL segment

    Returns:
        True if the value satisfies the matcher, or the matcher is unknown
    """
    pattern = MATCHER_PATTERNS.get(matcher)
    if pattern is None:
        return True
    return pattern.fullmatch(value) is not None
