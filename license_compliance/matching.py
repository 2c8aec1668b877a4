"""Path-style glob matching for dependency name patterns."""

from __future__ import annotations

import functools
import re


@functools.lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    """Translate a path-style glob into a case-insensitive regex.

    ``*`` and ``?`` never cross a ``/``; ``**/`` matches zero or more
    leading directories; ``[...]`` is a character class (``!`` or ``^``
    negates) that never matches ``/``; a backslash escapes the next character.
    """
    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char == "*":
            if pattern.startswith("**/", i):
                parts.append("(?:[^/]*/)*")
                i += 3
                continue
            while i < n and pattern[i] == "*":
                i += 1
            parts.append("[^/]*")
            continue
        if char == "?":
            parts.append("[^/]")
        elif char == "[":
            end = pattern.find("]", i + 2)
            if end == -1:
                parts.append(re.escape(char))
            else:
                body = pattern[i + 1 : end]
                negate = body[:1] in ("!", "^")
                if negate:
                    body = body[1:]
                body = re.sub(r"([\\\[&~|])", r"\\\1", body)
                parts.append(f"(?!/)[{'^' if negate else ''}{body}]")
                i = end
        elif char == "\\" and i + 1 < n:
            i += 1
            parts.append(re.escape(pattern[i]))
        else:
            parts.append(re.escape(char))
        i += 1

    return re.compile("".join(parts), re.IGNORECASE)


def path_match(pattern: str, name: str) -> bool:
    """Check whether a dependency name matches a glob pattern.

    Args:
        pattern: Glob pattern such as ``lodash*`` or ``@scope/**``.
        name: Dependency name to test.

    Returns:
        True if the whole name matches, ignoring case.
    """
    return _compile(pattern).fullmatch(name) is not None
