"""Error formatting and actionable hints for lrukit CLI output.

Keep this module small and dependency-light: it is imported by the CLI layer
and only depends on the error hierarchy.
"""

from __future__ import annotations

from lrukit.errors import ConfigurationError, ReplayError


def format_hint(exc: BaseException) -> str | None:
    """Return an actionable hint for a known error, or None."""
    msg = str(exc)

    if isinstance(exc, ConfigurationError):
        if "lrukit.toml" in msg and "find" in msg.lower():
            return "pass --capacity N or create lrukit.toml with a [cache] capacity"
        if "capacity" in msg:
            return "capacity must be a positive integer"
        return None

    if isinstance(exc, ReplayError):
        return "expected `set KEY VALUE`, `get KEY`, `size` or `capacity`"

    if isinstance(exc, OSError):
        return "check that the script path exists and is readable"

    return None


def format_error_with_hint(exc: BaseException) -> str:
    """Format error message + optional hint for stderr output."""
    msg = (str(exc) or repr(exc)).strip()

    result = f"error: {msg}"
    hint = format_hint(exc)
    if hint:
        result += f"\nhint: {hint}"
    return result


def format_stats_line(hits: int, misses: int, evictions: int) -> str:
    return f"stats hits={hits} misses={misses} evictions={evictions}"
