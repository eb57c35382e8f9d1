"""
Session Naming Module

Pure functions that decide tmux session names.

tmux rewrites some characters in session names before storing them (a
period becomes an underscore, as does a colon, which it uses as the
session:window separator). Comparisons against `list-sessions` output only
work if we apply the same rewriting first.
"""

from collections.abc import Collection

# Characters tmux replaces with "_" when a session is created
_TMUX_REWRITTEN_CHARS = (".", ":")


def normalize_session_name(name: str) -> str:
    """
    Rewrite a requested session name the way tmux will store it.

    Idempotent: normalize_session_name(normalize_session_name(s)) ==
    normalize_session_name(s).

    Example:
        >>> normalize_session_name("cloudcrafters.cloud")
        'cloudcrafters_cloud'
    """
    normalized = name
    for char in _TMUX_REWRITTEN_CHARS:
        normalized = normalized.replace(char, "_")
    return normalized


def resolve_unique_session_name(requested_name: str, live_names: Collection[str]) -> str:
    """
    Pick a session name that does not collide with any live session.

    Returns the normalized name if it is free. Otherwise appends the lowest
    free numeric suffix: with {x, x-2, x-5} live the result is x-1.

    Args:
        requested_name: Name as the caller asked for it (not yet normalized)
        live_names: Normalized names of the sessions currently running

    Returns:
        Normalized, collision-free session name
    """
    base = normalize_session_name(requested_name)
    if base not in live_names:
        return base

    counter = 1
    while f"{base}-{counter}" in live_names:
        counter += 1
    return f"{base}-{counter}"


__all__ = ["normalize_session_name", "resolve_unique_session_name"]
