"""
Small text helpers for the summary output.
"""

_DURATION_UNITS = (("h", 3600), ("m", 60))


def format_duration(seconds: float) -> str:
    """Renders elapsed seconds as e.g. '1h 2m 5s'; zero units are left out."""
    remaining = max(int(seconds), 0)
    parts = []
    for suffix, unit_seconds in _DURATION_UNITS:
        count, remaining = divmod(remaining, unit_seconds)
        if count:
            parts.append(f"{count}{suffix}")
    if remaining or not parts:
        parts.append(f"{remaining}s")
    return " ".join(parts)


def last_lines(text: str, count: int = 3) -> str:
    """Keeps the last few non-blank lines of process output for display."""
    lines = [line for line in text.splitlines() if line.strip()]
    return "\n".join(lines[-count:])
