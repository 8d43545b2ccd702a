"""Recovery time codec.

Recovery is typed by hand as minutes and seconds run together, with or
without a colon: "3:30", "330" and "0330" all mean three and a half minutes.
The last two digits are always the seconds, so "345" is 3:45 and "90" is
0:90 (ninety seconds).
"""

import re

# Display glyph for "no recovery recorded", distinct from "0:00".
UNKNOWN_RECOVERY = "—"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_recovery(text: str | None) -> int | None:
    """Parse a recovery string into seconds.

    Only the first colon is stripped; any trailing non-digit text after the
    leading number is ignored ("3:30s" is 210).

    Returns:
        Total seconds, or None for empty, non-numeric or negative input.
    """
    if not text:
        return None
    match = _LEADING_INT.match(text.replace(":", "", 1))
    if match is None:
        return None
    value = int(match.group(1))
    if value < 0:
        return None
    minutes, seconds = divmod(value, 100)
    return minutes * 60 + seconds


def format_recovery(seconds: int | None) -> str | None:
    """Format seconds as M:SS, or None when no recovery is recorded."""
    if seconds is None:
        return None
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


def format_recovery_for_display(seconds: int | None) -> str:
    """Format seconds for display, showing a dash when unknown."""
    formatted = format_recovery(seconds)
    return UNKNOWN_RECOVERY if formatted is None else formatted
