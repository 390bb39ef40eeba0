from __future__ import annotations

import string

from wavepng.errors import ParseColorError
from wavepng.model.types import Rgba


def parse_hex_color(value: str) -> Rgba:
    """Parse an RRGGBBAA hex string (optional leading '#').

    Anything else raises ParseColorError; there is no fallback colour.
    """

    s = str(value).strip()
    if s.startswith("#"):
        s = s[1:]
    if len(s) != 8:
        raise ParseColorError(f"colour must be 8 hex digits (RRGGBBAA), got {value!r}")
    if any(c not in string.hexdigits for c in s):
        raise ParseColorError(f"colour contains non-hex digits: {value!r}")

    return Rgba(
        int(s[0:2], 16),
        int(s[2:4], 16),
        int(s[4:6], 16),
        int(s[6:8], 16),
    )


def format_hex_color(color: Rgba) -> str:
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}{color.a:02x}"
