from __future__ import annotations

"""Hard limits and defaults.

The dimension limit guards against pathological memory/time use: the pixel
buffer is width * height * 4 bytes and is checked before anything is
allocated or decoded.
"""

MAX_IMAGE_DIMENSION = 16384

DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 300

# RRGGBBAA
DEFAULT_BACKGROUND = "00000000"
DEFAULT_FOREGROUND = "ffffffff"
