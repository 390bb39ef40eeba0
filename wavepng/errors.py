"""Error taxonomy.

Library code raises these; only the CLI entry point turns them into
messages and exit codes.
"""


class WavepngError(Exception):
    """Base class for every error wavepng raises on purpose."""


class ArgumentError(WavepngError, ValueError):
    """Missing, unknown or unparseable command-line argument."""


class ParseColorError(ArgumentError):
    """Colour string is not RRGGBBAA hex."""


class ConfigError(WavepngError, ValueError):
    """Invalid render configuration or config file."""


class SizeLimitError(ConfigError):
    """Image width/height above MAX_IMAGE_DIMENSION."""


class InputNotFoundError(WavepngError, FileNotFoundError):
    pass


class DecodeError(WavepngError, RuntimeError):
    pass


class EncodeError(WavepngError, RuntimeError):
    pass
