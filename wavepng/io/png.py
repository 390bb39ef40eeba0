from __future__ import annotations

import os
import tempfile
from pathlib import Path

from PIL import Image

from wavepng.errors import EncodeError
from wavepng.model.types import WaveformImage


def write_png(image: WaveformImage, path: str | Path) -> str:
    """Encode `image` as an RGBA PNG at `path`.

    The PNG is written to a temporary file next to the target and renamed over
    it, so a failed encode never leaves a truncated file or clobbers an existing
    one.
    """

    out = Path(path).expanduser()
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise EncodeError(f"Failed to save image: {e}") from e

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{out.name}.", suffix=".tmp", dir=str(out.parent))
    except OSError as e:
        raise EncodeError(f"Failed to save image: {e}") from e

    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            img = Image.frombytes("RGBA", (image.width, image.height), image.pixels)
            img.save(f, format="PNG")
        # mkstemp creates 0600 files
        os.chmod(tmp, 0o644)
        os.replace(tmp, out)
    except (OSError, ValueError) as e:
        tmp.unlink(missing_ok=True)
        raise EncodeError(f"Failed to save image: {e}") from e

    return str(out)


def read_png(path: str | Path) -> WaveformImage:
    with Image.open(Path(path).expanduser()) as img:
        rgba = img.convert("RGBA")
        return WaveformImage(width=rgba.width, height=rgba.height, pixels=rgba.tobytes())
