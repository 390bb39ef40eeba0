from __future__ import annotations

import math
from collections.abc import Sequence

from PIL import Image, ImageDraw

from wavepng.errors import ConfigError
from wavepng.model.types import AudioSegment, RenderConfig, TimeWindow, WaveformImage


def band_bounds(channel: int, channel_count: int, height: int) -> tuple[int, int]:
    """Rows [top, bottom) of the horizontal band assigned to a channel.

    Bands are contiguous and never overlap. The last band always ends at
    exactly `height`, so it absorbs the remainder when height is not a multiple
    of channel_count.
    """

    if channel_count <= 0:
        raise ConfigError("channel_count must be > 0")
    if not (0 <= channel < channel_count):
        raise ValueError(f"channel out of range: {channel}")
    top = (channel * height) // channel_count
    if channel == channel_count - 1:
        return top, height
    return top, ((channel + 1) * height) // channel_count


def column_sample_range(column: int, width: int, sample_count: int) -> tuple[int, int]:
    """Half-open sample range [start, end) summarized by one pixel column.

    start = floor(column / width * sample_count), end = floor((column + 1) /
    width * sample_count). When there are more columns than samples some
    columns get an empty range.
    """

    if sample_count <= 0:
        return 0, 0
    start = int(math.floor(column / width * sample_count))
    end = int(math.floor((column + 1) / width * sample_count))
    start = max(0, min(sample_count - 1, start))
    end = max(0, min(sample_count, end))
    return start, end


def column_envelope(samples: Sequence[float], start: int, end: int) -> tuple[float, float] | None:
    """(min, max) over samples[start:end], or None when the range is empty."""

    if start >= end:
        return None
    seg = samples[start:end]
    return float(min(seg)), float(max(seg))


def envelope_rows(lo: float, hi: float, top: int, bottom: int) -> tuple[int, int]:
    """Map an envelope onto rows [r0, r1) of the band [top, bottom).

    +1.0 sits on the band's top edge, -1.0 on its bottom edge. A flat envelope
    still covers one row. Values outside [-1, 1] are pinned to the band.
    """

    band_height = float(bottom - top)
    mid = top + band_height / 2.0
    half = band_height / 2.0

    y1 = mid - lo * half
    y2 = mid - hi * half

    r0 = int(math.floor(min(y1, y2)))
    r1 = int(math.ceil(max(y1, y2)))
    r0 = min(max(r0, top), bottom - 1)
    r1 = max(min(r1, bottom), r0 + 1)
    return r0, r1


def render_waveform(segment: AudioSegment, window: TimeWindow, config: RenderConfig) -> WaveformImage:
    """Rasterize the min/max envelope of every channel into an RGBA image.

    `window` indexes into `segment`. Each channel gets its own band (see
    band_bounds); each pixel column draws one vertical line spanning the
    channel's min..max over the column's sample range (see
    column_sample_range). Columns with no samples stay background.

    An opaque foreground is drawn straight onto the background. A translucent
    one is drawn on a transparent layer and alpha-composited over it.

    Raises ConfigError (or SizeLimitError) before allocating anything when the
    image size or channel count is invalid.
    """

    config.validate()
    channel_count = segment.channel_count
    if channel_count <= 0:
        raise ConfigError("audio must have at least one channel")
    if window.end_sample > segment.sample_count:
        raise ConfigError(
            f"window [{window.start_sample}, {window.end_sample}) exceeds segment of {segment.sample_count} samples"
        )

    width = config.width
    height = config.height
    fg = config.foreground.as_tuple()
    opaque = config.foreground.a == 255

    img = Image.new("RGBA", (width, height), config.background.as_tuple())
    layer = img if opaque else Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)

    offset = window.start_sample
    ranges = [column_sample_range(i, width, window.sample_count) for i in range(width)]

    for ch in range(channel_count):
        samples = segment.channels[ch]
        top, bottom = band_bounds(ch, channel_count, height)
        if bottom <= top:
            # more channels than rows
            continue

        for x, (s0, s1) in enumerate(ranges):
            env = column_envelope(samples, offset + s0, offset + s1)
            if env is None:
                continue
            r0, r1 = envelope_rows(env[0], env[1], top, bottom)
            # 1px-wide column; both corners inclusive, so a flat envelope is one pixel
            draw.rectangle([(x, r0), (x, r1 - 1)], fill=fg)

    if not opaque:
        img = Image.alpha_composite(img, layer)

    return WaveformImage(width=width, height=height, pixels=img.tobytes())
