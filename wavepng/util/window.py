from __future__ import annotations

import math

from wavepng.model.types import TimeWindow


def resolve_times(duration: float, start: float, end: float) -> tuple[float, float]:
    """Resolve user start/end seconds against the file duration.

    - end == 0 means "until the end of the file"
    - end < 0 counts back from the end (end=-2 on a 10 s file -> 8 s)
    - end never exceeds the duration and never drops below 0
    - start is clamped into [0, actual_end]

    Returns (actual_start, actual_end) in seconds.
    """

    duration = max(0.0, float(duration))
    end = float(end)

    if end < 0:
        actual_end = duration + end
    elif end == 0:
        actual_end = duration
    else:
        actual_end = end

    actual_end = max(0.0, min(duration, actual_end))
    actual_start = max(0.0, min(actual_end, float(start)))
    return actual_start, actual_end


def resolve_window(
    duration: float,
    sample_rate: int,
    start: float,
    end: float,
    *,
    total_samples: int | None = None,
) -> TimeWindow:
    """Resolve start/end seconds into a sample window.

    A start past the end of the file gives an empty window. When total_samples
    is known the window is clipped to it.
    """

    actual_start, actual_end = resolve_times(duration, start, end)
    sr = float(sample_rate)

    start_sample = int(math.floor(actual_start * sr))
    sample_count = int(math.floor((actual_end - actual_start) * sr))

    if total_samples is not None:
        total = max(0, int(total_samples))
        start_sample = min(start_sample, total)
        sample_count = max(0, min(sample_count, total - start_sample))

    return TimeWindow(start_sample=start_sample, sample_count=sample_count)
