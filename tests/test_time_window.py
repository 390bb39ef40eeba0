from __future__ import annotations

from wavepng.util.window import resolve_times, resolve_window


def test_end_zero_means_until_end_of_file() -> None:
    for d in (0.0, 0.5, 10.0, 3600.0):
        assert resolve_times(d, 0.0, 0.0) == (0.0, d)


def test_negative_end_counts_back_from_end() -> None:
    assert resolve_times(10.0, 0.0, -2.0) == (0.0, 8.0)
    assert resolve_times(10.0, 0.0, -9.5) == (0.0, 0.5)


def test_negative_end_past_start_of_file_collapses_to_zero() -> None:
    assert resolve_times(10.0, 0.0, -10.0) == (0.0, 0.0)
    assert resolve_times(10.0, 3.0, -25.0) == (0.0, 0.0)


def test_end_beyond_duration_is_clamped() -> None:
    assert resolve_times(10.0, 2.0, 25.0) == (2.0, 10.0)


def test_negative_start_clamped_to_zero() -> None:
    # duration=10, start=-5, end=-2 -> window [0s, 8s]
    assert resolve_times(10.0, -5.0, -2.0) == (0.0, 8.0)


def test_start_after_end_gives_empty_window() -> None:
    start, end = resolve_times(10.0, 12.0, 0.0)
    assert start == end == 10.0

    w = resolve_window(10.0, 44100, 12.0, 0.0)
    assert w.sample_count == 0

    w = resolve_window(10.0, 44100, 6.0, 4.0)
    assert w.sample_count == 0
    assert w.start_sample == 4 * 44100


def test_window_samples_use_floor() -> None:
    w = resolve_window(10.0, 100, 1.5, -2.0)
    assert w.start_sample == 150
    assert w.sample_count == 650
    assert w.end_sample == 800

    w = resolve_window(1.0, 1000, 0.0015, 0.0)
    assert w.start_sample == 1


def test_window_clipped_to_available_samples() -> None:
    w = resolve_window(1.0, 3, 0.0, 0.0, total_samples=2)
    assert w.start_sample == 0
    assert w.sample_count == 2

    w = resolve_window(1.0, 4, 1.0, 0.0, total_samples=4)
    assert (w.start_sample, w.sample_count) == (4, 0)
