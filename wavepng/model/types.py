from __future__ import annotations

from array import array
from dataclasses import dataclass
from typing import ClassVar

from wavepng.errors import ConfigError, SizeLimitError
from wavepng.util.limits import MAX_IMAGE_DIMENSION


@dataclass(frozen=True)
class Rgba:
    """Straight (non-premultiplied) 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    TRANSPARENT_BLACK: ClassVar["Rgba"]
    WHITE: ClassVar["Rgba"]

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            v = getattr(self, name)
            if not (0 <= int(v) <= 255):
                raise ValueError(f"{name} out of range: {v}")

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_bytes(self) -> bytes:
        return bytes((self.r, self.g, self.b, self.a))

    @staticmethod
    def from_bytes(data: bytes) -> "Rgba":
        return Rgba(data[0], data[1], data[2], data[3])


Rgba.TRANSPARENT_BLACK = Rgba(0, 0, 0, 0)
Rgba.WHITE = Rgba(255, 255, 255, 255)


@dataclass(frozen=True)
class AudioInfo:
    sample_rate: int
    channels: int
    total_samples: int

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be > 0: {self.sample_rate}")
        if self.channels < 1:
            raise ValueError(f"channels must be >= 1: {self.channels}")
        if self.total_samples < 0:
            raise ValueError("total_samples must be >= 0")

    @property
    def duration_seconds(self) -> float:
        return self.total_samples / float(self.sample_rate)


@dataclass(frozen=True)
class AudioSegment:
    """Decoded samples, one float array per channel.

    Values are nominally in [-1.0, 1.0] but are not clamped. All channels have
    the same length. The rasterizer only reads from it.
    """

    sample_rate: int
    channels: tuple[array, ...]

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be > 0: {self.sample_rate}")
        lengths = {len(c) for c in self.channels}
        if len(lengths) > 1:
            raise ValueError(f"channel lengths differ: {sorted(lengths)}")

    @staticmethod
    def from_lists(sample_rate: int, channels: list[list[float]]) -> "AudioSegment":
        return AudioSegment(sample_rate=sample_rate, channels=tuple(array("f", c) for c in channels))

    @property
    def channel_count(self) -> int:
        return len(self.channels)

    @property
    def sample_count(self) -> int:
        return len(self.channels[0]) if self.channels else 0


@dataclass(frozen=True)
class TimeWindow:
    """Half-open sample range [start_sample, start_sample + sample_count)."""

    start_sample: int
    sample_count: int

    def __post_init__(self) -> None:
        if self.start_sample < 0:
            raise ValueError("start_sample must be >= 0")
        if self.sample_count < 0:
            raise ValueError("sample_count must be >= 0")

    @property
    def end_sample(self) -> int:
        return self.start_sample + self.sample_count


@dataclass(frozen=True)
class RenderConfig:
    width: int
    height: int
    background: Rgba = Rgba.TRANSPARENT_BLACK
    foreground: Rgba = Rgba.WHITE

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"image size must be positive, got {self.width}x{self.height}")
        if self.width > MAX_IMAGE_DIMENSION or self.height > MAX_IMAGE_DIMENSION:
            raise SizeLimitError(f"Image size too large. Max: {MAX_IMAGE_DIMENSION}")


@dataclass(frozen=True)
class WaveformImage:
    """Row-major RGBA pixel grid (width * height * 4 bytes)."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(f"pixel buffer is {len(self.pixels)} bytes, expected {expected}")

    def pixel(self, x: int, y: int) -> Rgba:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel out of bounds: ({x}, {y})")
        off = (y * self.width + x) * 4
        return Rgba.from_bytes(self.pixels[off : off + 4])

    def column(self, x: int) -> list[Rgba]:
        return [self.pixel(x, y) for y in range(self.height)]
