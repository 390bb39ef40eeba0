from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from wavepng.audio.decode import AudioDecoder
from wavepng.audio.waveform import render_waveform
from wavepng.io.png import write_png
from wavepng.model.types import AudioInfo, RenderConfig, Rgba, TimeWindow
from wavepng.util.limits import DEFAULT_HEIGHT, DEFAULT_WIDTH
from wavepng.util.window import resolve_window


@dataclass
class GenerateOptions:
    input: str
    output: str
    start: float = 0.0
    end: float = 0.0
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    background: Rgba = Rgba.TRANSPARENT_BLACK
    foreground: Rgba = Rgba.WHITE

    def render_config(self) -> RenderConfig:
        return RenderConfig(width=self.width, height=self.height, background=self.background, foreground=self.foreground)


@dataclass(frozen=True)
class GenerateResult:
    output: str
    info: AudioInfo
    window: TimeWindow

    @property
    def start_seconds(self) -> float:
        return self.window.start_sample / float(self.info.sample_rate)

    @property
    def end_seconds(self) -> float:
        return self.window.end_sample / float(self.info.sample_rate)


def generate_waveform_png(opts: GenerateOptions) -> GenerateResult:
    """Decode -> resolve window -> rasterize -> write PNG.

    The render config is validated before the input is opened, so oversized
    images fail without decoding anything.
    """

    cfg = opts.render_config()
    cfg.validate()

    decoder = AudioDecoder.open(opts.input)
    info = decoder.info
    window = resolve_window(
        info.duration_seconds,
        info.sample_rate,
        opts.start,
        opts.end,
        total_samples=info.total_samples,
    )

    segment = decoder.read_range(window.start_sample, window.sample_count)
    image = render_waveform(segment, TimeWindow(0, segment.sample_count), cfg)

    out = write_png(image, opts.output)
    return GenerateResult(output=str(Path(out).resolve()), info=info, window=window)
