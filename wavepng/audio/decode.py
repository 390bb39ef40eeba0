from __future__ import annotations

import json
import subprocess
import sys
import wave
from array import array
from pathlib import Path

from wavepng.errors import DecodeError, InputNotFoundError
from wavepng.model.types import AudioInfo, AudioSegment

WAV_SUFFIXES = {".wav", ".wave"}


def _pcm_to_float(data: bytes, sample_width: int) -> array:
    """Interleaved little-endian integer PCM -> float32 in [-1, 1)."""

    if sample_width == 1:
        # 8-bit WAV is unsigned with 128 as zero.
        return array("f", ((b - 128) / 128.0 for b in data))

    if sample_width == 2:
        ints = array("h")
        ints.frombytes(data)
        scale = 1.0 / 32768.0
    elif sample_width in {3, 4}:
        if sample_width == 3:
            # Widen to 32-bit by placing each 24-bit sample in the top three bytes.
            n = len(data) // 3
            wide = bytearray(n * 4)
            wide[1::4] = data[0::3]
            wide[2::4] = data[1::3]
            wide[3::4] = data[2::3]
            data = bytes(wide)
        ints = array("i")
        ints.frombytes(data)
        scale = 1.0 / 2147483648.0
    else:
        raise DecodeError(f"unsupported PCM sample width: {sample_width} bytes")

    if sys.byteorder != "little":
        ints.byteswap()
    return array("f", (v * scale for v in ints))


def _deinterleave(interleaved: array, channels: int) -> tuple[array, ...]:
    if channels == 1:
        return (interleaved,)
    return tuple(interleaved[ch::channels] for ch in range(channels))


def _run(cmd: list[str], *, text: bool) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=text, check=True)
    except FileNotFoundError as e:
        raise DecodeError(f"{cmd[0]} not found on PATH (needed to decode this format)") from e
    except subprocess.CalledProcessError as e:
        err = e.stderr.decode("utf-8", "replace") if isinstance(e.stderr, bytes) else (e.stderr or "")
        tail = " ".join(err.strip().splitlines()[-3:])
        raise DecodeError(f"Failed to read input audio file ({cmd[0]}: {tail or e.returncode})") from e


def _wave_info(path: Path) -> AudioInfo:
    with wave.open(str(path), "rb") as wf:
        sr = int(wf.getframerate())
        ch = int(wf.getnchannels())
        frames = int(wf.getnframes())
    try:
        return AudioInfo(sample_rate=sr, channels=ch, total_samples=frames)
    except ValueError as e:
        # e.g. a header declaring a 0 Hz sample rate
        raise DecodeError(f"Failed to read input audio file: {e}") from e


def _ffprobe_info(path: Path) -> AudioInfo:
    p = _run(
        [
            "ffprobe",
            "-v",
            "error",
            "-select_streams",
            "a:0",
            "-show_entries",
            "stream=sample_rate,channels,duration:format=duration",
            "-of",
            "json",
            str(path),
        ],
        text=True,
    )
    try:
        data = json.loads(p.stdout or "{}")
    except json.JSONDecodeError as e:
        raise DecodeError(f"unreadable ffprobe output for {path}") from e

    streams = data.get("streams") or []
    if not streams:
        raise DecodeError(f"no audio stream in {path}")
    st = streams[0] or {}
    try:
        sr = int(st.get("sample_rate") or 0)
        ch = int(st.get("channels") or 0)
        dur_raw = st.get("duration") or (data.get("format") or {}).get("duration")
        dur = float(dur_raw) if dur_raw is not None else None
    except (TypeError, ValueError) as e:
        raise DecodeError(f"unexpected ffprobe stream info for {path}: {st}") from e
    if sr <= 0 or ch <= 0:
        raise DecodeError(f"no usable audio stream in {path}")
    if dur is None:
        raise DecodeError(f"unknown duration for {path} (ffprobe reported none)")
    return AudioInfo(sample_rate=sr, channels=ch, total_samples=max(0, int(round(dur * sr))))


class AudioDecoder:
    """Random-access reader over one audio file.

    PCM WAV goes through the stdlib wave module. Everything else (float WAV,
    FLAC, MP3, OGG, ...) is inspected with ffprobe and decoded with ffmpeg to
    f32le.
    """

    def __init__(self, path: Path, info: AudioInfo, *, use_ffmpeg: bool) -> None:
        self.path = path
        self.info = info
        self.use_ffmpeg = use_ffmpeg

    @classmethod
    def open(cls, path: str | Path) -> "AudioDecoder":
        p = Path(path).expanduser()
        if not p.is_file():
            raise InputNotFoundError(f"Input file does not exist: {p.resolve()}")

        if p.suffix.lower() in WAV_SUFFIXES:
            try:
                return cls(p, _wave_info(p), use_ffmpeg=False)
            except (wave.Error, EOFError):
                # e.g. IEEE float WAV; ffmpeg handles it.
                pass
        return cls(p, _ffprobe_info(p), use_ffmpeg=True)

    def read_range(self, start_sample: int, count: int) -> AudioSegment:
        """Read `count` samples per channel starting at `start_sample`.

        The range is clamped to the file; the returned segment may be shorter
        than requested near the end of the file.
        """

        start = max(0, int(start_sample))
        count = max(0, int(count))
        start = min(start, self.info.total_samples)
        count = min(count, self.info.total_samples - start)

        if count == 0:
            return AudioSegment(
                sample_rate=self.info.sample_rate,
                channels=tuple(array("f") for _ in range(self.info.channels)),
            )
        if self.use_ffmpeg:
            return self._read_ffmpeg(start, count)
        return self._read_wave(start, count)

    def _read_wave(self, start: int, count: int) -> AudioSegment:
        try:
            with wave.open(str(self.path), "rb") as wf:
                ch = int(wf.getnchannels())
                sw = int(wf.getsampwidth())
                wf.setpos(start)
                data = wf.readframes(count)
        except (wave.Error, EOFError) as e:
            raise DecodeError(f"Failed to read input audio file: {e}") from e

        frame = sw * ch
        data = data[: len(data) - (len(data) % frame)]
        interleaved = _pcm_to_float(data, sw)
        return AudioSegment(sample_rate=self.info.sample_rate, channels=_deinterleave(interleaved, ch))

    def _read_ffmpeg(self, start: int, count: int) -> AudioSegment:
        ch = self.info.channels
        p = _run(
            [
                "ffmpeg",
                "-hide_banner",
                "-loglevel",
                "error",
                "-i",
                str(self.path),
                "-map",
                "0:a:0",
                "-af",
                f"atrim=start_sample={start}:end_sample={start + count}",
                "-ac",
                str(ch),
                "-f",
                "f32le",
                "-acodec",
                "pcm_f32le",
                "-",
            ],
            text=False,
        )

        buf = p.stdout or b""
        frame = 4 * ch
        buf = buf[: len(buf) - (len(buf) % frame)]
        interleaved = array("f")
        interleaved.frombytes(buf)
        if sys.byteorder != "little":
            interleaved.byteswap()
        return AudioSegment(sample_rate=self.info.sample_rate, channels=_deinterleave(interleaved, ch))
