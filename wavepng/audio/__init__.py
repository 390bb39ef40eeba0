"""Audio decoding and waveform rasterization.

This package stays lightweight:
- the stdlib wave module for PCM WAV
- ffprobe/ffmpeg for every other format (shelled out, decoded to f32le)

The rasterizer in waveform.py is pure Python and has no I/O.
"""
