"""Audio buffers and sample-rate conversion."""

from voxfront.audio.buffer import AudioBuffer, ResampleSpec, remix_channels
from voxfront.audio.resample import ResamplerState, flush, resample, resample_chunk

__all__ = [
    "AudioBuffer",
    "ResampleSpec",
    "ResamplerState",
    "flush",
    "remix_channels",
    "resample",
    "resample_chunk",
]
