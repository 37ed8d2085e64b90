"""WAV readers for reference audio fed through the resampler."""

from __future__ import annotations

import wave
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from voxfront.audio.buffer import AudioBuffer


@dataclass(frozen=True)
class AudioMetadata:
    """Minimal audio metadata."""

    duration_sec: float
    sample_rate_hz: int
    channels: int
    audio_format: str


def read_audio_metadata(audio_path: str | Path) -> AudioMetadata | None:
    """Read audio metadata for supported formats.

    Currently supports WAV files. Returns `None` for unsupported formats
    or when metadata cannot be parsed safely.
    """
    path = Path(audio_path)
    if not path.exists() or not path.is_file():
        return None

    if path.suffix.casefold() not in {".wav", ".wave"}:
        return None

    try:
        with wave.open(str(path), "rb") as handle:
            frame_count = handle.getnframes()
            sample_rate = handle.getframerate()
            channels = handle.getnchannels()
        if sample_rate <= 0:
            return None
    except (OSError, wave.Error):
        return None

    return AudioMetadata(
        duration_sec=round(max(0.0, frame_count / sample_rate), 3),
        sample_rate_hz=sample_rate,
        channels=channels,
        audio_format="wav",
    )


def read_wav_audio(audio_path: str | Path) -> AudioBuffer | None:
    """Read PCM WAV audio as an interleaved float32 buffer in range [-1, 1]."""
    path = Path(audio_path)
    if path.suffix.casefold() not in {".wav", ".wave"}:
        return None

    try:
        with wave.open(str(path), "rb") as handle:
            sample_rate = handle.getframerate()
            channels = handle.getnchannels()
            sample_width = handle.getsampwidth()
            frame_count = handle.getnframes()
            raw = handle.readframes(frame_count)
    except (OSError, wave.Error):
        return None

    if sample_rate <= 0 or channels <= 0:
        return None

    if sample_width == 1:
        data = np.frombuffer(raw, dtype=np.uint8).astype(np.float32)
        data = (data - 128.0) / 128.0
    elif sample_width == 2:
        data = np.frombuffer(raw, dtype="<i2").astype(np.float32) / 32768.0
    elif sample_width == 4:
        data = np.frombuffer(raw, dtype="<i4").astype(np.float32) / 2147483648.0
    else:
        return None

    samples = data.reshape(-1, channels) if channels > 1 else data
    return AudioBuffer(
        samples=samples.astype(np.float32),
        sample_rate_hz=sample_rate,
        channels=channels,
        layout="interleaved",
    )
