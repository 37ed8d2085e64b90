"""Audio buffer and resample spec value types."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

import numpy as np

from voxfront.errors import InvalidResampleSpec

SampleFormat = Literal["float32", "float64", "int16", "int32"]
Layout = Literal["interleaved", "planar"]
Quality = Literal["low", "medium", "high"]

SAMPLE_FORMATS: tuple[SampleFormat, ...] = ("float32", "float64", "int16", "int32")
QUALITIES: tuple[Quality, ...] = ("low", "medium", "high")

_INT_SCALE = {"int16": 32768.0, "int32": 2147483648.0}


@dataclass(frozen=True, eq=False)
class AudioBuffer:
    """Sample data plus the metadata needed to interpret it.

    Mono audio may be a 1-D array. Multi-channel audio is 2-D: `(frames,
    channels)` when interleaved, `(channels, frames)` when planar.
    """

    samples: np.ndarray
    sample_rate_hz: int
    channels: int = 1
    layout: Layout = "interleaved"

    def __post_init__(self) -> None:
        if self.sample_rate_hz <= 0:
            raise ValueError("Sample rates must be positive")
        if self.channels < 1:
            raise ValueError("Audio must have at least one channel")
        if self.samples.dtype.name not in SAMPLE_FORMATS:
            raise ValueError(f"Unsupported sample dtype: {self.samples.dtype.name}")
        if self.samples.ndim == 1:
            if self.channels != 1:
                raise ValueError("1-D sample arrays must be mono")
        elif self.samples.ndim == 2:
            axis = 1 if self.layout == "interleaved" else 0
            if self.samples.shape[axis] != self.channels:
                raise ValueError(
                    f"{self.layout} samples of shape {self.samples.shape} do not hold "
                    f"{self.channels} channel(s)"
                )
        else:
            raise ValueError("Sample arrays must be 1-D or 2-D")

    @property
    def sample_format(self) -> SampleFormat:
        return self.samples.dtype.name  # type: ignore[return-value]

    @property
    def frames(self) -> int:
        if self.samples.ndim == 1 or self.layout == "interleaved":
            return int(self.samples.shape[0])
        return int(self.samples.shape[1])

    @property
    def duration_sec(self) -> float:
        return self.frames / self.sample_rate_hz

    def frames_first(self) -> np.ndarray:
        """Samples as float64 with shape `(frames, channels)`."""
        data = to_float(self.samples)
        if data.ndim == 1:
            return data.reshape(-1, 1)
        return data if self.layout == "interleaved" else data.T

    def with_frames(
        self,
        frames: np.ndarray,
        *,
        sample_rate_hz: int | None = None,
        sample_format: SampleFormat | None = None,
    ) -> AudioBuffer:
        """Build a buffer shaped like this one from `(frames, channels)` float data."""
        data = frames[:, 0] if self.samples.ndim == 1 else frames
        if self.samples.ndim == 2 and self.layout == "planar":
            data = data.T
        return AudioBuffer(
            samples=np.ascontiguousarray(from_float(data, sample_format or self.sample_format)),
            sample_rate_hz=sample_rate_hz or self.sample_rate_hz,
            channels=frames.shape[1],
            layout=self.layout,
        )


@dataclass(frozen=True)
class ResampleSpec:
    """Rate conversion request, independent of any particular buffer."""

    source_rate_hz: float
    target_rate_hz: float
    channels: int = 1
    quality: Quality = "medium"
    output_format: SampleFormat | None = None

    def validate(self) -> None:
        for name, rate in (("source_rate_hz", self.source_rate_hz), ("target_rate_hz", self.target_rate_hz)):
            if not isinstance(rate, (int, float)) or isinstance(rate, bool):
                raise InvalidResampleSpec(f"{name} must be a number, got {rate!r}")
            if not math.isfinite(rate) or rate <= 0:
                raise InvalidResampleSpec(f"{name} must be positive and finite, got {rate!r}")
        if self.channels < 1:
            raise InvalidResampleSpec(f"channels must be at least 1, got {self.channels}")
        if self.quality not in QUALITIES:
            raise InvalidResampleSpec(f"Unknown resample quality: {self.quality!r}")
        if self.output_format is not None and self.output_format not in SAMPLE_FORMATS:
            raise InvalidResampleSpec(f"Unknown output format: {self.output_format!r}")


def to_float(samples: np.ndarray) -> np.ndarray:
    """Convert samples of any supported format to float64 in [-1, 1]."""
    name = samples.dtype.name
    if name in _INT_SCALE:
        return samples.astype(np.float64) / _INT_SCALE[name]
    return samples.astype(np.float64)


def from_float(samples: np.ndarray, sample_format: SampleFormat) -> np.ndarray:
    """Convert float samples to `sample_format`, clipping integer output."""
    if sample_format in _INT_SCALE:
        scale = _INT_SCALE[sample_format]
        scaled = np.round(np.clip(samples, -1.0, (scale - 1.0) / scale) * scale)
        return scaled.astype(sample_format)
    return samples.astype(sample_format)


def remix_channels(buffer: AudioBuffer, channels: int) -> AudioBuffer:
    """Down-mix to mono by averaging, or up-mix mono by duplication."""
    if channels < 1:
        raise ValueError("channels must be at least 1")
    if channels == buffer.channels:
        return buffer
    frames = buffer.frames_first()
    mono = frames.mean(axis=1, keepdims=True)
    remixed = np.repeat(mono, channels, axis=1)
    samples = from_float(remixed[:, 0] if channels == 1 else remixed, buffer.sample_format)
    return AudioBuffer(
        samples=np.ascontiguousarray(samples if channels == 1 or buffer.layout == "interleaved" else samples.T),
        sample_rate_hz=buffer.sample_rate_hz,
        channels=channels,
        layout=buffer.layout,
    )
