"""Band-limited sample-rate conversion with a Kaiser-windowed sinc kernel.

Output sample `k` sits at input position `k * source / target`. Each output is
a weighted sum of the input samples within the kernel's half-width, so
streaming and whole-buffer conversion produce the same samples.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from fractions import Fraction

import numpy as np

from voxfront.audio.buffer import (
    SAMPLE_FORMATS,
    AudioBuffer,
    ResampleSpec,
    SampleFormat,
    from_float,
    to_float,
)
from voxfront.errors import InvalidResampleSpec

logger = logging.getLogger(__name__)

_BLOCK = 4096
_MAX_DENOMINATOR = 1_000_000


@dataclass(frozen=True)
class KernelParams:
    zero_crossings: int
    beta: float
    rolloff: float


QUALITY_PRESETS = {
    "low": KernelParams(zero_crossings=8, beta=6.0, rolloff=0.85),
    "medium": KernelParams(zero_crossings=16, beta=8.6, rolloff=0.90),
    "high": KernelParams(zero_crossings=32, beta=10.0, rolloff=0.95),
}


def output_length(input_frames: int, source_rate_hz: float, target_rate_hz: float) -> int:
    """`ceil(input_frames * target / source)`, computed exactly."""
    ratio = _ratio(source_rate_hz, target_rate_hz)
    return -(-input_frames * ratio.denominator // ratio.numerator)


def _ratio(source_rate_hz: float, target_rate_hz: float) -> Fraction:
    return (Fraction(source_rate_hz) / Fraction(target_rate_hz)).limit_denominator(_MAX_DENOMINATOR)


class ResamplerState:
    """Filter history for one audio stream.

    Feed chunks with `process()` and finish with `flush()`. A state belongs to
    exactly one stream and must not be shared between threads.
    """

    def __init__(self, spec: ResampleSpec) -> None:
        spec.validate()
        self.spec = spec
        self.passthrough = spec.source_rate_hz == spec.target_rate_hz
        ratio = _ratio(spec.source_rate_hz, spec.target_rate_hz)
        self._step_num = ratio.numerator
        self._step_den = ratio.denominator

        params = QUALITY_PRESETS[spec.quality]
        self._cutoff = min(1.0, spec.target_rate_hz / spec.source_rate_hz) * params.rolloff
        self._beta = params.beta
        self._half_width = int(math.ceil(params.zero_crossings / self._cutoff))
        self._taps = np.arange(-self._half_width + 1, self._half_width + 1)

        # History starts with half_width zeros standing in for samples before t=0.
        self._history = np.zeros((self._half_width, spec.channels))
        self._history_start = -self._half_width
        self._input_frames = 0
        self._next_output = 0
        self.flushed = False
        self._input_format: SampleFormat | None = None

    @property
    def input_frames(self) -> int:
        return self._input_frames

    @property
    def output_frames(self) -> int:
        return self._next_output

    def process(self, chunk: np.ndarray) -> np.ndarray:
        """Consume a chunk and return every output sample it completes."""
        if self.flushed:
            raise RuntimeError("Resampler stream was already flushed")
        chunk = np.asarray(chunk)
        if self._input_format is None:
            self._input_format = _sample_format(chunk)
        frames = self._frames_first(chunk)
        self._input_frames += frames.shape[0]

        if self.passthrough:
            self._next_output += frames.shape[0]
            if self.output_format == _sample_format(chunk):
                return chunk.copy()
            return self._shape_like(chunk, frames)

        self._history = np.concatenate([self._history, frames])
        last_ready = self._last_output_ready(self._input_frames - 1 - self._half_width)
        output = self._render(last_ready)
        self._trim_history()
        return self._shape_like(chunk, output)

    def flush(self) -> np.ndarray:
        """Zero-pad the tail and return the remaining output samples."""
        if self.flushed:
            raise RuntimeError("Resampler stream was already flushed")
        self.flushed = True
        mono = self.spec.channels == 1
        if self.passthrough:
            empty = np.zeros((0, self.spec.channels))
            return self._format(empty[:, 0] if mono else empty)

        total = output_length(self._input_frames, self.spec.source_rate_hz, self.spec.target_rate_hz)
        padding = np.zeros((2 * self._half_width + 1, self.spec.channels))
        self._history = np.concatenate([self._history, padding])
        output = self._render(total)
        self._trim_history()
        return self._format(output[:, 0] if mono else output)

    def _last_output_ready(self, max_base: int) -> int:
        """Index one past the last output whose right-most tap is at or below `max_base`."""
        if max_base < 0:
            return self._next_output
        # Largest k with floor(k * num / den) <= max_base.
        return max(self._next_output, ((max_base + 1) * self._step_den - 1) // self._step_num + 1)

    def _render(self, stop: int) -> np.ndarray:
        blocks = []
        for start in range(self._next_output, stop, _BLOCK):
            blocks.append(self._render_block(np.arange(start, min(stop, start + _BLOCK))))
        self._next_output = max(self._next_output, stop)
        if not blocks:
            return np.zeros((0, self.spec.channels))
        return np.concatenate(blocks)

    def _render_block(self, outputs: np.ndarray) -> np.ndarray:
        scaled = outputs.astype(np.int64) * self._step_num
        base = scaled // self._step_den
        fraction = (scaled % self._step_den) / self._step_den

        offsets = fraction[:, None] - self._taps[None, :]
        weights = self._kernel(offsets)
        weights /= weights.sum(axis=1, keepdims=True)

        indices = base[:, None] + self._taps[None, :] - self._history_start
        window = self._history[indices]
        return np.einsum("kt,ktc->kc", weights, window)

    def _kernel(self, offsets: np.ndarray) -> np.ndarray:
        ratio = np.clip(offsets / self._half_width, -1.0, 1.0)
        window = np.i0(self._beta * np.sqrt(1.0 - ratio**2)) / np.i0(self._beta)
        return self._cutoff * np.sinc(self._cutoff * offsets) * window

    def _trim_history(self) -> None:
        next_base = (self._next_output * self._step_num) // self._step_den
        keep_from = next_base - self._half_width + 1
        drop = keep_from - self._history_start
        if drop > 0:
            self._history = self._history[drop:]
            self._history_start = keep_from

    def _frames_first(self, chunk: np.ndarray) -> np.ndarray:
        data = to_float(np.asarray(chunk))
        if data.ndim == 1:
            data = data.reshape(-1, 1)
        if data.ndim != 2 or data.shape[1] != self.spec.channels:
            raise InvalidResampleSpec(
                f"Chunk of shape {np.shape(chunk)} does not match {self.spec.channels} channel(s)"
            )
        return data

    def _shape_like(self, chunk: np.ndarray, frames: np.ndarray) -> np.ndarray:
        data = frames[:, 0] if np.ndim(chunk) == 1 else frames
        return self._format(data)

    @property
    def output_format(self) -> SampleFormat:
        """`spec.output_format` if set, else the format of the first chunk."""
        return self.spec.output_format or self._input_format or "float32"

    def _format(self, data: np.ndarray) -> np.ndarray:
        return from_float(data, self.output_format)


def resample_chunk(state: ResamplerState, chunk: np.ndarray) -> np.ndarray:
    return state.process(chunk)


def flush(state: ResamplerState) -> np.ndarray:
    return state.flush()


def resample(buffer: AudioBuffer, spec: ResampleSpec) -> AudioBuffer:
    """Convert a whole buffer to `spec.target_rate_hz`.

    Equal rates return a copy of the samples with no filtering. Channel count
    and layout are kept; the sample format changes only when
    `spec.output_format` is set.
    """
    spec.validate()
    if buffer.channels != spec.channels:
        raise InvalidResampleSpec(
            f"Buffer has {buffer.channels} channel(s) but spec expects {spec.channels}"
        )
    if buffer.sample_rate_hz != spec.source_rate_hz:
        raise InvalidResampleSpec(
            f"Buffer rate {buffer.sample_rate_hz} Hz does not match spec source rate "
            f"{spec.source_rate_hz} Hz"
        )

    output_format = spec.output_format or buffer.sample_format
    target_rate = _as_rate(spec.target_rate_hz)
    if spec.source_rate_hz == spec.target_rate_hz:
        if output_format == buffer.sample_format:
            return AudioBuffer(
                samples=buffer.samples.copy(),
                sample_rate_hz=target_rate,
                channels=buffer.channels,
                layout=buffer.layout,
            )
        return buffer.with_frames(buffer.frames_first(), sample_format=output_format)

    state = ResamplerState(
        ResampleSpec(
            source_rate_hz=spec.source_rate_hz,
            target_rate_hz=spec.target_rate_hz,
            channels=spec.channels,
            quality=spec.quality,
            output_format="float64",
        )
    )
    frames = buffer.frames_first()
    converted = np.concatenate([state.process(frames), state.flush().reshape(-1, spec.channels)])
    logger.debug(
        "Resampled %d frames at %s Hz to %d frames at %s Hz (%s quality)",
        frames.shape[0],
        spec.source_rate_hz,
        converted.shape[0],
        spec.target_rate_hz,
        spec.quality,
    )
    return buffer.with_frames(converted, sample_rate_hz=target_rate, sample_format=output_format)


def _sample_format(samples: np.ndarray) -> SampleFormat:
    name = samples.dtype.name
    return name if name in SAMPLE_FORMATS else "float64"  # type: ignore[return-value]


def _as_rate(rate: float) -> int:
    return int(rate) if float(rate).is_integer() else rate  # type: ignore[return-value]
