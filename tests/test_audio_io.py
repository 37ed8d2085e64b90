import wave
from pathlib import Path

import numpy as np

from voxfront.audio import ResampleSpec, resample
from voxfront.io import read_audio_metadata, read_wav_audio


def test_read_audio_metadata_wav(tmp_path: Path) -> None:
    wav_path = tmp_path / "audio.wav"
    _write_wav(path=wav_path, sample_rate_hz=22050, duration_sec=0.5)

    metadata = read_audio_metadata(wav_path)

    assert metadata is not None
    assert metadata.audio_format == "wav"
    assert metadata.sample_rate_hz == 22050
    assert metadata.channels == 1
    assert metadata.duration_sec == 0.5


def test_read_audio_metadata_missing_file() -> None:
    metadata = read_audio_metadata("does-not-exist.wav")
    assert metadata is None


def test_read_audio_metadata_unsupported_file(tmp_path: Path) -> None:
    txt_path = tmp_path / "note.txt"
    txt_path.write_text("hello", encoding="utf-8")
    metadata = read_audio_metadata(txt_path)
    assert metadata is None


def test_read_wav_audio_mono(tmp_path: Path) -> None:
    wav_path = tmp_path / "audio.wav"
    _write_wav(path=wav_path, sample_rate_hz=16000, duration_sec=0.25)

    buffer = read_wav_audio(wav_path)

    assert buffer is not None
    assert buffer.sample_rate_hz == 16000
    assert buffer.sample_format == "float32"
    assert buffer.samples.shape == (4000,)


def test_read_wav_audio_stereo_is_interleaved(tmp_path: Path) -> None:
    wav_path = tmp_path / "stereo.wav"
    frames = np.array([[16384, -16384]] * 100, dtype="<i2")
    _write_wav(path=wav_path, sample_rate_hz=8000, duration_sec=0.0, channels=2, pcm=frames.tobytes())

    buffer = read_wav_audio(wav_path)

    assert buffer is not None
    assert buffer.channels == 2
    assert buffer.layout == "interleaved"
    assert buffer.samples.shape == (100, 2)
    assert np.allclose(buffer.samples[0], [0.5, -0.5])


def test_read_wav_audio_feeds_resampler(tmp_path: Path) -> None:
    wav_path = tmp_path / "audio.wav"
    _write_wav(path=wav_path, sample_rate_hz=16000, duration_sec=0.5)
    buffer = read_wav_audio(wav_path)
    assert buffer is not None

    result = resample(buffer, ResampleSpec(16000, 24000))

    assert result.frames == 12000
    assert not result.samples.any()


def test_read_wav_audio_rejects_other_formats(tmp_path: Path) -> None:
    assert read_wav_audio(tmp_path / "audio.flac") is None
    assert read_wav_audio(tmp_path / "missing.wav") is None


def _write_wav(
    path: Path,
    sample_rate_hz: int,
    duration_sec: float,
    channels: int = 1,
    pcm: bytes | None = None,
) -> None:
    frame_count = int(sample_rate_hz * duration_sec)
    payload = pcm if pcm is not None else b"\x00\x00" * frame_count * channels
    with wave.open(str(path), "wb") as handle:
        handle.setnchannels(channels)
        handle.setsampwidth(2)
        handle.setframerate(sample_rate_hz)
        handle.writeframes(payload)
