"""I/O helpers for audio input and front-end output."""

from voxfront.io.audio import AudioMetadata, read_audio_metadata, read_wav_audio
from voxfront.io.export import (
    read_json,
    to_json,
    to_token_lines,
    write_json,
    write_token_lines,
)

__all__ = [
    "AudioMetadata",
    "read_audio_metadata",
    "read_json",
    "read_wav_audio",
    "to_json",
    "to_token_lines",
    "write_json",
    "write_token_lines",
]
