"""voxfront: multilingual text front end and audio back end for speech synthesis."""

__version__ = "0.1.0"
