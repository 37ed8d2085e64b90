"""Text normalization, segmentation and grapheme-to-phoneme helpers."""
