"""Building blocks for tokenization pipelines: templates, padding and truncation settings, SentencePiece charsmaps and helpers."""

__version__ = "0.1.0"

__all__ = ["helpers", "params", "settings", "slices", "spm", "template"]