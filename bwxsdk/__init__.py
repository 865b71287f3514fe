"""Gap-buffer text storage, a formatted text document model, word-wrapped layout and colour helpers."""

__version__ = "1.0.0"