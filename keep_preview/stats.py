"""Word and character counts for the preview status bar."""

from __future__ import annotations

from .models import DocumentStats


def compute_stats(text: str) -> DocumentStats:
    """Count words and characters in `text`.

    Words are runs of non-whitespace in the stripped text; a blank text has no
    words. Characters are counted on the text as given, whitespace included.

    Examples:
        compute_stats("  two words ")  # DocumentStats(words=2, characters=12)
    """
    stripped = text.strip()
    words = len(stripped.split()) if stripped else 0
    return DocumentStats(words=words, characters=len(text))
