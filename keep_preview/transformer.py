"""Pre-render transformation of editor text.

The pipeline wraps bare LaTeX environments in display-math delimiters, shields
code and math from rewriting, resolves ``**strong**`` and ``*italic*`` markers
into explicit tags, and restores the shielded regions.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence

from .constants import (
    CODE_FENCE,
    ENVIRONMENT_OPEN_PATTERN,
    INDENTED_CODE_PATTERN,
    INLINE_CODE_BODY_PATTERN,
    ITALIC_PATTERN,
    ITALIC_TAG,
    MATH_DELIMITER,
    MATH_WRAP_REGIONS,
    PLACEHOLDER_PATTERN,
    PLACEHOLDER_PREFIX,
    PLACEHOLDER_TEMPLATE,
    REGION_OPENER_PATTERN,
    SHIELDED_REGIONS,
    STRONG_CLOSE_PATTERN,
    STRONG_PATTERN,
    STRONG_TAG,
)
from .models import RegionKind, ShieldedText


def _find_closer(text: str, closer: str, start: int, exhausted: set[str]) -> int:
    """Return the end of the first `closer` at or after `start`, or -1.

    A closer that is missing once stays missing for every later start, so it is
    remembered in `exhausted` and never searched for again.
    """
    if closer in exhausted:
        return -1
    position = text.find(closer, start)
    if position < 0:
        exhausted.add(closer)
        return -1
    return position + len(closer)


def _region_end(text: str, start: int, kind: RegionKind, exhausted: set[str]) -> int:
    """Return where a region of `kind` opening at `start` ends, or -1."""
    if kind is RegionKind.FENCED_CODE:
        if not text.startswith(CODE_FENCE, start):
            return -1
        return _find_closer(text, CODE_FENCE, start + len(CODE_FENCE), exhausted)

    if kind is RegionKind.INLINE_CODE:
        if not text.startswith("`", start):
            return -1
        body_end = INLINE_CODE_BODY_PATTERN.match(text, start + 1).end()
        return body_end + 1 if text.startswith("`", body_end) else -1

    if kind is RegionKind.DISPLAY_MATH:
        if not text.startswith(MATH_DELIMITER, start):
            return -1
        return _find_closer(text, MATH_DELIMITER, start + len(MATH_DELIMITER), exhausted)

    if kind is RegionKind.ENVIRONMENT:
        opener = ENVIRONMENT_OPEN_PATTERN.match(text, start)
        if opener is None:
            return -1
        return _find_closer(text, f"\\end{{{opener.group(1)}}}", opener.end(), exhausted)

    if kind is RegionKind.PLACEHOLDER_PREFIX:
        if not text.startswith(PLACEHOLDER_PREFIX, start):
            return -1
        return start + len(PLACEHOLDER_PREFIX)

    if kind is RegionKind.INDENTED_CODE:
        # Only a block that follows a blank line (or opens the text) is code.
        if start > 1 and text[start - 2 : start] != "\n\n":
            return -1
        if start == 1 and text[0] != "\n":
            return -1
        block = INDENTED_CODE_PATTERN.match(text, start)
        return block.end() if block else -1

    raise ValueError(f"Unknown region kind: {kind}")


def find_regions(text: str, kinds: Sequence[RegionKind]) -> list[tuple[int, int, RegionKind]]:
    """Locate protected regions in a single left-to-right pass.

    At each offset the kinds are tried in the given order and the first one
    that closes wins; the scan then resumes after it, so a region never starts
    inside another. Running time grows linearly with the text, even when many
    openers are never closed.

    Args:
        text: Text to scan.
        kinds: Region kinds to look for, highest priority first.

    Returns:
        list[tuple[int, int, RegionKind]]: ``(start, end, kind)`` for each
            region, in text order.

    Examples:
        find_regions("a `b` $$c$$", (RegionKind.INLINE_CODE, RegionKind.DISPLAY_MATH))
        # [(2, 5, RegionKind.INLINE_CODE), (6, 11, RegionKind.DISPLAY_MATH)]
    """
    regions: list[tuple[int, int, RegionKind]] = []
    exhausted: set[str] = set()
    position = 0
    while True:
        opener = REGION_OPENER_PATTERN.search(text, position)
        if opener is None:
            return regions
        start = opener.start()
        position = start + 1
        for kind in kinds:
            end = _region_end(text, start, kind, exhausted)
            if end > start:
                regions.append((start, end, kind))
                position = end
                break


def replace_regions(
    text: str,
    regions: Iterable[tuple[int, int, RegionKind]],
    replace: Callable[[RegionKind, str], str],
) -> str:
    """Rebuild `text` with each region swapped for ``replace(kind, region_text)``."""
    parts: list[str] = []
    position = 0
    for start, end, kind in regions:
        parts.append(text[position:start])
        parts.append(replace(kind, text[start:end]))
        position = end
    parts.append(text[position:])
    return "".join(parts)


def wrap_math_environments(text: str) -> str:
    r"""Wrap bare ``\begin{NAME}...\end{NAME}`` blocks in display-math delimiters.

    Blocks already inside a ``$$...$$`` pair, and anything inside code spans or
    fenced code, are left untouched. Environments without a matching
    ``\end{NAME}`` are not wrapped.

    Args:
        text: Raw editor text.

    Returns:
        str: Text where every bare environment sits between ``$$`` lines.

    Examples:
        wrap_math_environments("\\begin{align}x=1\\end{align}")
        # "$$\n\\begin{align}x=1\\end{align}\n$$"
    """

    def _wrap(kind: RegionKind, region: str) -> str:
        if kind is not RegionKind.ENVIRONMENT:
            return region
        return f"{MATH_DELIMITER}\n{region}\n{MATH_DELIMITER}"

    return replace_regions(text, find_regions(text, MATH_WRAP_REGIONS), _wrap)


def shield(text: str) -> ShieldedText:
    """Replace code spans, code blocks, and math blocks with placeholder tokens.

    The scan runs once from left to right, so a region consumed by an earlier
    one (for example an inline code span inside a fenced block) is never
    shielded on its own. A literal ``__PROT_`` prefix in the text is shielded
    too, which keeps tokens from colliding with user content.

    Args:
        text: Text to shield.

    Returns:
        ShieldedText: The shielded text and the ordered protected originals.

    Examples:
        shield("`a` and `b`")
        # ShieldedText(text="__PROT_0__ and __PROT_1__", protected=("`a`", "`b`"))
    """
    protected: list[str] = []

    def _store(kind: RegionKind, region: str) -> str:
        protected.append(region)
        return PLACEHOLDER_TEMPLATE.format(index=len(protected) - 1)

    shielded = replace_regions(text, find_regions(text, SHIELDED_REGIONS), _store)
    return ShieldedText(text=shielded, protected=tuple(protected))


def unshield(text: str, protected: Sequence[str]) -> str:
    """Restore placeholder tokens to their original text.

    Tokens whose index has no stored original are left as they are.
    """

    def _restore(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index < len(protected):
            return protected[index]
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_restore, text)


def rewrite_strong(text: str, tag: str = STRONG_TAG) -> str:
    """Turn ``**content**`` into ``<strong>content</strong>``.

    Content must not start or end with whitespace or ``*`` and may span lines.
    Text after the last possible closing marker is never scanned, so unclosed
    ``**`` runs cost linear time.
    """
    end = max((match.end() for match in STRONG_CLOSE_PATTERN.finditer(text)), default=0)
    head = STRONG_PATTERN.sub(lambda match: f"<{tag}>{match.group(1)}</{tag}>", text[:end])
    return head + text[end:]


def rewrite_italic(text: str, tag: str = ITALIC_TAG) -> str:
    """Turn ``*content*`` into ``<em>content</em>``.

    Content stays on one line, and neither marker may touch another ``*``, so
    leftovers of doubled markers are never read as italics.
    """
    return ITALIC_PATTERN.sub(lambda match: f"<{tag}>{match.group(1)}</{tag}>", text)


def transform(raw: str) -> str:
    """Prepare raw editor text for a Markdown renderer.

    Runs the math wrap, shielding, the strong rewrite, the italic rewrite, and
    unshielding, in that order. Strong markers are resolved before italic ones
    so a bold run followed directly by non-Latin text (``**강조**에``) is not
    split into stray italics.

    Args:
        raw: The full editor buffer.

    Returns:
        str: Text with emphasis resolved to tags and code/math restored verbatim.

    Examples:
        transform("**bold** and *it*")  # "<strong>bold</strong> and <em>it</em>"
    """
    text = wrap_math_environments(raw)
    shielded = shield(text)
    text = rewrite_strong(shielded.text)
    text = rewrite_italic(text)
    return unshield(text, shielded.protected)


render_pipeline = transform
