"""Data models for keep-preview."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


@dataclass(frozen=True)
class ShieldedText:
    """Text with protected regions swapped out for placeholder tokens.

    Attributes:
        text: Text where every protected region is a ``__PROT_<index>__`` token.
        protected: Original protected regions, indexed by token number.
    """

    text: str
    protected: tuple[str, ...] = ()


class RegionKind(Enum):
    """Regions of editor text that emphasis rewriting must not touch.

    Attributes:
        FENCED_CODE: Triple-backtick block, closed by the next triple backtick.
        INLINE_CODE: Single-backtick span on one line.
        INDENTED_CODE: Lines indented by four spaces or a tab after a blank line.
        DISPLAY_MATH: ``$$...$$`` block.
        ENVIRONMENT: ``\\begin{NAME}...\\end{NAME}`` block.
        PLACEHOLDER_PREFIX: Literal ``__PROT_`` text typed by the user.
    """

    FENCED_CODE = auto()
    INLINE_CODE = auto()
    INDENTED_CODE = auto()
    DISPLAY_MATH = auto()
    ENVIRONMENT = auto()
    PLACEHOLDER_PREFIX = auto()


class ListKind(Enum):
    """Kinds of list items recognised at the cursor line.

    Attributes:
        BULLET: Item introduced by ``*``, ``+`` or ``-``.
        NUMBERED: Item introduced by a decimal number and a period.
    """

    BULLET = auto()
    NUMBERED = auto()


@dataclass(frozen=True)
class ListLine:
    """A list item split into its parts.

    Attributes:
        kind: Whether the item is bulleted or numbered.
        indent: Leading whitespace before the marker.
        marker: Bullet glyph, or the item number as written.
        separator: Text between the marker and the content (``.`` included
            for numbered items).
        content: Item text following the separator.
    """

    kind: ListKind
    indent: str
    marker: str
    separator: str
    content: str

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()

    def next_prefix(self) -> str:
        """Return the prefix that opens the item following this one."""
        marker = self.marker
        if self.kind is ListKind.NUMBERED:
            marker = str(int(marker) + 1)
        return f"{self.indent}{marker}{self.separator}"


class EditAction(Enum):
    """Outcome of a newline keypress inside the editor.

    Attributes:
        CONTINUE_LIST: A new list marker was inserted after the cursor line.
        TERMINATE_LIST: The empty list item under the cursor was removed.
        NO_MATCH: The cursor line is not a list item; insert a plain newline.
    """

    CONTINUE_LIST = auto()
    TERMINATE_LIST = auto()
    NO_MATCH = auto()


@dataclass(frozen=True)
class EditResult:
    """Instruction returned to the caller after a newline keypress.

    Attributes:
        action: Which edit was decided on.
        text: Full buffer text after the edit, or None for `NO_MATCH`.
        cursor: Cursor offset after the edit, or None for `NO_MATCH`.
        marker: Prefix inserted on the new line for `CONTINUE_LIST`.
    """

    action: EditAction
    text: str | None = None
    cursor: int | None = None
    marker: str = ""

    @classmethod
    def noop(cls) -> EditResult:
        return cls(EditAction.NO_MATCH)

    @property
    def is_noop(self) -> bool:
        return self.action is EditAction.NO_MATCH


@dataclass(frozen=True)
class DocumentStats:
    """Word and character counts shown next to the preview.

    Attributes:
        words: Number of whitespace-separated words.
        characters: Number of characters, whitespace included.
    """

    words: int
    characters: int
