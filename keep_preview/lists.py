"""List continuation for newline keypresses in the editor."""

from __future__ import annotations

from .constants import BULLET_PATTERN, NUMBERED_PATTERN
from .models import EditAction, EditResult, ListKind, ListLine


def classify_line(line: str) -> ListLine | None:
    """Split a line into list-item parts.

    Bullet items are checked before numbered ones; a line cannot be both.

    Args:
        line: A single line, without its trailing newline.

    Returns:
        ListLine | None: The parsed item, or None when the line is not a list
            item.

    Examples:
        classify_line("  - item")  # ListLine(BULLET, "  ", "-", " ", "item")
        classify_line("12. twelfth")  # ListLine(NUMBERED, "", "12", ". ", "twelfth")
        classify_line("plain text")  # None
    """
    candidates = (
        (ListKind.BULLET, BULLET_PATTERN),
        (ListKind.NUMBERED, NUMBERED_PATTERN),
    )
    for kind, pattern in candidates:
        match = pattern.fullmatch(line)
        if match:
            return ListLine(
                kind=kind,
                indent=match.group("indent"),
                marker=match.group("marker"),
                separator=match.group("separator"),
                content=match.group("content"),
            )
    return None


def _clamp(cursor_offset: int, text: str) -> int:
    return min(max(cursor_offset, 0), len(text))


def on_newline(text: str, cursor_offset: int) -> EditResult:
    """Decide what a newline keypress at `cursor_offset` should do.

    Only the current line up to the cursor is inspected. A non-empty list item
    is continued with the same bullet, or with its number plus one; an empty
    item is removed, which ends the list. Nesting and the numbering of later
    items are not tracked.

    Args:
        text: Full editor buffer before the newline is inserted.
        cursor_offset: Cursor position as a string index; values outside the
            buffer are clamped. The index counts code points, so a browser
            ``selectionStart`` (UTF-16 units) must be converted first when the
            text before the cursor holds characters outside the BMP.

    Returns:
        EditResult: The new buffer and cursor, or a no-op when the caller
            should insert a plain newline.

    Examples:
        on_newline("3. third", 8)  # EditResult(CONTINUE_LIST, "3. third\\n4. ", 12, "4. ")
        on_newline("- ", 2)  # EditResult(TERMINATE_LIST, "", 0)
    """
    cursor = _clamp(cursor_offset, text)
    line_start = text.rfind("\n", 0, cursor) + 1
    item = classify_line(text[line_start:cursor])

    if item is None:
        return EditResult.noop()

    if item.is_empty:
        return EditResult(
            action=EditAction.TERMINATE_LIST,
            text=text[:line_start] + text[cursor:],
            cursor=line_start,
        )

    marker = item.next_prefix()
    insertion = f"\n{marker}"
    return EditResult(
        action=EditAction.CONTINUE_LIST,
        text=text[:cursor] + insertion + text[cursor:],
        cursor=cursor + len(insertion),
        marker=marker,
    )


compute_list_continuation = on_newline


def apply_edit(text: str, cursor_offset: int, result: EditResult) -> tuple[str, int]:
    """Apply an `EditResult` the way the editor does.

    A no-op falls back to inserting a plain newline at the cursor.

    Returns:
        tuple[str, int]: Buffer text and cursor offset after the keypress.
    """
    if result.is_noop:
        cursor = _clamp(cursor_offset, text)
        return text[:cursor] + "\n" + text[cursor:], cursor + 1
    return result.text, result.cursor
