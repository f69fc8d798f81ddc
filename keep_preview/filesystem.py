"""Filesystem helpers for keep-preview."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import TextIO

from .constants import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_SAVE_NAME,
    MARKDOWN_EXTENSIONS,
    SVG_EXTENSIONS,
)

MAX_FILE_SIZE_ENV_VAR = "KEEP_PREVIEW_MAX_FILE_SIZE"
NEW_FILE_MODE = 0o644


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["KEEP_PREVIEW_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def is_svg_file(path: Path) -> bool:
    return path.suffix.lower() in SVG_EXTENSIONS


def default_save_name(name: str | None) -> str:
    """Return the file name a document is saved under.

    Examples:
        default_save_name("notes")  # "notes.md"
        default_save_name("notes.md")  # "notes.md"
        default_save_name(None)  # "untitled.md"
    """
    name = name or DEFAULT_SAVE_NAME
    return name if name.endswith(".md") else f"{name}.md"


def contains_symlink(path: Path) -> bool:
    """Check whether a path or any parent directory is a symlink.

    Args:
        path: Path to inspect.

    Returns:
        bool: True when a symlink is encountered, otherwise False.
    """
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve and validate a document path under a base directory.

    Args:
        raw_path: User-supplied path to a Markdown or SVG file (absolute or relative).
        base_dir: Working directory that constrains allowed paths.

    Returns:
        Path: Absolute path to the document.

    Raises:
        ValueError: If the path does not exist, is outside `base_dir`, uses an
            unsupported extension, or traverses a symlink.

    Examples:
        normalize_filepath("notes/today.md", Path.cwd())
        normalize_filepath("~/diagram.svg", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        error_message = f"Symlinks are not supported for security reasons: {path}"
        raise ValueError(error_message)

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        error_message = f"{resolved} is outside of the working directory {base_dir}."
        raise ValueError(error_message) from error

    supported = (*MARKDOWN_EXTENSIONS, *SVG_EXTENSIONS)
    if resolved.suffix.lower() not in supported:
        error_message = f"{resolved} is not a Markdown or SVG file.\n"
        error_message += f"Supported extensions are: {', '.join(supported)}"
        raise ValueError(error_message)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Raises:
        IOError: If the path is inaccessible, a symlink, or not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if stat.S_ISLNK(stat_result.st_mode):
        error_message = f"Symlinks are not supported: {filepath}."
        raise IOError(error_message)

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("notes.md")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def read_document(filepath: Path, max_size: int) -> str:
    """Read a UTF-8 document after checking its size.

    Raises:
        IOError: If the file is too large, unreadable, or not valid UTF-8.
    """
    enforce_file_size(collect_file_stat(filepath), max_size, filepath)
    try:
        with safe_read(filepath) as file:
            return file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise IOError(error_message) from error


def write_text_atomic(filepath: Path, content: str):
    """Write `content` to `filepath` through a temporary file in the same directory.

    Existing permissions are kept when the target already exists; new files
    are created readable by everyone.

    Args:
        filepath: Destination path.
        content: Text written in UTF-8.

    Returns:
        None.

    Raises:
        IOError: If the temporary file cannot be written or moved into place.

    Examples:
        write_text_atomic(Path("preview.html"), "<p>hi</p>\\n")
    """
    try:
        permissions = stat.S_IMODE(os.stat(filepath).st_mode)
    except FileNotFoundError:
        permissions = NEW_FILE_MODE

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)

            # Ensure the temporary file is flushed and synced before the swap
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

        os.replace(temp_path, filepath)
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
