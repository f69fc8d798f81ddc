"""
keep-preview: live Markdown preview core.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    keep-preview render notes.md -o notes.html

Library Usage:
    from keep_preview import on_newline, render_html, transform

    html_ready = transform("**강조**에 and $$x^2$$")
    html = render_html("- item with *emphasis*")
    result = on_newline("- item one", 10)
    if not result.is_noop:
        text, cursor = result.text, result.cursor
"""

from .config import ConfigError, PreviewConfig
from .exceptions import ExtensionLoadError, RenderError
from .lists import apply_edit, classify_line, compute_list_continuation, on_newline
from .models import (
    DocumentStats,
    EditAction,
    EditResult,
    ListKind,
    ListLine,
    RegionKind,
    ShieldedText,
)
from .renderer import render_html
from .stats import compute_stats
from .transformer import render_pipeline, shield, transform, unshield

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "transform",
    "render_pipeline",
    "on_newline",
    "compute_list_continuation",
    "shield",
    "unshield",
    "classify_line",
    "apply_edit",
    # Rendering
    "render_html",
    "compute_stats",
    # Data models
    "DocumentStats",
    "EditAction",
    "EditResult",
    "ListKind",
    "ListLine",
    "RegionKind",
    "ShieldedText",
    "PreviewConfig",
    # Exceptions
    "ConfigError",
    "ExtensionLoadError",
    "RenderError",
    # Version
    "__version__",
]
