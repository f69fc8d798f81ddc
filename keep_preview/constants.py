"""Constants used across the keep-preview package."""

from __future__ import annotations

import re

from .config import PreviewConfig
from .models import RegionKind

DEFAULT_CONFIG = PreviewConfig()

# Display-math delimiter emitted around bare LaTeX environments
MATH_DELIMITER = "$$"
CODE_FENCE = "```"

# Placeholder tokens standing in for protected regions while emphasis is rewritten
PLACEHOLDER_PREFIX = "__PROT_"
PLACEHOLDER_TEMPLATE = PLACEHOLDER_PREFIX + "{index}__"
PLACEHOLDER_PATTERN = re.compile(r"__PROT_(\d+)__")

# Offsets where a protected region may start; the kinds are then tried in order.
REGION_OPENER_PATTERN = re.compile(r"`|\$\$|\\begin\{|__PROT_|^(?: {4}|\t)", re.MULTILINE)
ENVIRONMENT_OPEN_PATTERN = re.compile(r"\\begin\{([a-zA-Z]*\*?)\}")
INLINE_CODE_BODY_PATTERN = re.compile(r"[^`\n]*")
# Blank lines belong to the block only when more indented lines follow them.
INDENTED_CODE_PATTERN = re.compile(
    r"(?:(?: {4}|\t)[^\n]*(?:\n|\Z)(?:[ \t]*\n(?=(?: {4}|\t)))*)+"
)

# Code and delimited math are kept as-is; only bare environments get wrapped.
MATH_WRAP_REGIONS = (
    RegionKind.FENCED_CODE,
    RegionKind.INLINE_CODE,
    RegionKind.DISPLAY_MATH,
    RegionKind.ENVIRONMENT,
)
# A literal token prefix in user text is shielded too, so restoration never misreads it.
SHIELDED_REGIONS = MATH_WRAP_REGIONS + (RegionKind.PLACEHOLDER_PREFIX,)
# Renderer: display math is stashed, code of every kind is skipped so `$$` inside it survives
RENDER_REGIONS = (
    RegionKind.FENCED_CODE,
    RegionKind.INLINE_CODE,
    RegionKind.INDENTED_CODE,
    RegionKind.DISPLAY_MATH,
)

# Emphasis
STRONG_PATTERN = re.compile(r"\*\*([^*\s](?:[\s\S]*?[^*\s])?)\*\*")
# Every strong match ends on one of these; nothing after the last one can match.
STRONG_CLOSE_PATTERN = re.compile(r"[^*\s]\*\*")
ITALIC_PATTERN = re.compile(r"(?<!\*)\*([^*\s](?:[^*\n]*?[^*\s])?)\*(?!\*)")
STRONG_TAG = "strong"
ITALIC_TAG = "em"

# List items (matched against the line prefix before the cursor)
BULLET_PATTERN = re.compile(r"(?P<indent>\s*)(?P<marker>[*+-])(?P<separator>\s+)(?P<content>.*)")
NUMBERED_PATTERN = re.compile(
    r"(?P<indent>\s*)(?P<marker>[0-9]+)(?P<separator>\.\s+)(?P<content>.*)"
)

SVG_PATH_PATTERN = re.compile(r"\.svg(\?.*)?(#.*)?$", re.IGNORECASE)

# Files
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".txt")
SVG_EXTENSIONS = (".svg",)
DEFAULT_SAVE_NAME = "untitled.md"
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
