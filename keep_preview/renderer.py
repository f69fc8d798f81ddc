"""HTML rendering of transformed editor text."""

from __future__ import annotations

import html
import xml.etree.ElementTree as etree
from urllib.parse import urljoin

import markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

from .config import PreviewConfig, normalize_config, validate_config
from .constants import RENDER_REGIONS, SVG_PATH_PATTERN
from .exceptions import ExtensionLoadError
from .models import RegionKind
from .transformer import find_regions, replace_regions, transform


def is_svg_path(path: object) -> bool:
    """Check whether an image path points at an SVG file.

    A query string or fragment after the ``.svg`` suffix is allowed.

    Examples:
        is_svg_path("diagram.SVG?v=2#top")  # True
        is_svg_path("photo.png")  # False
    """
    return isinstance(path, str) and SVG_PATH_PATTERN.search(path.strip()) is not None


class MathStashPreprocessor(Preprocessor):
    """Keep display-math blocks away from Markdown's inline processing.

    Inline, fenced and indented code are skipped, so `$$` inside them stays text.
    """

    def run(self, lines: list[str]) -> list[str]:
        text = "\n".join(lines)
        regions = find_regions(text, RENDER_REGIONS)
        return replace_regions(text, regions, self._stash).split("\n")

    def _stash(self, kind: RegionKind, region: str) -> str:
        if kind is not RegionKind.DISPLAY_MATH:
            return region
        block = html.escape(region, quote=False)
        return self.md.htmlStash.store(f'<div class="math-display">{block}</div>')


class SvgImageTreeprocessor(Treeprocessor):
    """Render ``.svg`` images as ``<object>`` elements so they stay scriptable."""

    def __init__(self, md: markdown.Markdown, base_url: str = ""):
        super().__init__(md)
        self.base_url = base_url

    def run(self, root: etree.Element) -> None:
        for element in root.iter("img"):
            src = element.get("src", "")
            if not is_svg_path(src):
                continue

            alt = element.get("alt", "")
            title = element.get("title")
            element.attrib.clear()
            element.tag = "object"
            element.set("class", "md-svg-object")
            element.set("type", "image/svg+xml")
            element.set("data", urljoin(self.base_url, src) if self.base_url else src)
            element.set("aria-label", alt)
            if title:
                element.set("title", title)
            element.text = alt


class KeepPreviewExtension(Extension):
    """Markdown extension bundling the preview's math and SVG handling."""

    def __init__(self, **kwargs):
        self.config = {
            "base_url": ["", "URL that relative SVG paths are resolved against"],
            "svg_as_object": [True, "Render .svg images as <object> elements"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        # Runs after fenced_code (25) so fenced blocks are already stashed.
        md.preprocessors.register(MathStashPreprocessor(md), "keep_math", 15)
        if self.getConfig("svg_as_object"):
            # Images only exist once the inline processor (20) has run.
            md.treeprocessors.register(
                SvgImageTreeprocessor(md, self.getConfig("base_url")), "keep_svg", 15
            )


def build_markdown(config: PreviewConfig | None = None) -> markdown.Markdown:
    """Create a Markdown converter for the given configuration.

    Args:
        config: Rendering configuration. Defaults to a new `PreviewConfig`.

    Returns:
        markdown.Markdown: Converter with the configured extensions, ``nl2br``
            when line breaks are enabled, and `KeepPreviewExtension`.

    Raises:
        ConfigError: If the configuration fails validation.
        ExtensionLoadError: If a configured extension cannot be imported.
    """
    config = normalize_config(config or PreviewConfig())
    validate_config(config)

    names = list(config.extensions)
    if config.line_breaks:
        names.append("nl2br")

    md = markdown.Markdown()
    for name in names:
        try:
            md.registerExtensions([name], {})
        except (ImportError, AttributeError) as error:
            raise ExtensionLoadError(name) from error

    md.registerExtensions(
        [
            KeepPreviewExtension(
                base_url=config.base_url or "", svg_as_object=config.svg_as_object
            )
        ],
        {},
    )
    return md


def render_html(raw: str, config: PreviewConfig | None = None) -> str:
    """Render raw editor text to preview HTML.

    Args:
        raw: The full editor buffer.
        config: Rendering configuration. Defaults to a new `PreviewConfig`.

    Returns:
        str: HTML fragment for the preview pane.

    Raises:
        ConfigError: If the configuration fails validation.
        ExtensionLoadError: If a configured extension cannot be imported.

    Examples:
        render_html("**bold**")  # "<p><strong>bold</strong></p>"
    """
    return build_markdown(config).convert(transform(raw))
