from __future__ import annotations

import pytest

from keep_preview.config import ConfigError, PreviewConfig
from keep_preview.exceptions import ExtensionLoadError, RenderError
from keep_preview.renderer import build_markdown, is_svg_path, render_html


def test_render_html_bold():
    assert render_html("**bold**") == "<p><strong>bold</strong></p>"


def test_render_html_bold_before_hangul():
    assert render_html("**강조**에") == "<p><strong>강조</strong>에</p>"


def test_render_html_empty():
    assert render_html("") == ""


def test_render_html_list_with_emphasis():
    html = render_html("- *a*\n- **b**")

    assert "<li><em>a</em></li>" in html
    assert "<li><strong>b</strong></li>" in html


def test_render_html_keeps_environment_tex_intact():
    html = render_html("\\begin{align}x<1\\end{align}")

    assert '<div class="math-display">$$\n\\begin{align}x&lt;1\\end{align}\n$$</div>' in html


def test_render_html_keeps_underscores_in_math():
    html = render_html("$$a_1 + b_1$$")

    assert "$$a_1 + b_1$$" in html
    assert "<em>" not in html


def test_render_html_fenced_code_is_verbatim():
    html = render_html("```\n**x** $$y$$\n```")

    assert "<code>" in html
    assert "**x** $$y$$" in html
    assert "math-display" not in html


def test_render_html_inline_code_keeps_dollars():
    html = render_html("`$$x$$` text")

    assert "<code>$$x$$</code>" in html
    assert "math-display" not in html


def test_render_html_indented_code_keeps_dollars():
    html = render_html("Example:\n\n    cost = $$5 + $$6\n")

    assert "<pre><code>cost = $$5 + $$6\n</code></pre>" in html
    assert "math-display" not in html


def test_render_html_indented_line_without_blank_is_not_code():
    html = render_html("text\n    $$x$$")

    assert "<pre>" not in html
    assert '<div class="math-display">$$x$$</div>' in html


def test_render_html_svg_image_becomes_object():
    html = render_html("![Chart](img/chart.svg)")

    assert "<img" not in html
    assert "<object" in html
    assert 'class="md-svg-object"' in html
    assert 'type="image/svg+xml"' in html
    assert 'data="img/chart.svg"' in html
    assert 'aria-label="Chart"' in html
    assert ">Chart</object>" in html


def test_render_html_svg_keeps_title():
    html = render_html('![Chart](chart.svg "Sales")')

    assert 'title="Sales"' in html


def test_render_html_svg_resolved_against_base_url():
    config = PreviewConfig(base_url="https://example.com/notes/")

    html = render_html("![Chart](img/chart.svg?v=2)", config)

    assert 'data="https://example.com/notes/img/chart.svg?v=2"' in html


def test_render_html_svg_objects_can_be_disabled():
    html = render_html("![Chart](chart.svg)", PreviewConfig(svg_as_object=False))

    assert "<img" in html
    assert "<object" not in html


def test_render_html_other_images_untouched():
    html = render_html("![Photo](photo.png)")

    assert "<img" in html
    assert 'src="photo.png"' in html


def test_render_html_line_breaks():
    assert "<br" in render_html("a\nb")
    assert "<br" not in render_html("a\nb", PreviewConfig(line_breaks=False))


def test_render_html_tables():
    html = render_html("| a | b |\n| --- | --- |\n| 1 | 2 |")

    assert "<table>" in html


def test_render_html_accepts_single_extension_name():
    html = render_html("a|b\n-|-\n1|2", PreviewConfig(extensions="tables"))

    assert "<table>" in html


def test_build_markdown_rejects_unknown_extension():
    config = PreviewConfig(extensions=("keep_preview_missing_extension",))

    with pytest.raises(ExtensionLoadError) as excinfo:
        build_markdown(config)

    assert excinfo.value.name == "keep_preview_missing_extension"
    assert isinstance(excinfo.value, RenderError)


def test_build_markdown_validates_config():
    with pytest.raises(ConfigError):
        build_markdown(PreviewConfig(max_file_size=0))


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("diagram.svg", True),
        ("diagram.SVG", True),
        (" diagram.svg ", True),
        ("diagram.svg?v=2#top", True),
        ("diagram.svg#frag", True),
        ("photo.png", False),
        ("svg/photo.png", False),
        (None, False),
    ],
)
def test_is_svg_path(path, expected: bool):
    assert is_svg_path(path) is expected
