from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from keep_preview.config import (
    ConfigError,
    PreviewConfig,
    apply_overrides,
    build_config,
    load_config,
    normalize_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".keep-preview.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.keep-preview]
        extensions = ["fenced_code"]
        line_breaks = false
        svg_as_object = false
        base_url = "https://example.com/"
        max_file_size = 1024
        """,
    )

    config = load_config(tmp_path)

    assert config == PreviewConfig(
        extensions=("fenced_code",),
        line_breaks=False,
        svg_as_object=False,
        base_url="https://example.com/",
        max_file_size=1024,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [keep-preview]
        line_breaks = false
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.line_breaks is False
    assert config.extensions == PreviewConfig().extensions


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.keep-preview]
        base_url = "https://notes.example/"
        """,
    )

    assert load_config(tmp_path).base_url == "https://notes.example/"


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.keep-preview]
        svg_as_object = false
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    assert load_config(nested).svg_as_object is False


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.keep-preview]
        line_breaks = false
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.keep-preview]
        """,
    )

    assert load_config(child) == PreviewConfig()


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    assert load_config(tmp_path) == PreviewConfig()


def test_load_config_skips_invalid_toml(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.keep-preview]
        line_breaks = false
        """,
    )
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    (invalid_dir / "pyproject.toml").write_text("[tool.keep-preview\n", encoding="utf-8")

    assert load_config(invalid_dir).line_breaks is False


def test_load_config_rejects_unknown_keys(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.keep-preview]
        theme = "dark"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_non_table(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        keep-preview = "yes"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_normalize_config_accepts_single_extension_name():
    config = normalize_config(PreviewConfig(extensions="tables", base_url=""))

    assert config.extensions == ("tables",)
    assert config.base_url is None


@pytest.mark.parametrize(
    "config",
    [
        PreviewConfig(extensions=("",)),
        PreviewConfig(extensions=(1,)),
        PreviewConfig(extensions=None),
        PreviewConfig(line_breaks="yes"),
        PreviewConfig(svg_as_object=1),
        PreviewConfig(base_url=5),
        PreviewConfig(max_file_size=0),
        PreviewConfig(max_file_size=True),
        PreviewConfig(max_file_size="10"),
    ],
)
def test_validate_config_rejects_invalid_values(config: PreviewConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_validate_config_accepts_defaults():
    validate_config(PreviewConfig())


def test_apply_overrides_ignores_none():
    config = PreviewConfig(line_breaks=False)

    assert apply_overrides(config, line_breaks=None, base_url=None) is config


def test_apply_overrides_replaces_values():
    config = apply_overrides(PreviewConfig(), line_breaks=False, base_url="https://x.test/")

    assert config.line_breaks is False
    assert config.base_url == "https://x.test/"


def test_build_config_applies_overrides_and_validates(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.keep-preview]
        extensions = ["tables"]
        """,
    )

    config = build_config(tmp_path, line_breaks=False)

    assert config.extensions == ("tables",)
    assert config.line_breaks is False


def test_build_config_raises_on_invalid_file_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.keep-preview]
        max_file_size = -1
        """,
    )

    with pytest.raises(ConfigError):
        build_config(tmp_path)
