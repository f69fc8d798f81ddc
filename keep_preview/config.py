"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

@dataclass
class PreviewConfig:
    """Configuration for rendering Markdown previews.

    Attributes:
        extensions: Names of Markdown extensions loaded by the HTML renderer.
        line_breaks: Whether single newlines render as ``<br />``.
        svg_as_object: Whether ``.svg`` images render as ``<object>`` elements.
        base_url: URL that relative SVG paths are resolved against, if any.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        PreviewConfig(extensions=("fenced_code",), line_breaks=False)
    """

    # Rendering
    extensions: tuple[str, ...] = ("fenced_code", "tables")
    line_breaks: bool = True

    # Images
    svg_as_object: bool = True
    base_url: str | None = None

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Attributes:
        args: Arguments provided to the underlying `ValueError`.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> PreviewConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.keep-preview]`` table from `pyproject.toml` and the
    ``[keep-preview]`` or ``[tool.keep-preview]`` table from
    `.keep-preview.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        PreviewConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("notes"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "keep-preview")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".keep-preview.toml",
            table_paths=[("keep-preview",), ("tool", "keep-preview")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return PreviewConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> PreviewConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> PreviewConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return PreviewConfig()

    try:
        return PreviewConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: PreviewConfig) -> PreviewConfig:
    extensions = config.extensions
    if isinstance(extensions, str):
        extensions = (extensions,)
    elif isinstance(extensions, list):
        extensions = tuple(extensions)

    base_url = config.base_url or None

    return replace(config, extensions=extensions, base_url=base_url)


def validate_config(config: PreviewConfig) -> None:
    """Validate a `PreviewConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If extension names are missing or not strings, boolean
            switches hold other types, or the size limit is not a positive
            integer.

    Examples:
        validate_config(PreviewConfig(extensions=("tables",)))
    """
    config = normalize_config(config)

    if not isinstance(config.extensions, tuple):
        raise ConfigError("`extensions` must be a list of extension names")
    for name in config.extensions:
        if not isinstance(name, str) or not name.strip():
            raise ConfigError("`extensions` entries must be non-empty strings")

    for key in ("line_breaks", "svg_as_object"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")

    if config.base_url is not None and not isinstance(config.base_url, str):
        raise ConfigError("`base_url` must be a string")

    size = config.max_file_size
    if isinstance(size, bool) or not isinstance(size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: PreviewConfig, **overrides: object) -> PreviewConfig:
    """Apply override values to a `PreviewConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        PreviewConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `PreviewConfig`.

    Examples:
        updated = apply_overrides(config, line_breaks=False, base_url=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> PreviewConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        PreviewConfig: Validated configuration ready for rendering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), line_breaks=False)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config
