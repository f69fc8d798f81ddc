"""Package-specific exception types."""

from __future__ import annotations


class RenderError(ValueError):
    """Base class for rendering-related errors.

    Represents errors encountered while turning Markdown into HTML.
    """


class ExtensionLoadError(RenderError):
    """Raised when a configured Markdown extension cannot be loaded.

    Args:
        name: Extension name as given in the configuration.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Markdown extension {self.name!r} could not be loaded")
