"""pagepack error hierarchy.

All pagepack-specific errors inherit from PagepackError for easy catching.
"""


class PagepackError(Exception):
    """Base error for all pagepack operations."""


class ConfigError(PagepackError):
    """Invalid or missing configuration."""


class DiscoveryError(PagepackError):
    """A pages or style directory is missing or unreadable."""


class ModuleLoadError(PagepackError):
    """A page module failed to load or does not expose a render callable."""


class StyleWriteError(PagepackError):
    """The generated styles file could not be written."""


class ExportError(PagepackError):
    """Error while writing pages or copying assets to the output directory."""
