"""Bundle configuration — the value handed to the external bundler.

Public API::

    from pagepack.bundle import assemble

    config = assemble("production", {"API_URL": "https://api.example.com"})
    payload = config.to_dict()
"""

from pagepack.bundle.assembler import assemble
from pagepack.bundle.model import (
    BuildConfig,
    DevServerConfig,
    LoaderSpec,
    ModuleRule,
    OutputConfig,
    PluginDescriptor,
    ResolveConfig,
)

__all__ = [
    "BuildConfig",
    "DevServerConfig",
    "LoaderSpec",
    "ModuleRule",
    "OutputConfig",
    "PluginDescriptor",
    "ResolveConfig",
    "assemble",
]
