"""Build configuration records.

Every record is a frozen dataclass; mappings are wrapped in read-only
proxies and sequences are tuples, so a BuildConfig cannot change after
the assembler returns it.  ``to_dict()`` produces the plain, JSON-ready
shape the bundler consumes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pagepack._types import BuildMode
    from pagepack.export.assets import CopyInstruction
    from pagepack.pages.registry import PageTask


def frozen_mapping(data: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    """Return a read-only copy of *data*."""
    return MappingProxyType(dict(data or {}))


def to_plain(value: Any) -> Any:
    """Convert records, proxies, tuples and paths into JSON-ready values."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (tuple, list)):
        return [to_plain(v) for v in value]
    if isinstance(value, Path):
        return str(value)
    return value


@dataclass(frozen=True, slots=True)
class LoaderSpec:
    """One loader in a module rule's chain."""

    loader: str
    options: Mapping[str, Any] = field(default_factory=frozen_mapping)

    def to_dict(self) -> str | dict[str, Any]:
        if not self.options:
            return self.loader
        return {"loader": self.loader, "options": to_plain(self.options)}


@dataclass(frozen=True, slots=True)
class ModuleRule:
    """How files matching ``test`` are processed.

    Attributes:
        test: Regular expression source matched against module paths.
        flags: Regular expression flags (``"i"`` for case-insensitive).
        use: Loader chain, applied last to first by the bundler.
        type: Built-in asset module type, when no loaders are used.
        generator: Output options for asset modules.

    """

    test: str
    flags: str = ""
    use: tuple[LoaderSpec, ...] = ()
    type: str | None = None
    generator: Mapping[str, Any] = field(default_factory=frozen_mapping)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"test": self.test}
        if self.flags:
            data["flags"] = self.flags
        if self.use:
            data["use"] = [loader.to_dict() for loader in self.use]
        if self.type is not None:
            data["type"] = self.type
        if self.generator:
            data["generator"] = to_plain(self.generator)
        return data


@dataclass(frozen=True, slots=True)
class PluginDescriptor:
    """A bundler plugin and its options, e.g. ``html`` or ``define``."""

    kind: str
    options: Mapping[str, Any] = field(default_factory=frozen_mapping)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "options": to_plain(self.options)}


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Where and how bundles are written."""

    path: Path
    filename: str
    clean: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"path": str(self.path), "filename": self.filename, "clean": self.clean}


@dataclass(frozen=True, slots=True)
class DevServerConfig:
    """Interactive development server settings.

    Attributes:
        static_dir: Directory served as-is.
        port: Bind port.
        open: Open a browser on start.
        history_api_fallback: Serve the index page for unknown paths.
        hot: Enable hot module replacement.
        watch_files: Globs (relative to the project root) that trigger reloads.

    """

    static_dir: Path
    port: int
    open: bool = True
    history_api_fallback: bool = True
    hot: bool = True
    watch_files: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "static": {"directory": str(self.static_dir)},
            "port": self.port,
            "open": self.open,
            "historyApiFallback": self.history_api_fallback,
            "hot": self.hot,
            "watchFiles": list(self.watch_files),
        }


@dataclass(frozen=True, slots=True)
class ResolveConfig:
    """Module resolution: import aliases and implicit extensions."""

    aliases: Mapping[str, Path] = field(default_factory=frozen_mapping)
    extensions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"alias": to_plain(self.aliases), "extensions": list(self.extensions)}


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """The complete description of one build.

    Attributes:
        mode: ``"development"`` or ``"production"``.
        entry: Bundle entry module.
        output: Output location and naming.
        module_rules: Per-file-type processing rules.
        plugins: Plugin descriptors (one ``html`` plugin per page first).
        dev_server: Present only when an interactive server will run.
        resolve: Aliases and extensions.
        source_map: Source-map style (inline ``eval-source-map`` in
            development, external ``source-map`` in production).
        minimize: Whether minification is enabled.
        minimizers: Minimizers applied when *minimize* is true.
        pages: Rendered pages, in discovery order.
        copy_specs: Asset folder copies.
        style_imports: Import lines written to the styles file.
        api_url: Value embedded for ``process.env.API_URL``.

    """

    mode: BuildMode
    entry: Path
    output: OutputConfig
    module_rules: tuple[ModuleRule, ...]
    plugins: tuple[PluginDescriptor, ...]
    dev_server: DevServerConfig | None
    resolve: ResolveConfig
    source_map: str
    minimize: bool
    minimizers: tuple[str, ...]
    pages: tuple[PageTask, ...] = ()
    copy_specs: tuple[CopyInstruction, ...] = ()
    style_imports: tuple[str, ...] = ()
    api_url: str = ""

    @property
    def is_dev(self) -> bool:
        return self.mode == "development"

    def to_dict(self) -> dict[str, Any]:
        """Return the bundler-facing configuration as plain data."""
        data: dict[str, Any] = {
            "mode": self.mode,
            "entry": str(self.entry),
            "output": self.output.to_dict(),
            "module": {"rules": [rule.to_dict() for rule in self.module_rules]},
            "plugins": [plugin.to_dict() for plugin in self.plugins],
            "resolve": self.resolve.to_dict(),
            "devtool": self.source_map,
            "optimization": {
                "minimize": self.minimize,
                "minimizer": list(self.minimizers),
            },
        }
        if self.dev_server is not None:
            data["devServer"] = self.dev_server.to_dict()
        return data
