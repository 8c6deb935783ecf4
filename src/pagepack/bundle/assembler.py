"""Build configuration assembly.

``assemble()`` runs discovery and produces the BuildConfig for one build.

Pipeline order:
    1. Discover and render pages (one ``html`` plugin per page)
    2. Aggregate style fragments and sync the generated styles file
    3. Plan asset folder copies
    4. Layer mode-dependent rules on top

Any failure in steps 1-3 propagates unchanged; no config is produced.
"""

from __future__ import annotations

import json
import os
import re
from typing import TYPE_CHECKING

from pagepack._errors import ConfigError
from pagepack.bundle.model import (
    BuildConfig,
    DevServerConfig,
    LoaderSpec,
    ModuleRule,
    OutputConfig,
    PluginDescriptor,
    ResolveConfig,
    frozen_mapping,
)
from pagepack.config import ProjectConfig
from pagepack.export.assets import build_copy_specs
from pagepack.pages.registry import discover_pages
from pagepack.styles.aggregator import aggregate_imports
from pagepack.styles.writer import sync_styles_file

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pagepack._types import BuildMode, Environment
    from pagepack.export.assets import CopyInstruction
    from pagepack.pages.registry import PageTask

MODES: tuple[str, ...] = ("development", "production")

BUNDLE_FILENAME = "[name].[contenthash].bundle.js"
CSS_FILENAME = "styles/[name][hash].css"
IMAGE_FILENAME = "assets/images/[name][ext]"
IMAGE_TEST = r"\.(png|jpe?g|gif|svg)$"

# postcss plugin chain applied to every style fragment
POSTCSS_PLUGINS: tuple[str | tuple[str, dict[str, object]], ...] = (
    "postcss-import",
    "postcss-custom-media",
    "postcss-nested",
    ("autoprefixer", {"overrideBrowserslist": ("last 2 versions",)}),
)

MINIMIZERS: tuple[str, ...] = ("css-minimizer", "terser")

# Import alias -> (root attribute, sub-path)
_ALIASES: dict[str, tuple[str, str]] = {
    "@assets": ("public_dir", "assets"),
    "@app": ("src_dir", "app"),
    "@components": ("src_dir", "components"),
    "@shared": ("src_dir", "shared"),
}

API_URL_KEY = "process.env.API_URL"


def assemble(
    mode: BuildMode,
    env: Environment | None = None,
    *,
    config: ProjectConfig | None = None,
    serve: bool | None = None,
) -> BuildConfig:
    """Discover pages, styles and assets, and build the configuration.

    Args:
        mode: ``"development"`` or ``"production"``.
        env: Environment variables; defaults to ``os.environ``.
        config: Project layout; defaults to the current directory.
        serve: Include the dev-server block.  Defaults to development mode.

    Raises:
        ConfigError: If *mode* is not a known build mode.
        DiscoveryError: If the pages or source directory is unreadable.
        ModuleLoadError: If a page module fails to load or render.
        StyleWriteError: If the styles file cannot be written.

    """
    if mode not in MODES:
        msg = f"Unknown build mode {mode!r}; expected one of {', '.join(MODES)}"
        raise ConfigError(msg)

    if config is None:
        config = ProjectConfig()
    if env is None:
        env = os.environ
    is_dev = mode == "development"
    if serve is None:
        serve = is_dev

    # 1. Pages
    pages = discover_pages(config.pages_path)

    # 2. Styles
    style_imports = aggregate_imports(
        config.src_path, config.src_path, config.style_extension,
    )
    sync_styles_file(style_imports, config.styles_path, config.style_extension)

    # 3. Asset copies
    copy_specs = build_copy_specs(
        config.copy_folders, config.public_path, config.output_path,
    )

    # 4. Configuration record
    api_url = env.get("API_URL", config.api_url_default)

    return BuildConfig(
        mode=mode,
        entry=config.entry_path,
        output=OutputConfig(path=config.output_path, filename=BUNDLE_FILENAME),
        module_rules=_module_rules(config, is_dev=is_dev),
        plugins=_plugins(pages, copy_specs, api_url, is_dev=is_dev),
        dev_server=_dev_server(config) if serve else None,
        resolve=_resolve(config),
        source_map="eval-source-map" if is_dev else "source-map",
        minimize=not is_dev,
        minimizers=MINIMIZERS,
        pages=pages,
        copy_specs=copy_specs,
        style_imports=style_imports,
        api_url=api_url,
    )


def watch_globs(config: ProjectConfig) -> tuple[str, ...]:
    """Globs, relative to the project root, watched for reloads."""
    src = config.src_dir.rstrip("/")
    suffixes = (".js", config.style_extension, ".html", ".json")
    return tuple(f"{src}/**/*{suffix}" for suffix in suffixes)


def _module_rules(config: ProjectConfig, *, is_dev: bool) -> tuple[ModuleRule, ...]:
    style_rule = ModuleRule(
        test=_suffix_pattern(config.style_extension),
        use=(
            LoaderSpec("style-loader" if is_dev else "mini-css-extract-plugin"),
            LoaderSpec("css-loader", frozen_mapping({
                "importLoaders": 1,
                "sourceMap": is_dev,
            })),
            LoaderSpec("postcss-loader", frozen_mapping({
                "postcssOptions": frozen_mapping({"plugins": _postcss_plugins()}),
            })),
        ),
    )
    image_rule = ModuleRule(
        test=IMAGE_TEST,
        flags="i",
        type="asset/resource",
        generator=frozen_mapping({"filename": IMAGE_FILENAME}),
    )
    return (style_rule, image_rule)


def _postcss_plugins() -> tuple[object, ...]:
    return tuple(
        (plugin[0], frozen_mapping(plugin[1])) if isinstance(plugin, tuple) else plugin
        for plugin in POSTCSS_PLUGINS
    )


def _plugins(
    pages: Sequence[PageTask],
    copy_specs: Sequence[CopyInstruction],
    api_url: str,
    *,
    is_dev: bool,
) -> tuple[PluginDescriptor, ...]:
    html = [
        PluginDescriptor("html", frozen_mapping({
            "filename": page.output_filename,
            "templateContent": page.markup,
            "minify": frozen_mapping({"collapseWhitespace": not is_dev}),
        }))
        for page in pages
    ]
    return (
        *html,
        PluginDescriptor("copy", frozen_mapping({
            "patterns": tuple(spec.to_dict() for spec in copy_specs),
        })),
        PluginDescriptor("mini-css-extract", frozen_mapping({"filename": CSS_FILENAME})),
        PluginDescriptor("define", frozen_mapping({API_URL_KEY: json.dumps(api_url)})),
    )


def _dev_server(config: ProjectConfig) -> DevServerConfig:
    return DevServerConfig(
        static_dir=config.public_path,
        port=config.dev_port,
        watch_files=watch_globs(config),
    )


def _resolve(config: ProjectConfig) -> ResolveConfig:
    aliases = {
        alias: config.root / getattr(config, attr) / sub
        for alias, (attr, sub) in _ALIASES.items()
    }
    return ResolveConfig(
        aliases=frozen_mapping(aliases),
        extensions=(".js", config.style_extension),
    )


def _suffix_pattern(extension: str) -> str:
    return re.escape(extension) + "$"
