"""pagepack application — the build, config, and dev entry points.

The three public functions wire configuration loading, assembly, and
export together.  They are what the CLI calls.
"""

from __future__ import annotations

import json
import shutil
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pagepack._errors import ExportError, PagepackError
from pagepack.bundle.assembler import assemble
from pagepack.config_loader import CONFIG_FILENAMES, load_config

if TYPE_CHECKING:
    from pagepack._types import BuildMode, Environment
    from pagepack.bundle.model import BuildConfig
    from pagepack.config import ProjectConfig
    from pagepack.export.pages import ExportResult
    from pagepack.watcher import ChangeEvent

CONFIG_OUTPUT_NAME = "build-config.json"


def build(
    root: str | Path = ".",
    mode: BuildMode = "production",
    *,
    env: Environment | None = None,
    **kwargs: object,
) -> ExportResult:
    """Build the project into its output directory.

    Assembles the configuration, then writes one HTML file per page,
    copies the configured asset folders, and writes the bundler config
    as ``build-config.json``.

    Args:
        root: Path to the project root.
        mode: ``"development"`` or ``"production"``.
        env: Environment variables; defaults to ``os.environ``.
        **kwargs: Override ProjectConfig fields.

    """
    from pagepack.banner import collect_warnings, print_banner

    config = load_config(Path(root), **kwargs)
    t0 = time.perf_counter()
    build_config = assemble(mode, env, config=config, serve=False)
    load_ms = (time.perf_counter() - t0) * 1000

    print_banner(build_config, load_ms=load_ms, warnings=collect_warnings(build_config))

    result = export(build_config, started=t0)
    _print_export_summary(result)
    return result


def export(build_config: BuildConfig, *, started: float | None = None) -> ExportResult:
    """Write pages, assets and the config file for an assembled build.

    Pipeline order:
        1. Clean output directory (when the config asks for it)
        2. Write HTML pages
        3. Copy asset folders
        4. Write ``build-config.json``

    Raises:
        ExportError: If any step fails.

    """
    from pagepack.export.assets import copy_folders
    from pagepack.export.pages import ExportedFile, ExportResult, write_pages

    start = started if started is not None else time.perf_counter()
    output_dir = build_config.output.path

    try:
        if build_config.output.clean and output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot prepare output directory {output_dir}: {exc}"
        raise ExportError(msg) from exc

    pages = write_pages(build_config.pages, output_dir, minify=build_config.minimize)
    assets = copy_folders(build_config.copy_specs)

    config_path = output_dir / CONFIG_OUTPUT_NAME
    data = (json.dumps(build_config.to_dict(), indent=2) + "\n").encode("utf-8")
    try:
        config_path.write_bytes(data)
    except OSError as exc:
        msg = f"Cannot write {config_path}: {exc}"
        raise ExportError(msg) from exc
    config_file = ExportedFile(
        source_path=f"/{CONFIG_OUTPUT_NAME}",
        output_path=config_path,
        source_type="config",
        size_bytes=len(data),
        duration_ms=0.0,
    )

    return ExportResult(
        files=(*pages, *assets, config_file),
        total_pages=len(pages),
        total_assets=len(assets),
        duration_ms=(time.perf_counter() - start) * 1000,
        output_dir=output_dir,
    )


def show_config(
    root: str | Path = ".",
    mode: BuildMode = "production",
    *,
    env: Environment | None = None,
    serve: bool | None = None,
    **kwargs: object,
) -> dict[str, Any]:
    """Assemble the project and return the bundler config as plain data."""
    config = load_config(Path(root), **kwargs)
    return assemble(mode, env, config=config, serve=serve).to_dict()


def dev(root: str | Path = ".", **kwargs: object) -> None:
    """Build in development mode and rebuild on every source change.

    Page modules and the project config file are watched as well as the
    dev-server globs; a config change reloads the configuration first.
    Build errors after the first build are reported and the watcher keeps
    running; the first build must succeed.

    Args:
        root: Path to the project root.
        **kwargs: Override ProjectConfig fields.

    """
    from pagepack.banner import collect_warnings, print_banner
    from pagepack.watcher import BuildWatcher, rebuild_globs

    config = load_config(Path(root), **kwargs)
    t0 = time.perf_counter()
    build_config = assemble("development", config=config, serve=True)
    export(build_config, started=t0)
    print_banner(
        build_config,
        load_ms=(time.perf_counter() - t0) * 1000,
        watching=True,
        warnings=collect_warnings(build_config),
    )

    watcher = BuildWatcher(config, rebuild_globs(config))
    watcher.start()
    try:
        while True:
            events = watcher.next_batch(timeout=1.0)
            if not events:
                continue
            if any(event.path.name in CONFIG_FILENAMES for event in events):
                try:
                    config = load_config(Path(root), **kwargs)
                except PagepackError as exc:
                    print(f"  Config error: {exc}", file=sys.stderr)
                    continue
            _rebuild(config, events)
    except KeyboardInterrupt:
        pass
    finally:
        watcher.stop()


def _rebuild(config: ProjectConfig, events: tuple[ChangeEvent, ...]) -> None:
    """Run one development rebuild, reporting failures without raising."""
    t0 = time.perf_counter()
    try:
        build_config = assemble("development", config=config, serve=True)
        result = export(build_config, started=t0)
    except PagepackError as exc:
        print(f"  Build error: {exc}", file=sys.stderr)
        return

    changed = "change" if len(events) == 1 else "changes"
    print(
        f"  Rebuilt {result.total_pages} page{'s' if result.total_pages != 1 else ''} "
        f"after {len(events)} {changed} in {result.duration_ms:.0f}ms",
        file=sys.stderr,
    )


def _print_export_summary(result: ExportResult) -> None:
    """Print export completion summary to stderr."""
    lines = [
        "",
        "─" * 41,
        f"  Wrote {result.total_pages} page{'s' if result.total_pages != 1 else ''}",
    ]
    if result.total_assets > 0:
        lines.append(
            f"  Copied {result.total_assets} asset{'s' if result.total_assets != 1 else ''}"
        )
    lines.append(f"  Output: {result.output_dir}")
    lines.append(f"  Done in {result.duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)
