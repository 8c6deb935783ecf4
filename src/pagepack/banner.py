"""Build banner — mode-aware status output.

Prints a short summary of what a build discovered, with timing and any
warnings.  Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pagepack.bundle.model import BuildConfig


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "development": (_GREEN, "dev"),
    "production": (_YELLOW, "prod"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def collect_warnings(build: BuildConfig) -> list[str]:
    """Return human-readable warnings for a finished assembly."""
    warnings: list[str] = []
    for spec in build.copy_specs:
        if not spec.source_exists:
            warnings.append(f"asset folder missing: {spec.source}")
    if not build.pages:
        warnings.append("no pages discovered")
    return warnings


def print_banner(
    build: BuildConfig,
    *,
    load_ms: float = 0.0,
    watching: bool = False,
    warnings: list[str] | None = None,
) -> None:
    """Print the build banner to stderr.

    Args:
        build: The assembled build configuration.
        load_ms: Time spent assembling in milliseconds.
        watching: Whether a watcher will keep rebuilding.
        warnings: Optional list of warning messages to display.

    """
    from pagepack import __version__

    header = f"  {_BOLD}pagepack{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(build.mode)}"

    lines: list[str] = [
        "",
        header,
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {_plural(len(build.pages), 'page')} rendered{timing}")
    lines.append(f"  {_DIM}├─{_RESET} {_plural(len(build.style_imports), 'style fragment')}")
    lines.append(f"  {_DIM}├─{_RESET} source maps: {build.source_map}")
    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{build.output.path}{_RESET}")

    if build.dev_server is not None:
        url = f"http://localhost:{build.dev_server.port}"
        lines.append("")
        lines.append(f"  {_BOLD}{_CYAN}{url}{_RESET}")

    if watching:
        lines.append("")
        lines.append(f"  {_DIM}Watching for changes...{_RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)
