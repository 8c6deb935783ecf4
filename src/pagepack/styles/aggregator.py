"""Style fragment discovery.

Walks a source tree and turns every style fragment into an import line
for the generated styles entry:

    src/a/base.pcss        -> import "./a/base.pcss";
    src/a/b/widget.pcss    -> import "./a/b/widget.pcss";

Within each directory, files come before subdirectories and both are
visited in sorted name order, so the output is stable across hosts.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pagepack._errors import DiscoveryError

DEFAULT_EXTENSION = ".pcss"


@dataclass(frozen=True, slots=True)
class FragmentPath:
    """A discovered style fragment.

    Attributes:
        path: Absolute filesystem path to the fragment.
        relative: Path relative to the source root, always ``/``-separated.

    """

    path: Path
    relative: str


def import_statement(relative: str) -> str:
    """Return the generated import line for a source-root-relative path."""
    return f'import "./{relative}";'


def find_fragments(
    root_dir: Path,
    source_root: Path | None = None,
    extension: str = DEFAULT_EXTENSION,
) -> tuple[FragmentPath, ...]:
    """Recursively collect style fragments under *root_dir*.

    Args:
        root_dir: Directory to scan.
        source_root: Directory the relative paths are computed from.
            Defaults to *root_dir*.
        extension: File suffix identifying a style fragment.

    Raises:
        DiscoveryError: If *root_dir* does not exist or cannot be listed.

    """
    base = source_root if source_root is not None else root_dir
    return tuple(_walk(root_dir, base, extension))


def aggregate_imports(
    root_dir: Path,
    source_root: Path | None = None,
    extension: str = DEFAULT_EXTENSION,
) -> tuple[str, ...]:
    """Return one import line per fragment under *root_dir*, in traversal order."""
    return tuple(
        import_statement(fragment.relative)
        for fragment in find_fragments(root_dir, source_root, extension)
    )


def _walk(directory: Path, base: Path, extension: str) -> list[FragmentPath]:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        msg = f"Cannot read style directory {directory}: {exc}"
        raise DiscoveryError(msg) from exc

    files = [e for e in entries if not e.is_dir()]
    subdirs = [e for e in entries if e.is_dir()]

    found: list[FragmentPath] = []
    for entry in files:
        if entry.name.endswith(extension):
            relative = entry.relative_to(base).as_posix()
            found.append(FragmentPath(path=entry, relative=relative))
    for subdir in subdirs:
        found.extend(_walk(subdir, base, extension))
    return found
