"""Page export — write rendered pages as HTML files.

Each :class:`PageTask` becomes ``<output>/<page_name>.html``.  Production
builds collapse insignificant whitespace in the markup.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pagepack._errors import ExportError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pagepack.pages.registry import PageTask

_BETWEEN_TAGS = re.compile(r">\s+<")
_WHITESPACE_RUN = re.compile(r"\s+")

# Elements whose content is kept byte-for-byte when collapsing
_RAW_ELEMENT = re.compile(
    r"<(pre|textarea|script|style)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_RAW_PLACEHOLDER = re.compile(r"<\x00(\d+)>")


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        source_path: Logical source (e.g., ``"/home.html"``).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the exported file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to render and write this file.

    """

    source_path: str
    output_path: Path
    source_type: Literal["page", "asset", "config"]
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of a full build.

    Attributes:
        files: All files written during the build.
        total_pages: Number of HTML pages written.
        total_assets: Number of asset files copied.
        duration_ms: Total wall-clock time for the build.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[ExportedFile, ...]
    total_pages: int
    total_assets: int
    duration_ms: float
    output_dir: Path


def collapse_whitespace(markup: str) -> str:
    """Drop whitespace between tags and squeeze the remaining runs to one space.

    Content of ``<pre>``, ``<textarea>``, ``<script>`` and ``<style>`` is
    left untouched.
    """
    raw: list[str] = []

    def _stash(match: re.Match[str]) -> str:
        raw.append(match.group(0))
        return f"<\x00{len(raw) - 1}>"

    collapsed = _BETWEEN_TAGS.sub("><", _RAW_ELEMENT.sub(_stash, markup))
    collapsed = _WHITESPACE_RUN.sub(" ", collapsed).strip()
    return _RAW_PLACEHOLDER.sub(lambda m: raw[int(m.group(1))], collapsed)


def write_pages(
    tasks: Iterable[PageTask],
    output_dir: Path,
    *,
    minify: bool = False,
) -> tuple[ExportedFile, ...]:
    """Write one HTML file per task into *output_dir*.

    Raises:
        ExportError: If a page cannot be written.

    """
    results: list[ExportedFile] = []

    for task in tasks:
        t0 = time.perf_counter()
        markup = collapse_whitespace(task.markup) if minify else task.markup
        path = output_dir / task.output_filename
        data = markup.encode("utf-8")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            msg = f"Failed to write page {path}: {exc}"
            raise ExportError(msg) from exc

        elapsed = (time.perf_counter() - t0) * 1000
        results.append(ExportedFile(
            source_path=f"/{task.output_filename}",
            output_path=path,
            source_type="page",
            size_bytes=len(data),
            duration_ms=elapsed,
        ))

    return tuple(results)
