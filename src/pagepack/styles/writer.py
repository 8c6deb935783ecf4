"""Generated styles file — keep the managed import block in sync.

The styles entry is shared between the tool and the user.  The tool owns
the block between the sentinel comments; everything else belongs to the
user and survives regeneration (empty lines are dropped)::

    // pagepack:styles:begin
    import "./a/base.pcss";
    import "./a/b/widget.pcss";
    // pagepack:styles:end

    import "./vendor/reset.css";

Files written before the sentinels existed are migrated by stripping
every line that looks like a generated fragment import.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pagepack._errors import StyleWriteError
from pagepack.styles.aggregator import DEFAULT_EXTENSION

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

BEGIN_MARKER = "// pagepack:styles:begin"
END_MARKER = "// pagepack:styles:end"


def _legacy_import_pattern(extension: str) -> re.Pattern[str]:
    return re.compile(rf'import ".*{re.escape(extension)}";')


def _split_managed(lines: list[str], extension: str) -> list[str]:
    """Return the user-owned lines of *lines*, without the managed block."""
    stripped = [line.strip() for line in lines]
    if BEGIN_MARKER in stripped:
        begin = stripped.index(BEGIN_MARKER)
        if END_MARKER in stripped[begin:]:
            end = stripped.index(END_MARKER, begin)
            return lines[:begin] + lines[end + 1:]

    # No complete managed block: fall back to pattern stripping.
    pattern = _legacy_import_pattern(extension)
    return [
        line
        for line, bare in zip(lines, stripped, strict=True)
        if bare not in (BEGIN_MARKER, END_MARKER) and not pattern.fullmatch(bare)
    ]


def render_styles_file(
    current: str,
    import_lines: Sequence[str],
    extension: str = DEFAULT_EXTENSION,
) -> str:
    """Compute the new styles file content from *current* and *import_lines*.

    Pure function: no filesystem access.  Rendering its own output again
    with the same *import_lines* returns the identical string.

    """
    remainder = [
        line for line in _split_managed(current.splitlines(), extension) if line.strip()
    ]
    managed = "\n".join([BEGIN_MARKER, *import_lines, END_MARKER]) + "\n"
    user = "".join(f"{line}\n" for line in remainder)
    return f"{managed}\n{user}"


def sync_styles_file(
    import_lines: Sequence[str],
    target: Path,
    extension: str = DEFAULT_EXTENSION,
) -> bool:
    """Merge *import_lines* into the styles file at *target*.

    A missing file is treated as empty.  The file is only rewritten when
    its content changes.

    Returns:
        True if the file was written, False if it was already up to date.

    Raises:
        StyleWriteError: If the file cannot be read or written.

    """
    try:
        current = target.read_text(encoding="utf-8")
    except FileNotFoundError:
        current = ""
    except OSError as exc:
        msg = f"Cannot read styles file {target}: {exc}"
        raise StyleWriteError(msg) from exc

    content = render_styles_file(current, import_lines, extension)
    if content == current:
        return False

    try:
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot write styles file {target}: {exc}"
        raise StyleWriteError(msg) from exc
    return True
