"""Asset handling — plan and perform public folder copies.

Each configured folder name maps ``public/<name>`` to ``<output>/<name>``.
A missing source folder is reported on stderr and tolerated: the
instruction is still produced, flagged so that the copy step skips it.
"""

from __future__ import annotations

import shutil
import sys
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pagepack._errors import ExportError
from pagepack.export.pages import ExportedFile

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class CopyInstruction:
    """A single folder copy.

    Attributes:
        source: Folder to copy from (under the public root).
        destination: Folder to copy to (under the build root).
        source_exists: Whether *source* existed when the plan was built.
        missing_is_fatal: Whether a missing *source* should fail the copy.

    """

    source: Path
    destination: Path
    source_exists: bool = True
    missing_is_fatal: bool = False

    def to_dict(self) -> dict[str, object]:
        """Copy-plugin pattern form (``from`` / ``to`` / ``noErrorOnMissing``)."""
        return {
            "from": str(self.source),
            "to": str(self.destination),
            "noErrorOnMissing": not self.missing_is_fatal,
        }


def build_copy_specs(
    folder_names: Iterable[str],
    public_root: Path,
    build_root: Path,
) -> tuple[CopyInstruction, ...]:
    """Map folder names to copy instructions.

    Never raises for a missing source folder; prints a warning to stderr
    instead.

    Args:
        folder_names: Folder names relative to both roots.
        public_root: Root the folders are copied from.
        build_root: Root the folders are copied to.

    """
    specs: list[CopyInstruction] = []
    for folder in folder_names:
        source = public_root / folder
        exists = source.is_dir()
        if not exists:
            print(f'  Source folder "{source}" does not exist.', file=sys.stderr)
        specs.append(CopyInstruction(
            source=source,
            destination=build_root / folder,
            source_exists=exists,
            missing_is_fatal=False,
        ))
    return tuple(specs)


def copy_folders(instructions: Iterable[CopyInstruction]) -> tuple[ExportedFile, ...]:
    """Carry out copy instructions, returning one record per copied file.

    Sources missing at copy time are skipped unless the instruction marks
    them fatal.

    Raises:
        ExportError: If a fatal source is missing or a copy fails.

    """
    results: list[ExportedFile] = []

    for spec in instructions:
        if not spec.source.is_dir():
            if spec.missing_is_fatal:
                msg = f"Asset folder {spec.source} does not exist"
                raise ExportError(msg)
            continue

        for src_file in sorted(spec.source.rglob("*")):
            if not src_file.is_file():
                continue

            t0 = time.perf_counter()
            relative = src_file.relative_to(spec.source)
            dest_file = spec.destination / relative
            try:
                dest_file.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(src_file, dest_file)
            except OSError as exc:
                msg = f"Failed to copy {src_file} to {dest_file}: {exc}"
                raise ExportError(msg) from exc

            elapsed = (time.perf_counter() - t0) * 1000
            results.append(ExportedFile(
                source_path=f"/{spec.destination.name}/{relative.as_posix()}",
                output_path=dest_file,
                source_type="asset",
                size_bytes=dest_file.stat().st_size,
                duration_ms=elapsed,
            ))

    return tuple(results)
