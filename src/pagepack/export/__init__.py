"""Export layer — write built pages and copy asset folders.

Materializes what the build configuration describes: one HTML file per
page and the configured public folders, into the output directory.
"""

from pagepack.export.assets import CopyInstruction, build_copy_specs, copy_folders
from pagepack.export.pages import ExportedFile, ExportResult, collapse_whitespace, write_pages

__all__ = [
    "CopyInstruction",
    "ExportResult",
    "ExportedFile",
    "build_copy_specs",
    "collapse_whitespace",
    "copy_folders",
    "write_pages",
]
