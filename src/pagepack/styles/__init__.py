"""Style aggregation — discover fragments and keep the styles entry in sync.

Public API::

    from pagepack.styles import aggregate_imports, sync_styles_file

    lines = aggregate_imports(Path("my-site/src"))
    sync_styles_file(lines, Path("my-site/src/styles.js"))
"""

from pagepack.styles.aggregator import (
    FragmentPath,
    aggregate_imports,
    find_fragments,
    import_statement,
)
from pagepack.styles.writer import render_styles_file, sync_styles_file

__all__ = [
    "FragmentPath",
    "aggregate_imports",
    "find_fragments",
    "import_statement",
    "render_styles_file",
    "sync_styles_file",
]
