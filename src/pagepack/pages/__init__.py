"""Page discovery and rendering.

Scans a ``pages/`` directory for Python modules, imports them, and renders
each into a :class:`PageTask`.

Public API::

    from pagepack.pages import discover_pages

    tasks = discover_pages(Path("my-site/src/pages"))
    for task in tasks:
        print(task.output_filename, len(task.markup))
"""

from pagepack.pages.registry import (
    ModulePageSource,
    PageSource,
    PageTask,
    discover_pages,
    list_page_files,
    pages_from_sources,
)

__all__ = [
    "ModulePageSource",
    "PageSource",
    "PageTask",
    "discover_pages",
    "list_page_files",
    "pages_from_sources",
]
