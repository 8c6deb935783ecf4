"""Page registry — discover, load, and render page modules.

Every non-private ``.py`` file in the pages directory is one page:

    pages/home.py     -> home.html
    pages/about.py    -> about.html
    pages/_layout.py  -> (helper, not a page)

Render convention — the module exposes a zero-argument callable that
returns the full HTML document::

    def render() -> str:
        return "<!DOCTYPE html>..."

A callable named ``default`` is accepted when ``render`` is absent.

Loading is split from rendering: all modules are imported (concurrently,
on a thread pool) before any page is rendered.  Any module that fails
stops discovery with :class:`ModuleLoadError`; there are no partial
results.
"""

from __future__ import annotations

import importlib.util
import inspect
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pagepack._errors import DiscoveryError, ModuleLoadError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pagepack._types import RenderFunc

PAGE_EXTENSION = ".py"

# Callable names tried, in order, on each page module
_RENDER_NAMES: tuple[str, ...] = ("render", "default")

# Prefix for page modules registered in sys.modules
_MODULE_PREFIX = "pagepack_pages."


@runtime_checkable
class PageSource(Protocol):
    """Anything that can produce a named HTML page."""

    def name(self) -> str: ...

    def render(self) -> str: ...


@dataclass(frozen=True, slots=True)
class PageTask:
    """One HTML document to emit.

    Attributes:
        page_name: Base name of the page (file stem of its module).
        markup: Rendered HTML document.

    """

    page_name: str
    markup: str

    @property
    def output_filename(self) -> str:
        """File name of the emitted document (``<page_name>.html``)."""
        return f"{self.page_name}.html"


@dataclass(frozen=True, slots=True)
class ModulePageSource:
    """A page backed by a Python module on disk.

    Attributes:
        path: Filesystem path to the page module.
        func: The module's zero-argument render callable.

    """

    path: Path
    func: RenderFunc

    @classmethod
    def load(cls, path: Path) -> ModulePageSource:
        """Import the module at *path* and resolve its render callable.

        Raises:
            ModuleLoadError: If the module cannot be imported or exposes no
                zero-argument ``render``/``default`` callable.

        """
        module = _load_module(path)
        for attr in _RENDER_NAMES:
            func = getattr(module, attr, None)
            if func is not None:
                _validate_render(func, attr, path)
                return cls(path=path, func=func)

        msg = (
            f"Page module {path} must define a zero-argument "
            f"'render()' function returning an HTML string."
        )
        raise ModuleLoadError(msg)

    def name(self) -> str:
        return self.path.stem

    def render(self) -> str:
        return self.func()


def list_page_files(pages_dir: Path) -> list[Path]:
    """Return page module files in *pages_dir*, in sorted listing order.

    Skips subdirectories, non-``.py`` files, and files whose names start
    with ``_`` (``__init__.py`` and private helpers).

    Raises:
        DiscoveryError: If *pages_dir* does not exist or cannot be listed.

    """
    try:
        entries = sorted(pages_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        msg = f"Cannot read pages directory {pages_dir}: {exc}"
        raise DiscoveryError(msg) from exc

    return [
        entry
        for entry in entries
        if entry.suffix == PAGE_EXTENSION
        and not entry.name.startswith("_")
        and entry.is_file()
    ]


def discover_pages(
    pages_dir: Path,
    *,
    max_workers: int | None = None,
) -> tuple[PageTask, ...]:
    """Load every page module in *pages_dir* and render it.

    Modules load in parallel; the returned tasks follow listing order.

    Raises:
        DiscoveryError: If *pages_dir* is missing or unreadable.
        ModuleLoadError: If any page module fails to load or render.

    """
    files = list_page_files(pages_dir)
    if not files:
        return ()

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="pagepack-load") as pool:
        # Executor.map re-raises the first failure in submission order.
        sources = list(pool.map(ModulePageSource.load, files))

    return pages_from_sources(sources)


def pages_from_sources(sources: Iterable[PageSource]) -> tuple[PageTask, ...]:
    """Render each source into a :class:`PageTask`.

    Accepts any :class:`PageSource`, so pages can be registered in code
    rather than discovered on disk.

    Raises:
        ModuleLoadError: If a source raises while rendering, returns a
            non-string, or shares its name with an earlier source.

    """
    tasks: list[PageTask] = []
    seen: set[str] = set()

    for source in sources:
        name = source.name()
        if name in seen:
            msg = f"Duplicate page name {name!r}"
            raise ModuleLoadError(msg)
        seen.add(name)

        try:
            markup = source.render()
        except Exception as exc:
            msg = f"Page {name!r} failed to render: {exc}"
            raise ModuleLoadError(msg) from exc

        if not isinstance(markup, str):
            msg = f"Page {name!r} must render a str, got {type(markup).__name__}"
            raise ModuleLoadError(msg)

        tasks.append(PageTask(page_name=name, markup=markup))

    return tuple(tasks)


def _load_module(path: Path) -> object:
    """Import a Python file as a module without touching ``sys.path``."""
    module_name = _MODULE_PREFIX + path.stem

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot create an import spec for page module {path}"
        raise ModuleLoadError(msg)

    try:
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"Failed to load page module {path}: {exc}"
        raise ModuleLoadError(msg) from exc

    return module


def _validate_render(func: object, name: str, source: Path) -> None:
    """Validate that a render callable is synchronous and takes no arguments.

    Raises:
        ModuleLoadError: If *func* is not callable, is async, or requires
            arguments.

    """
    if not callable(func):
        msg = f"Page module {source}: '{name}' must be callable, got {type(func).__name__}"
        raise ModuleLoadError(msg)

    if inspect.iscoroutinefunction(func):
        msg = f"Page render '{name}' in {source} must be a regular function, not async."
        raise ModuleLoadError(msg)

    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return

    required = [
        p
        for p in sig.parameters.values()
        if p.default is inspect.Parameter.empty
        and p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    if required:
        msg = (
            f"Page render '{name}' in {source} must take no arguments "
            f"(required: {', '.join(p.name for p in required)})."
        )
        raise ModuleLoadError(msg)
