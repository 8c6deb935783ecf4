"""Tests for pagepack.pages.registry — page discovery, loading and rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagepack._errors import DiscoveryError, ModuleLoadError
from pagepack.pages.registry import (
    ModulePageSource,
    PageSource,
    PageTask,
    discover_pages,
    list_page_files,
    pages_from_sources,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    """Create a pages/ directory for testing."""
    d = tmp_path / "pages"
    d.mkdir()
    return d


def _write_page(pages_dir: Path, name: str, content: str) -> Path:
    """Write a page module and return its path."""
    p = pages_dir / name
    p.write_text(content)
    return p


def _heading_page(text: str) -> str:
    return f'def render():\n    return "<h1>{text}</h1>"\n'


class _StaticSource:
    """A PageSource registered in code rather than discovered on disk."""

    def __init__(self, name: str, markup: object) -> None:
        self._name = name
        self._markup = markup

    def name(self) -> str:
        return self._name

    def render(self) -> str:
        return self._markup  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# PageTask
# ---------------------------------------------------------------------------


class TestPageTask:
    """Verify PageTask is frozen and derives its output filename."""

    def test_output_filename(self) -> None:
        assert PageTask(page_name="home", markup="").output_filename == "home.html"

    def test_frozen(self) -> None:
        task = PageTask(page_name="home", markup="<h1>X</h1>")
        with pytest.raises(AttributeError):
            task.markup = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# list_page_files
# ---------------------------------------------------------------------------


class TestListPageFiles:
    def test_filters_to_public_python_modules(self, pages_dir: Path) -> None:
        _write_page(pages_dir, "home.py", "")
        _write_page(pages_dir, "__init__.py", "")
        _write_page(pages_dir, "_layout.py", "")
        _write_page(pages_dir, "notes.txt", "")
        (pages_dir / "nested.py").mkdir()

        assert [p.name for p in list_page_files(pages_dir)] == ["home.py"]

    def test_sorted_order(self, pages_dir: Path) -> None:
        for name in ("zeta.py", "alpha.py", "mid.py"):
            _write_page(pages_dir, name, "")
        assert [p.stem for p in list_page_files(pages_dir)] == ["alpha", "mid", "zeta"]

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DiscoveryError, match="Cannot read pages directory"):
            list_page_files(tmp_path / "nope")


# ---------------------------------------------------------------------------
# ModulePageSource
# ---------------------------------------------------------------------------


class TestModulePageSource:
    def test_load_and_render(self, pages_dir: Path) -> None:
        path = _write_page(pages_dir, "home.py", _heading_page("Home"))

        source = ModulePageSource.load(path)

        assert isinstance(source, PageSource)
        assert source.name() == "home"
        assert source.render() == "<h1>Home</h1>"

    def test_default_callable_accepted(self, pages_dir: Path) -> None:
        path = _write_page(pages_dir, "legacy.py", 'default = lambda: "<p>hi</p>"\n')
        assert ModulePageSource.load(path).render() == "<p>hi</p>"

    def test_render_preferred_over_default(self, pages_dir: Path) -> None:
        path = _write_page(
            pages_dir, "both.py",
            'def render():\n    return "render"\n\ndef default():\n    return "default"\n',
        )
        assert ModulePageSource.load(path).render() == "render"

    def test_optional_parameters_allowed(self, pages_dir: Path) -> None:
        path = _write_page(
            pages_dir, "opt.py", 'def render(title="Hi"):\n    return title\n',
        )
        assert ModulePageSource.load(path).render() == "Hi"

    def test_missing_render_raises(self, pages_dir: Path) -> None:
        path = _write_page(pages_dir, "empty.py", "x = 1\n")
        with pytest.raises(ModuleLoadError, match="zero-argument"):
            ModulePageSource.load(path)

    def test_non_callable_render_raises(self, pages_dir: Path) -> None:
        path = _write_page(pages_dir, "bad.py", 'render = "<h1>static</h1>"\n')
        with pytest.raises(ModuleLoadError, match="must be callable"):
            ModulePageSource.load(path)

    def test_required_argument_raises(self, pages_dir: Path) -> None:
        path = _write_page(pages_dir, "args.py", "def render(request):\n    return ''\n")
        with pytest.raises(ModuleLoadError, match="must take no arguments"):
            ModulePageSource.load(path)

    def test_async_render_raises(self, pages_dir: Path) -> None:
        path = _write_page(pages_dir, "coro.py", "async def render():\n    return ''\n")
        with pytest.raises(ModuleLoadError, match="not async"):
            ModulePageSource.load(path)

    def test_syntax_error_raises(self, pages_dir: Path) -> None:
        path = _write_page(pages_dir, "broken.py", "def render(:\n")
        with pytest.raises(ModuleLoadError, match="Failed to load page module"):
            ModulePageSource.load(path)

    def test_import_time_error_raises(self, pages_dir: Path) -> None:
        path = _write_page(pages_dir, "boom.py", "raise RuntimeError('boom')\n")
        with pytest.raises(ModuleLoadError) as exc_info:
            ModulePageSource.load(path)
        assert isinstance(exc_info.value.__cause__, RuntimeError)


# ---------------------------------------------------------------------------
# pages_from_sources
# ---------------------------------------------------------------------------


class TestPagesFromSources:
    def test_registered_sources(self) -> None:
        tasks = pages_from_sources([_StaticSource("a", "<a/>"), _StaticSource("b", "<b/>")])
        assert tasks == (
            PageTask(page_name="a", markup="<a/>"),
            PageTask(page_name="b", markup="<b/>"),
        )

    def test_non_string_markup_raises(self) -> None:
        with pytest.raises(ModuleLoadError, match="must render a str"):
            pages_from_sources([_StaticSource("a", 42)])

    def test_duplicate_names_raise(self) -> None:
        with pytest.raises(ModuleLoadError, match="Duplicate page name"):
            pages_from_sources([_StaticSource("a", ""), _StaticSource("a", "")])

    def test_render_exception_wrapped(self) -> None:
        class Exploding(_StaticSource):
            def render(self) -> str:
                raise ValueError("bad template")

        with pytest.raises(ModuleLoadError, match="bad template"):
            pages_from_sources([Exploding("x", "")])


# ---------------------------------------------------------------------------
# discover_pages — end to end
# ---------------------------------------------------------------------------


class TestDiscoverPages:
    def test_home_and_about(self, pages_dir: Path) -> None:
        _write_page(pages_dir, "home.py", _heading_page("X"))
        _write_page(pages_dir, "about.py", _heading_page("X"))

        tasks = discover_pages(pages_dir)

        assert {t.output_filename for t in tasks} == {"home.html", "about.html"}
        assert all(t.markup == "<h1>X</h1>" for t in tasks)

    def test_count_matches_page_files(self, pages_dir: Path) -> None:
        for i in range(12):
            _write_page(pages_dir, f"page{i:02d}.py", _heading_page(str(i)))
        _write_page(pages_dir, "readme.md", "not a page")

        tasks = discover_pages(pages_dir, max_workers=4)

        assert len(tasks) == 12
        assert len({t.output_filename for t in tasks}) == 12

    def test_order_follows_listing(self, pages_dir: Path) -> None:
        for i in range(8):
            _write_page(pages_dir, f"p{i}.py", _heading_page(str(i)))

        tasks = discover_pages(pages_dir, max_workers=8)

        assert [t.page_name for t in tasks] == [f"p{i}" for i in range(8)]
        assert [t.markup for t in tasks] == [f"<h1>{i}</h1>" for i in range(8)]

    def test_empty_directory(self, pages_dir: Path) -> None:
        assert discover_pages(pages_dir) == ()

    def test_one_bad_module_fails_everything(self, pages_dir: Path) -> None:
        _write_page(pages_dir, "good.py", _heading_page("ok"))
        _write_page(pages_dir, "bad.py", "x = 1\n")

        with pytest.raises(ModuleLoadError, match="bad.py"):
            discover_pages(pages_dir)

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DiscoveryError):
            discover_pages(tmp_path / "missing")

    def test_reload_picks_up_edits(self, pages_dir: Path) -> None:
        _write_page(pages_dir, "home.py", _heading_page("v1"))
        assert discover_pages(pages_dir)[0].markup == "<h1>v1</h1>"

        _write_page(pages_dir, "home.py", 'def render():\n    return "<h1>second</h1>"\n')
        assert discover_pages(pages_dir)[0].markup == "<h1>second</h1>"
