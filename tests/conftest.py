"""Shared test fixtures for pagepack."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagepack.config import ProjectConfig

PAGE_TEMPLATE = '''\
def render():
    return "<h1>{title}</h1>"
'''


def write_page(pages_dir: Path, name: str, content: str) -> Path:
    """Write a page module and return its path."""
    p = pages_dir / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
    return p


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal project structure for testing.

    Returns the project root with src/pages/, nested style fragments,
    and public/assets/.
    """
    src = tmp_path / "src"
    pages = src / "pages"
    pages.mkdir(parents=True)
    (pages / "__init__.py").write_text("")
    write_page(pages, "home.py", PAGE_TEMPLATE.format(title="Home"))
    write_page(pages, "about.py", PAGE_TEMPLATE.format(title="About"))

    (src / "app.js").write_text('import "./styles.js"\n')
    (src / "a" / "b").mkdir(parents=True)
    (src / "a" / "base.pcss").write_text("body { margin: 0; }\n")
    (src / "a" / "b" / "widget.pcss").write_text(".widget { color: red; }\n")

    assets = tmp_path / "public" / "assets"
    assets.mkdir(parents=True)
    (assets / "logo.svg").write_text("<svg/>")

    return tmp_path


@pytest.fixture
def project_config(tmp_project: Path) -> ProjectConfig:
    """A ProjectConfig rooted at the temp project."""
    return ProjectConfig(root=tmp_project)
