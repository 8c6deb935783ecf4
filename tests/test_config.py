"""Tests for pagepack.config."""

from pathlib import Path

import pytest

from pagepack.config import ProjectConfig


class TestProjectConfig:
    """ProjectConfig — frozen dataclass with sensible defaults."""

    def test_defaults(self) -> None:
        config = ProjectConfig()
        assert config.src_dir == "src"
        assert config.pages_dir == "src/pages"
        assert config.public_dir == "public"
        assert config.style_extension == ".pcss"
        assert config.copy_folders == ("assets",)
        assert config.dev_port == 8888
        assert config.api_url_default == "http://localhost:8888"

    def test_frozen(self) -> None:
        config = ProjectConfig()
        with pytest.raises(AttributeError):
            config.dev_port = 9000  # type: ignore[misc]

    def test_paths_resolve_from_root(self, tmp_path: Path) -> None:
        config = ProjectConfig(root=tmp_path)
        assert config.src_path == tmp_path / "src"
        assert config.pages_path == tmp_path / "src" / "pages"
        assert config.public_path == tmp_path / "public"
        assert config.entry_path == tmp_path / "src" / "app.js"
        assert config.styles_path == tmp_path / "src" / "styles.js"
        assert config.output_path == tmp_path / "build"

    def test_absolute_output_preserved(self, tmp_path: Path) -> None:
        output = tmp_path / "elsewhere"
        config = ProjectConfig(root=tmp_path, output=output)
        assert config.output_path == output

    def test_copy_folders_coerced_to_tuple(self) -> None:
        config = ProjectConfig(copy_folders=["assets", "fonts"])  # type: ignore[arg-type]
        assert config.copy_folders == ("assets", "fonts")

    def test_relative_root_resolved_to_absolute(self) -> None:
        config = ProjectConfig(root=Path("site"))
        assert config.root.is_absolute()
