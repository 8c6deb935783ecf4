"""Tests for pagepack.export.assets — copy planning and folder copying."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagepack._errors import ExportError
from pagepack.export.assets import CopyInstruction, build_copy_specs, copy_folders


class TestBuildCopySpecs:
    """build_copy_specs — folder names to copy instructions."""

    def test_maps_public_to_build(self, tmp_path: Path) -> None:
        (tmp_path / "public" / "assets").mkdir(parents=True)

        (spec,) = build_copy_specs(["assets"], tmp_path / "public", tmp_path / "build")

        assert spec.source == tmp_path / "public" / "assets"
        assert spec.destination == tmp_path / "build" / "assets"
        assert spec.source_exists is True
        assert spec.missing_is_fatal is False

    def test_missing_source_warns_and_tolerates(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        specs = build_copy_specs(["fonts"], tmp_path / "public", tmp_path / "build")

        assert len(specs) == 1
        assert specs[0].source_exists is False
        assert specs[0].missing_is_fatal is False
        err = capsys.readouterr().err
        assert "does not exist" in err
        assert str(tmp_path / "public" / "fonts") in err

    def test_present_source_is_silent(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        (tmp_path / "public" / "assets").mkdir(parents=True)
        build_copy_specs(["assets"], tmp_path / "public", tmp_path / "build")
        assert capsys.readouterr().err == ""

    def test_plain_file_is_not_a_folder(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        (tmp_path / "public").mkdir()
        (tmp_path / "public" / "assets").write_text("not a folder")

        (spec,) = build_copy_specs(["assets"], tmp_path / "public", tmp_path / "build")

        assert spec.source_exists is False
        assert "does not exist" in capsys.readouterr().err

    def test_preserves_folder_order(self, tmp_path: Path) -> None:
        specs = build_copy_specs(["b", "a", "c"], tmp_path, tmp_path / "out")
        assert [s.destination.name for s in specs] == ["b", "a", "c"]

    def test_pattern_form(self, tmp_path: Path) -> None:
        spec = CopyInstruction(source=tmp_path / "a", destination=tmp_path / "b")
        assert spec.to_dict() == {
            "from": str(tmp_path / "a"),
            "to": str(tmp_path / "b"),
            "noErrorOnMissing": True,
        }


class TestCopyFolders:
    """copy_folders — execute instructions."""

    def test_copies_tree(self, tmp_path: Path) -> None:
        src = tmp_path / "public" / "assets"
        (src / "img").mkdir(parents=True)
        (src / "img" / "logo.svg").write_text("<svg/>")
        (src / "data.json").write_text("{}")
        spec = CopyInstruction(source=src, destination=tmp_path / "build" / "assets")

        results = copy_folders([spec])

        assert len(results) == 2
        assert (tmp_path / "build" / "assets" / "img" / "logo.svg").read_text() == "<svg/>"
        assert {r.source_path for r in results} == {
            "/assets/data.json", "/assets/img/logo.svg",
        }
        assert all(r.source_type == "asset" for r in results)

    def test_missing_tolerated_source_skipped(self, tmp_path: Path) -> None:
        spec = CopyInstruction(
            source=tmp_path / "missing", destination=tmp_path / "out", source_exists=False,
        )
        assert copy_folders([spec]) == ()
        assert not (tmp_path / "out").exists()

    def test_missing_fatal_source_raises(self, tmp_path: Path) -> None:
        spec = CopyInstruction(
            source=tmp_path / "missing", destination=tmp_path / "out", missing_is_fatal=True,
        )
        with pytest.raises(ExportError, match="does not exist"):
            copy_folders([spec])
