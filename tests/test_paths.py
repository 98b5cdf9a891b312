"""Tests for working locations and file classification."""

from pathlib import Path

import pytest

from codeast.paths import ProjectPaths
from codeast.project import SourceCodeFileType


class TestProjectPaths:

    def test_locations_below_base(self, tmp_path):
        paths = ProjectPaths(tmp_path)

        assert paths.repositories == tmp_path / "repositories"
        assert paths.changed_files == tmp_path / "files"
        assert paths.projects == tmp_path / "projects"
        assert paths.source_mappings == tmp_path / "source.mappings"

    def test_default_base_is_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert ProjectPaths().changed_files == Path.cwd() / "files"


class TestSourceCodeFileType:

    @pytest.mark.parametrize("filename, expected", [
        ("Foo.java", SourceCodeFileType.JAVA),
        ("main.GO", SourceCodeFileType.GO),
        ("pom.xml", SourceCodeFileType.XML),
        ("data.json", SourceCodeFileType.JSON),
        ("notes.txt", SourceCodeFileType.OTHER),
        ("Makefile", SourceCodeFileType.OTHER),
    ])
    def test_of(self, filename, expected):
        assert SourceCodeFileType.of(filename) is expected

    def test_exists(self):
        assert SourceCodeFileType.exists("src/Foo.Java")
        assert SourceCodeFileType.exists(Path("a") / "b.binary")
        assert not SourceCodeFileType.exists("README.md")
        assert not SourceCodeFileType.exists("no_extension")
