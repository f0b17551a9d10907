"""Tests for the directory tree renderer."""

import os

import pytest

from shellkit.core.errors import InvalidInputError, NotFoundError
from shellkit.tree import render_tree
from shellkit.tree import render as render_module

pytestmark = pytest.mark.unit


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    (root / "b_dir" / "deep").mkdir(parents=True)
    (root / "a_dir").mkdir()
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "b_dir" / "inner.txt").write_text("x")
    (root / "b_dir" / "deep" / "deeper.txt").write_text("x")
    (root / "node_modules" / "pkg" / "index.js").write_text("x")
    (root / ".hidden").write_text("x")
    (root / "Z.txt").write_text("x")
    (root / "a.txt").write_text("x")
    return root


class TestRenderTree:
    def test_full_tree(self, project):
        report = render_tree(project, exclude=["node_modules"])

        assert report.lines == [
            str(project),
            "├── a_dir/",
            "├── b_dir/",
            "│   ├── deep/",
            "│   │   └── deeper.txt",
            "│   └── inner.txt",
            "├── a.txt",
            "└── Z.txt",
        ]
        assert report.directories == 3
        assert report.files == 4
        assert report.render().endswith("\n\n3 directories, 4 files")

    def test_excluded_directory_is_not_descended(self, project):
        report = render_tree(project, exclude=["node_*"])

        text = report.render()
        assert "node_modules" not in text
        assert "index.js" not in text

    def test_without_exclusions_everything_visible(self, project):
        report = render_tree(project)

        assert "├── node_modules/" in report.lines
        assert "│   └── pkg/" in report.lines
        assert "│       └── index.js" in report.lines

    def test_glob_exclusion_on_files(self, project):
        report = render_tree(project, exclude=["node_modules", "*.txt"])

        assert report.files == 0
        assert report.directories == 3

    def test_max_depth_one(self, project):
        report = render_tree(project, exclude=["node_modules"], max_depth=1)

        assert report.lines[1:] == ["├── a_dir/", "├── b_dir/", "├── a.txt", "└── Z.txt"]
        assert report.summary() == "2 directories, 2 files"

    def test_max_depth_two(self, project):
        report = render_tree(project, exclude=["node_modules"], max_depth=2)

        assert "│   ├── deep/" in report.lines
        assert "│   │   └── deeper.txt" not in report.lines

    def test_hidden_entries(self, project):
        hidden = render_tree(project, exclude=["node_modules"], show_hidden=True)

        assert "├── .hidden" in hidden.lines
        assert ".hidden" not in render_tree(project).render()

    def test_dirs_only(self, project):
        report = render_tree(project, exclude=["node_modules"], dirs_only=True)

        assert report.lines[1:] == ["├── a_dir/", "└── b_dir/", "    └── deep/"]
        assert report.summary() == "3 directories, 0 files"

    def test_symlinked_directory_not_followed(self, project):
        os.symlink(project / "b_dir", project / "link")

        report = render_tree(project, exclude=["node_modules"])

        link_lines = [line for line in report.lines if "link/" in line]
        assert link_lines == [f"├── link/ -> {project / 'b_dir'}"]
        assert sum("inner.txt" in line for line in report.lines) == 1

    def test_unreadable_directory_is_reported_and_skipped(self, project, monkeypatch):
        real_list = render_module._list_entries

        def fake_list(directory, *args):
            if directory.name == "b_dir":
                raise PermissionError(13, "Permission denied", str(directory))
            return real_list(directory, *args)

        monkeypatch.setattr(render_module, "_list_entries", fake_list)

        report = render_tree(project, exclude=["node_modules"])

        assert report.lines[2:4] == ["├── b_dir/", "│   └── [permission denied]"]
        assert report.errors == 1
        assert report.lines[-1] == "└── Z.txt"

    def test_empty_directory(self, tmp_path):
        report = render_tree(tmp_path)

        assert report.lines == [str(tmp_path)]
        assert report.summary() == "0 directories, 0 files"

    def test_singular_summary(self, tmp_path):
        (tmp_path / "only").mkdir()
        (tmp_path / "only" / "file.txt").write_text("x")

        assert render_tree(tmp_path).summary() == "1 directory, 1 file"


class TestRenderTreeErrors:
    def test_missing_root(self, tmp_path):
        with pytest.raises(NotFoundError):
            render_tree(tmp_path / "missing")

    def test_file_root(self, tmp_path):
        f = tmp_path / "file.txt"
        f.write_text("x")

        with pytest.raises(InvalidInputError):
            render_tree(f)

    @pytest.mark.parametrize("depth", [0, -2])
    def test_invalid_depth(self, tmp_path, depth):
        with pytest.raises(InvalidInputError):
            render_tree(tmp_path, max_depth=depth)
