from __future__ import annotations

import os

import pytest

from archive_guard.paths import ArchiveLocation, check_containment, is_contained


@pytest.mark.parametrize(
    "candidate",
    ["app.rb", "sub/dir/file.txt", "./Procfile", "a/./b", "a/b/../c", "sub/"],
)
def test_relative_paths_without_escape_are_contained(candidate):
    assert is_contained(candidate, "/srv/does-not-exist/dest")


@pytest.mark.parametrize(
    "candidate",
    ["../evil.txt", "../../etc/passwd", "a/../../b", "..", "../dest-sibling/x"],
)
def test_parent_traversal_is_rejected(candidate):
    assert not is_contained(candidate, "/srv/does-not-exist/dest")


def test_absolute_candidate_outside_root_is_rejected():
    assert not is_contained("/etc/passwd", "/srv/dest")
    assert is_contained("/srv/dest/app.rb", "/srv/dest")


def test_root_itself_is_contained():
    assert is_contained(".", "/srv/dest")
    assert is_contained("/srv/dest", "/srv/dest")


def test_empty_candidate_is_not_contained():
    verdict = check_containment("", "/srv/dest")
    assert verdict.contained is False
    assert verdict.candidate == ""


def test_trailing_separator_does_not_defeat_prefix_check():
    assert is_contained("app.rb", "/srv/dest/")
    assert not is_contained("/srv/destination/app.rb", "/srv/dest")
    assert not is_contained("../destination/app.rb", "/srv/dest/")


def test_verdict_reports_normalized_root():
    verdict = check_containment("x", "/srv/dest/")
    assert verdict.root == "/srv/dest"
    assert verdict.contained is True


def test_canonical_mode_follows_symlinks(tmp_path):
    root = tmp_path / "root"
    outside = tmp_path / "outside"
    root.mkdir()
    outside.mkdir()
    os.symlink(str(outside), str(root / "escape"))

    # Lexically inside, but the directory is a link leading out.
    assert is_contained("escape/file", str(root))
    assert not is_contained("escape/file", str(root), canonical=True)


def test_canonical_mode_with_symlinked_root(tmp_path):
    real_root = tmp_path / "real"
    real_root.mkdir()
    (real_root / "app.rb").write_text("puts 1\n", encoding="utf-8")
    alias = tmp_path / "alias"
    os.symlink(str(real_root), str(alias))

    assert is_contained(str(real_root / "app.rb"), str(alias), canonical=True)


def test_archive_location_normalizes_to_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    location = ArchiveLocation.from_input("sub/../bundle.zip")
    assert location.path == str(tmp_path / "bundle.zip")
    assert location.parent == str(tmp_path)
    assert os.fspath(location) == location.path
    assert ArchiveLocation.from_input(location) is location


def test_archive_location_rejects_empty_input():
    with pytest.raises(ValueError):
        ArchiveLocation.from_input("")


def test_canonical_mode_tolerates_symlink_loops(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    os.symlink("loop-b", str(root / "loop-a"))
    os.symlink("loop-a", str(root / "loop-b"))

    verdict = check_containment("loop-a", str(root), canonical=True)

    assert verdict.contained is True
    assert verdict.root == os.path.realpath(str(root))
