# tests/test_snapshot.py
import os
import sys
from pathlib import Path

import pytest

from dirsnapshot import SnapshotOptions, build_snapshot, take_snapshot, write_snapshot
from dirsnapshot.errors import InputPathError, OutputCreateError
from dirsnapshot.snapshot import stat_input


def _make_file(p: Path, content: str = "x"):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


def test_stat_input_classifies(tmp_path: Path):
    _make_file(tmp_path / "f.txt")

    assert stat_input(str(tmp_path)) is True
    assert stat_input(str(tmp_path / "f.txt")) is False


def test_stat_input_missing(tmp_path: Path):
    missing = tmp_path / "nope"

    with pytest.raises(InputPathError) as info:
        stat_input(str(missing))

    assert str(info.value) == f"Error: stat {missing}: No such file or directory"


def test_build_snapshot_with_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_file(tmp_path / "proj/a.txt", "hi")
    _make_file(tmp_path / "proj/sub/b.txt", "yo")
    monkeypatch.chdir(tmp_path)

    text = build_snapshot("proj", include_tree=True, is_dir=True)
    assert text == (
        "Directory Tree:\n"
        "proj\n"
        "  - a.txt\n"
        "  - [DIR] sub\n"
        "    - b.txt\n"
        "\n\n"
        "File Contents:\n"
        "--- proj/a.txt ---\nhi\n\n"
        "--- proj/sub/b.txt ---\nyo\n\n"
    )


def test_build_snapshot_without_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_file(tmp_path / "proj/a.txt", "hi")
    monkeypatch.chdir(tmp_path)

    text = build_snapshot("proj", include_tree=False, is_dir=True)
    assert text == "File Contents:\n--- proj/a.txt ---\nhi\n\n"


def test_tree_is_ignored_for_file_input(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_file(tmp_path / "notes.txt", "remember")
    monkeypatch.chdir(tmp_path)

    text = build_snapshot("notes.txt", include_tree=True, is_dir=False)
    assert text == "File Contents:\n--- notes.txt ---\nremember\n\n"
    assert "Directory Tree:" not in text


@pytest.mark.parametrize("atomic", [True, False])
def test_write_snapshot_replaces_existing(tmp_path: Path, atomic: bool):
    out = tmp_path / "out.txt"
    out.write_text("old content that is longer than the new one", encoding="utf-8")

    write_snapshot(str(out), "new", atomic=atomic)

    assert out.read_text(encoding="utf-8") == "new"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["out.txt"]


def test_write_snapshot_restores_raw_bytes(tmp_path: Path):
    data = b"\x00\xff\xc3\x28 text"
    text = data.decode("utf-8", "surrogateescape")
    out = tmp_path / "out.bin"

    write_snapshot(str(out), text)

    assert out.read_bytes() == data


@pytest.mark.parametrize("atomic", [True, False])
def test_write_snapshot_missing_directory(tmp_path: Path, atomic: bool):
    out = tmp_path / "no" / "such" / "out.txt"

    with pytest.raises(OutputCreateError) as info:
        write_snapshot(str(out), "data", atomic=atomic)

    assert str(info.value).startswith("Error creating output file: ")
    assert not out.exists()


@pytest.mark.parametrize("atomic", [True, False])
def test_directory_target_is_a_create_error(tmp_path: Path, atomic: bool):
    target = tmp_path / "taken"
    target.mkdir()

    with pytest.raises(OutputCreateError) as info:
        write_snapshot(str(target), "data", atomic=atomic)

    assert str(info.value) == f"Error creating output file: open {target}: Is a directory"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["taken"]
    assert list(target.iterdir()) == []


def test_create_error_names_output_path_not_temp_file(tmp_path: Path):
    out = tmp_path / "missing" / "out.txt"

    with pytest.raises(OutputCreateError) as info:
        write_snapshot(str(out), "data", atomic=True)

    assert str(info.value) == f"Error creating output file: open {out}: No such file or directory"
    assert ".tmp" not in str(info.value)


@pytest.mark.skipif(sys.platform.startswith("win"), reason="Symlink creation needs privileges on Windows")
@pytest.mark.parametrize("atomic", [True, False])
def test_write_through_symlinked_output(tmp_path: Path, atomic: bool):
    real = tmp_path / "real.txt"
    real.write_text("old", encoding="utf-8")
    link = tmp_path / "out.txt"
    link.symlink_to(real)

    write_snapshot(str(link), "new", atomic=atomic)

    assert link.is_symlink()
    assert real.read_text(encoding="utf-8") == "new"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["out.txt", "real.txt"]


@pytest.mark.skipif(os.name != "posix", reason="Permission bits test is POSIX-only")
def test_atomic_write_keeps_existing_mode(tmp_path: Path):
    out = tmp_path / "out.txt"
    out.write_text("old", encoding="utf-8")
    out.chmod(0o640)

    write_snapshot(str(out), "new", atomic=True)

    assert out.read_text(encoding="utf-8") == "new"
    assert out.stat().st_mode & 0o777 == 0o640


@pytest.mark.skipif(os.name != "posix", reason="umask is POSIX-only")
def test_atomic_write_uses_umask_mode(tmp_path: Path):
    out = tmp_path / "out.txt"
    umask = os.umask(0o022)
    try:
        write_snapshot(str(out), "data", atomic=True)
    finally:
        os.umask(umask)

    assert out.stat().st_mode & 0o777 == 0o644


def test_take_snapshot_is_idempotent(tmp_path: Path):
    src = tmp_path / "src"
    _make_file(src / "a.txt", "A")
    _make_file(src / "pkg/b.py", "B = 1\n")
    (src / "empty").mkdir()

    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    take_snapshot(SnapshotOptions(str(src), str(first), include_tree=True))
    take_snapshot(SnapshotOptions(str(src), str(second), include_tree=True))

    assert first.read_bytes() == second.read_bytes()


def test_take_snapshot_missing_input_creates_nothing(tmp_path: Path):
    out = tmp_path / "out.txt"

    with pytest.raises(InputPathError):
        take_snapshot(SnapshotOptions(str(tmp_path / "missing"), str(out)))

    assert not out.exists()
