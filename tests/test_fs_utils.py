from pathlib import Path

from playlist_remix.core import ensure_parent_dir, read_json, write_json


def test_read_json_missing_file_returns_default(tmp_path: Path) -> None:
    path = tmp_path / "missing.json"
    default = {"members": {}}

    result = read_json(str(path), default=default)

    assert result == default


def test_read_json_invalid_json_calls_on_error_and_returns_default(
    tmp_path: Path,
) -> None:
    path = tmp_path / "invalid.json"
    path.write_text("{ invalid json", encoding="utf-8")

    errors = []

    def on_error(exc: Exception) -> None:
        errors.append(exc)

    result = read_json(str(path), default=None, on_error=on_error)

    assert result is None
    assert len(errors) == 1


def test_write_json_creates_parent_dirs_and_roundtrips(tmp_path: Path) -> None:
    data = {"playlists": {"p1": {"history": ["u1", "u2"]}}}
    path = tmp_path / "nested" / "path" / "playlists.json"

    write_json(path, data)

    assert path.exists()
    assert read_json(str(path), default=None) == data
    # the temporary file is moved over the target
    assert [p.name for p in path.parent.iterdir()] == ["playlists.json"]


def test_ensure_parent_dir(tmp_path: Path) -> None:
    file_path = tmp_path / "parent" / "sub" / "file.json"

    ensure_parent_dir(file_path)

    assert file_path.parent.is_dir()
    assert not file_path.exists()
