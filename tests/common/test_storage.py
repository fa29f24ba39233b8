from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from indexsync.common import storage


def test_get_data_dir_prefers_explicit_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("INDEXSYNC_DATA_DIR", str(custom))
    result = storage.get_data_dir()

    assert result == custom.resolve()


def test_get_data_dir_uses_xdg_cache_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("INDEXSYNC_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))

    result = storage.get_data_dir()

    assert result == (tmp_path / storage.APP_DIR_NAME).resolve()


def test_get_http_cache_path_creates_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("INDEXSYNC_DATA_DIR", str(tmp_path / "data-dir"))

    path = storage.get_http_cache_path()

    assert path == (tmp_path / "data-dir" / storage.HTTP_CACHE_FILENAME).resolve()
    assert path.parent.exists()
