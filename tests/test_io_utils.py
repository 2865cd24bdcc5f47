"""Atomic writes leave no temp files behind"""

import json

import pytest

from bikeshare import io_utils
from bikeshare.io_utils import atomic_write_bytes, atomic_write_json


class TestAtomicWrites:

    def test_bytes_written(self, tmp_path):
        path = tmp_path / "sub" / "a.zip"
        atomic_write_bytes(b"payload", path)
        assert path.read_bytes() == b"payload"
        assert list(path.parent.iterdir()) == [path]

    def test_json_written(self, tmp_path):
        path = tmp_path / "summary.json"
        atomic_write_json({"order": (1, 1, 1)}, path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"order": [1, 1, 1]}

    @pytest.mark.fail_loud
    def test_failed_replace_removes_temp(self, tmp_path, monkeypatch):
        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(io_utils.os, "replace", broken_replace)
        path = tmp_path / "a.zip"

        with pytest.raises(OSError, match="disk full"):
            atomic_write_bytes(b"payload", path)

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.fail_loud
    def test_failed_json_write_removes_temp(self, tmp_path):
        path = tmp_path / "summary.json"

        with pytest.raises(TypeError):
            atomic_write_json({1j: "complex keys are not JSON"}, path)

        assert list(tmp_path.iterdir()) == []
