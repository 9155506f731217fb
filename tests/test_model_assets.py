from __future__ import annotations

import subprocess

import pytest

from nailmask import model_assets


def test_existing_model_is_left_alone(tmp_path, monkeypatch):
    path = tmp_path / "hand_landmarker.task"
    path.write_bytes(b"model")

    def no_download(*a, **kw):
        raise AssertionError("should not download")

    monkeypatch.setattr(model_assets, "_download_python", no_download)
    assert model_assets.ensure_hand_landmarker_task(str(path)) == str(path)


def test_falls_back_to_curl(tmp_path, monkeypatch):
    path = tmp_path / "models" / "hand_landmarker.task"

    def urllib_fails(url, model_path, timeout_s):
        raise OSError("CERTIFICATE_VERIFY_FAILED")

    def curl_ok(url, model_path):
        with open(model_path, "wb") as f:
            f.write(b"model")
        return subprocess.CompletedProcess(["curl"], 0, "", "")

    monkeypatch.setattr(model_assets, "_download_python", urllib_fails)
    monkeypatch.setattr(model_assets, "_download_curl", curl_ok)

    assert model_assets.ensure_hand_landmarker_task(str(path)) == str(path)
    assert path.read_bytes() == b"model"


def test_both_downloads_fail(tmp_path, monkeypatch):
    path = tmp_path / "hand_landmarker.task"

    def urllib_fails(url, model_path, timeout_s):
        with open(model_path, "wb") as f:
            f.write(b"partial")
        raise OSError("timed out")

    monkeypatch.setattr(model_assets, "_download_python", urllib_fails)
    monkeypatch.setattr(
        model_assets, "_download_curl", lambda url, model_path: subprocess.CompletedProcess(["curl"], 6, "", "boom")
    )

    with pytest.raises(FileNotFoundError, match="boom"):
        model_assets.ensure_hand_landmarker_task(str(path))
    assert not path.exists()
