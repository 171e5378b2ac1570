"""
Unit tests for the run configuration loader.
"""
import json

import pytest

from amb.errors import AmbConfigError
from amb.runtime.config import RunConfig, load_run_config


class TestLoadRunConfig:
    """Tests for load_run_config()."""

    @pytest.fixture
    def in_tmp(self, tmp_path, monkeypatch):
        """Run in an empty directory with an empty home."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        return tmp_path

    def test_defaults_without_file(self, in_tmp):
        config = load_run_config()
        assert config == RunConfig()
        assert config.limit is None
        assert config.count_only is False
        assert config.context == {}

    def test_local_file(self, in_tmp):
        (in_tmp / "amb.json").write_text(json.dumps({"limit": 3, "context": {"n": 8}}))
        config = load_run_config()
        assert config.limit == 3
        assert config.context == {"n": 8}

    def test_home_file(self, in_tmp):
        home_dir = in_tmp / "home" / ".amb"
        home_dir.mkdir(parents=True)
        (home_dir / "config.json").write_text(json.dumps({"count_only": True}))
        assert load_run_config().count_only is True

    def test_local_file_wins(self, in_tmp):
        home_dir = in_tmp / "home" / ".amb"
        home_dir.mkdir(parents=True)
        (home_dir / "config.json").write_text(json.dumps({"limit": 1}))
        (in_tmp / "amb.json").write_text(json.dumps({"limit": 2}))
        assert load_run_config().limit == 2

    def test_explicit_path(self, in_tmp):
        path = in_tmp / "custom.json"
        path.write_text(json.dumps({"limit": 9}))
        assert load_run_config(str(path)).limit == 9

    def test_invalid_json(self, in_tmp):
        (in_tmp / "amb.json").write_text("{not json")
        with pytest.raises(AmbConfigError) as exc_info:
            load_run_config()
        assert exc_info.value.path == "amb.json"

    def test_unknown_key_rejected(self, in_tmp):
        (in_tmp / "amb.json").write_text(json.dumps({"depth": 3}))
        with pytest.raises(AmbConfigError, match="depth"):
            load_run_config()

    def test_negative_limit_rejected(self, in_tmp):
        (in_tmp / "amb.json").write_text(json.dumps({"limit": -1}))
        with pytest.raises(AmbConfigError):
            load_run_config()

    def test_named_file_missing(self, in_tmp):
        (in_tmp / "amb.json").write_text(json.dumps({"limit": 2}))
        with pytest.raises(AmbConfigError, match="file not found") as exc_info:
            load_run_config(str(in_tmp / "typo.json"))
        assert exc_info.value.path == str(in_tmp / "typo.json")
