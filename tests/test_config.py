# tests/test_config.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskpulse.utils.config import get_default_config, load_config


def test_yaml_config_is_merged_with_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("grading:\n  excellent_roi: 900\n")
    config = load_config(str(path))
    assert config['grading'] == {'excellent_roi': 900, 'good_roi': 200.0}
    assert config['bootstrap'] == get_default_config()['bootstrap']


def test_json_config(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({'bootstrap': {'seed_count': 3}}))
    assert load_config(str(path))['bootstrap']['seed_count'] == 3


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("")
    assert load_config(str(path)) == get_default_config()


def test_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_unsupported_format_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("x = 1")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_defaults_are_fresh_copies() -> None:
    get_default_config()['grading']['good_roi'] = 1
    assert get_default_config()['grading']['good_roi'] == 200.0
