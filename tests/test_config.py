from __future__ import annotations

import json
from pathlib import Path

import pytest


def test_load_missing_file_returns_defaults_without_writing(tmp_path: Path) -> None:
    from global_mercator.config import Config

    path = tmp_path / "missing.json"
    cfg = Config.load(str(path))

    assert cfg["grid"]["bulk_size"] == 5000
    assert cfg.output_format == "json"
    assert cfg.path == str(path)
    assert not path.exists()


def test_load_can_create_missing_file(tmp_path: Path) -> None:
    from global_mercator.config import Config

    path = tmp_path / "nested" / "cfg.json"
    Config.load(str(path), create_if_missing=True)

    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8"))["output"]["format"] == "json"


def test_load_merges_and_coerces_user_values(tmp_path: Path) -> None:
    from global_mercator.config import Config

    path = tmp_path / "cfg.json"
    path.write_text(
        json.dumps(
            {
                "grid": {"bulk_size": "abc", "max_zoom": 99, "limit": "25"},
                "output": {"format": "xml", "precision": 3},
                "shell": {"theme": "neon"},
                "logging": {"level": "debug"},
            }
        ),
        encoding="utf-8",
    )
    cfg = Config.load(str(path))

    assert cfg["grid"]["bulk_size"] == 5000
    assert cfg["grid"]["max_zoom"] == 30
    assert cfg["grid"]["limit"] == 25
    assert cfg["grid"]["min_zoom"] == 0
    assert cfg["output"]["format"] == "json"
    assert cfg["output"]["precision"] == 3
    assert cfg["shell"]["theme"] == "auto"
    assert cfg["logging"]["level"] == "DEBUG"


def test_corrupt_file_is_backed_up(tmp_path: Path) -> None:
    from global_mercator.config import Config

    path = tmp_path / "cfg.json"
    path.write_text("{not json", encoding="utf-8")
    cfg = Config.load(str(path))

    assert cfg["grid"]["bulk_size"] == 5000
    assert (tmp_path / "cfg.json.corrupt.bak").read_text(encoding="utf-8") == "{not json"


def test_env_var_overrides_default_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    from global_mercator.config import CONFIG_ENV, Config, _default_config_path

    path = tmp_path / "env.json"
    path.write_text(json.dumps({"output": {"format": "text"}}), encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(path))

    assert _default_config_path() == str(path)
    assert Config.load().output_format == "text"


def test_save_update_and_diff_round_trip(tmp_path: Path) -> None:
    from global_mercator.config import Config

    path = tmp_path / "cfg.json"
    cfg = Config.load(str(path))
    cfg.update({"grid": {"bulk_size": 250}, "shell": {"prompt": "gm> "}})
    cfg.save()

    reloaded = Config.load(str(path))
    assert reloaded.bulk_size == 250
    assert reloaded["shell"]["prompt"] == "gm> "
    assert reloaded.diff() == {"grid": {"bulk_size": 250}, "shell": {"prompt": "gm> "}}


def test_defaults_are_not_mutated_through_instances() -> None:
    from global_mercator.config import DEFAULT_CONFIG, Config

    cfg = Config()
    cfg["output"]["format"] = "text"
    cfg["grid"]["bulk_size"] = 1

    assert DEFAULT_CONFIG["output"]["format"] == "json"
    assert DEFAULT_CONFIG["grid"]["bulk_size"] == 5000
    assert Config()["output"]["format"] == "json"
