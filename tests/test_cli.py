from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def cfg_path(tmp_path: Path) -> str:
    return str(tmp_path / "cfg.json")


def _run(capsys: pytest.CaptureFixture, cfg_path: str, *argv: str):
    from global_mercator.cli import main

    code = main(["--config", cfg_path, *argv])
    captured = capsys.readouterr()
    return code, captured.out.splitlines(), captured.err


def test_tile_defaults_to_google_scheme(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    code, out, _ = _run(capsys, cfg_path, "tile", "-75.000057", "44.999888", "13")

    assert code == 0
    assert out == ["[2389, 2946, 13]"]


@pytest.mark.parametrize(
    ("scheme", "expected"),
    [("tile", "[2389, 5245, 13]"), ("quadkey", '"0302321010121"')],
)
def test_tile_other_schemes(capsys: pytest.CaptureFixture, cfg_path: str, scheme: str, expected: str) -> None:
    code, out, _ = _run(capsys, cfg_path, "tile", "-75.000057", "44.999888", "13", "--scheme", scheme)

    assert code == 0
    assert out == [expected]


def test_convert_between_schemes(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    _, out, _ = _run(capsys, cfg_path, "convert", "google", "2389", "2946", "13", "--to", "quadkey")
    assert out == ['"0302321010121"']

    _, out, _ = _run(capsys, cfg_path, "convert", "quadkey", "0302321010121", "--to", "tile")
    assert out == ["[2389, 5245, 13]"]


def test_bbox_text_output(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    code, out, _ = _run(capsys, cfg_path, "--format", "text", "bbox", "tile", "2389", "5245", "13")

    assert code == 0
    values = [float(v) for v in out[0].split()]
    assert values == pytest.approx([-75.014648, 44.995883, -74.970703, 45.026950], abs=1e-3)


def test_bbox_meters(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    _, out, _ = _run(capsys, cfg_path, "bbox", "google", "2389", "2946", "13", "--meters")

    assert json.loads(out[0]) == pytest.approx(
        [-8350592.466099, 5620873.311979, -8345700.496289, 5625765.281789], abs=1
    )


def test_meters_lnglat_center_and_hash(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    _, out, _ = _run(capsys, cfg_path, "meters", "126", "37")
    assert json.loads(out[0]) == pytest.approx([14026255.8, 4439106.7], abs=0.5)

    _, out, _ = _run(capsys, cfg_path, "lnglat", "-8348968.179248", "5621503.917462")
    assert json.loads(out[0]) == pytest.approx([-75.000057, 44.999888], abs=1e-6)

    _, out, _ = _run(capsys, cfg_path, "center", "90", "-45", "85", "-50")
    assert json.loads(out[0]) == [87.5, -47.5]

    _, out, _ = _run(capsys, cfg_path, "hash", "312", "480", "4")
    assert out == ["5728"]


def test_grid_count(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    _, out, _ = _run(capsys, cfg_path, "grid", "-180", "-90", "180", "90", "3", "8", "--count")

    assert out == ["563136"]


def test_grid_limit_and_bulk(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    _, out, _ = _run(capsys, cfg_path, "grid", "-180", "-85", "180", "85", "0", "1", "--limit", "3")
    assert [json.loads(line) for line in out] == [[0, 0, 0], [0, 0, 1], [1, 0, 1]]

    _, out, _ = _run(capsys, cfg_path, "grid", "-180", "-85", "180", "85", "0", "1", "--bulk", "2")
    assert [len(json.loads(line)) for line in out] == [2, 2, 1]


def test_grid_uses_config_limit(capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"grid": {"limit": 4}}), encoding="utf-8")

    _, out, _ = _run(capsys, str(path), "grid", "-180", "-90", "180", "90", "0", "10")
    assert len(out) == 4


def test_invalid_tile_reports_error(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    code, out, err = _run(capsys, cfg_path, "convert", "tile", "25", "60", "3", "--to", "google")

    assert code == 2
    assert out == []
    assert "Illegal parameters for tile" in err


def test_bad_quadkey_reports_error(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    code, _, err = _run(capsys, cfg_path, "convert", "quadkey", "030486861", "--to", "tile")

    assert code == 2
    assert "Invalid Quadkey" in err


def test_wrong_value_count_is_a_usage_error(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    with pytest.raises(SystemExit) as exc:
        _run(capsys, cfg_path, "convert", "tile", "1", "2", "--to", "google")
    assert exc.value.code == 2


def test_config_init_writes_file(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    code, out, _ = _run(capsys, cfg_path, "config", "init")

    assert code == 0
    assert json.loads(out[0]) == cfg_path
    assert json.loads(Path(cfg_path).read_text(encoding="utf-8"))["grid"]["bulk_size"] == 5000


def test_hash_does_not_require_a_valid_tile(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    code, out, err = _run(capsys, cfg_path, "hash", "312", "480", "4")

    assert code == 0
    assert out == ["5728"]
    assert err == ""


def test_lnglat_far_north_saturates(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    code, out, _ = _run(capsys, cfg_path, "lnglat", "0", "5e9")

    assert code == 0
    assert json.loads(out[0]) == [0.0, 90.0]


def test_grid_zoom_out_of_range_reports_error(capsys: pytest.CaptureFixture, cfg_path: str) -> None:
    code, out, err = _run(capsys, cfg_path, "grid", "-1", "-1", "1", "1", "-1", "0")

    assert code == 2
    assert out == []
    assert "<zoom> cannot be less than 0" in err


def test_config_show_changed_lists_only_overrides(capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"grid": {"limit": 4}}), encoding="utf-8")

    code, out, _ = _run(capsys, str(path), "config", "show", "--changed")
    assert code == 0
    assert json.loads(out[0]) == {"grid": {"limit": 4}}

    _, out, _ = _run(capsys, str(path), "config", "show")
    assert json.loads(out[0])["grid"]["bulk_size"] == 5000
