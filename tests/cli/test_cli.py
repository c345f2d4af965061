from __future__ import annotations

import csv
import io
import json
import subprocess
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from transit_synth.cli import cli
from transit_synth.cli.common_cli import EXIT_INPUT_ERROR

MODEL = {
    "id": 1,
    "name": "cli-hj",
    "period": 3.0,
    "epoch": 0.0,
    "separation": 0.03,
    "inclination": 89.0,
    "stellar_radius": 1.0,
    "planet_radius": 0.1,
    "c1": 0.5,
    "c2": 0.1,
    "c3": 0.1,
    "c4": -0.1,
}


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    path = tmp_path / "model.json"
    path.write_text(json.dumps(MODEL), encoding="utf-8")
    return path


def test_describe_reports_geometry(model_file: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["describe", "--model", str(model_file)])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["name"] == "cli-hj"
    assert payload["transiting"] is True
    assert payload["mid_transit_regime"] == "full"
    assert payload["within_small_planet_limit"] is True
    assert 3.0 < payload["duration_hours"] < 4.0
    assert payload["mid_transit_flux"] < 1.0


def test_generate_json_grid(model_file: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["generate", "--model", str(model_file), "--start", "-0.1", "--stop", "0.1", "--cadence", "30"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["n_points"] == len(payload["time"]) == len(payload["flux"]) == 10
    assert min(payload["flux"]) < 1.0
    assert payload["noise"] == 0.0


def test_generate_csv_from_times_file(model_file: Path, tmp_path: Path) -> None:
    times_path = tmp_path / "times.txt"
    times_path.write_text("# bjd\n0.05, 12\n-0.05\n1.0\n", encoding="utf-8")
    out_path = tmp_path / "out" / "lc.csv"

    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "generate",
            "--model",
            str(model_file),
            "--times",
            str(times_path),
            "--format",
            "csv",
            "--out",
            str(out_path),
        ],
    )
    assert result.exit_code == 0, result.output
    rows = list(csv.DictReader(io.StringIO(out_path.read_text(encoding="utf-8"))))
    assert [float(row["time"]) for row in rows] == [0.05, -0.05, 1.0]
    assert float(rows[2]["flux"]) == 1.0


def test_generate_seeded_noise_is_reproducible(model_file: Path) -> None:
    runner = CliRunner()
    args = ["generate", "--model", str(model_file), "--start", "1.0", "--stop", "1.01", "--noise", "0.001", "--seed", "9"]
    first = json.loads(runner.invoke(cli, args).output)
    second = json.loads(runner.invoke(cli, args).output)
    assert first["flux"] == second["flux"]
    assert any(f != 1.0 for f in first["flux"])


def test_generate_requires_times_or_grid(model_file: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["generate", "--model", str(model_file)])
    assert result.exit_code == EXIT_INPUT_ERROR
    assert "--times" in result.output


def test_generate_rejects_negative_noise(model_file: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli, ["generate", "--model", str(model_file), "--start", "0", "--stop", "0.01", "--noise", "-1"]
    )
    assert result.exit_code == EXIT_INPUT_ERROR
    assert "noise" in result.output


def test_invalid_model_file(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({**MODEL, "period": 0.0}), encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["describe", "--model", str(path)])
    assert result.exit_code == EXIT_INPUT_ERROR
    assert "period" in result.output


def test_malformed_model_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["describe", "--model", str(path)])
    assert result.exit_code == EXIT_INPUT_ERROR
    assert "Malformed JSON" in result.output


def test_python_module_entrypoint_help() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "transit_synth", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert "Usage:" in result.stdout
