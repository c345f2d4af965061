"""`transit-synth generate` and `transit-synth describe` commands.

Usage:
    transit-synth generate --model wasp.json --start -0.2 --stop 0.2 --cadence 2
    transit-synth generate --model wasp.json --times times.txt --format csv -o lc.csv
    transit-synth describe --model wasp.json
"""

from __future__ import annotations

import csv
import io
from dataclasses import replace
from pathlib import Path
from typing import Any

import click
import numpy as np

from transit_synth.cli.common_cli import (
    EXIT_INPUT_ERROR,
    EXIT_RUNTIME_ERROR,
    SynthCliError,
    dump_json_output,
    load_model_file,
    resolve_optional_output_path,
)
from transit_synth.config import SynthesisConfig
from transit_synth.errors import InvalidParameterError
from transit_synth.transit import (
    classify_regime,
    compute_separation,
    is_transiting,
    synthesize_lightcurve,
    transit_duration,
    transit_flux,
)

MINUTES_PER_DAY = 24.0 * 60.0


def _load_times_file(path: Path) -> np.ndarray:
    """Read whitespace- or comma-separated times; the first column is used."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SynthCliError(f"Cannot read times file: {exc}") from exc

    values: list[float] = []
    for line_num, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        first = line.replace(",", " ").split()[0]
        try:
            values.append(float(first))
        except ValueError as exc:
            raise SynthCliError(f"Malformed time at line {line_num} of {path}: {first!r}") from exc
    return np.asarray(values, dtype=np.float64)


def _build_time_grid(start: float | None, stop: float | None, cadence_minutes: float) -> np.ndarray:
    if start is None or stop is None:
        raise SynthCliError("Provide either --times or both --start and --stop.")
    if stop < start:
        raise SynthCliError(f"--stop ({stop}) must not precede --start ({start}).")
    if cadence_minutes <= 0:
        raise SynthCliError(f"--cadence must be positive, got {cadence_minutes}.")
    step = cadence_minutes / MINUTES_PER_DAY
    n = int(np.floor((stop - start) / step)) + 1
    return start + step * np.arange(n, dtype=np.float64)


def _to_csv(time: np.ndarray, flux: np.ndarray) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["time", "flux"])
    for t, f in zip(time, flux):
        writer.writerow([repr(float(t)), repr(float(f))])
    return buf.getvalue()


@click.command("generate")
@click.option(
    "--model",
    "model_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="PhysicalModel JSON file.",
)
@click.option(
    "--times",
    "times_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Text file of observation times in days (first column).",
)
@click.option("--start", type=float, default=None, help="Grid start time (days).")
@click.option("--stop", type=float, default=None, help="Grid stop time (days, inclusive).")
@click.option(
    "--cadence",
    "cadence_minutes",
    type=float,
    default=2.0,
    show_default=True,
    help="Grid cadence (minutes).",
)
@click.option("--noise", type=float, default=None, help="Gaussian noise sigma (relative flux).")
@click.option("--seed", type=int, default=None, help="Noise random seed.")
@click.option("--workers", type=int, default=None, help="Worker threads for large series.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "csv"], case_sensitive=False),
    default="json",
    show_default=True,
)
@click.option("--out", "-o", "output_arg", default=None, help="Output path ('-' for stdout).")
def generate_command(
    model_path: Path,
    times_path: Path | None,
    start: float | None,
    stop: float | None,
    cadence_minutes: float,
    noise: float | None,
    seed: int | None,
    workers: int | None,
    output_format: str,
    output_arg: str | None,
) -> None:
    """Generate a synthetic transit light curve."""
    model = load_model_file(model_path)
    if times_path is not None:
        times = _load_times_file(times_path)
    else:
        times = _build_time_grid(start, stop, cadence_minutes)

    try:
        config = SynthesisConfig.from_env()
        overrides: dict[str, Any] = {}
        if seed is not None:
            overrides["seed"] = seed
        if workers is not None:
            overrides["max_workers"] = workers
        if overrides:
            config = replace(config, **overrides)
        lc = synthesize_lightcurve(times, model, noise, config=config)
    except InvalidParameterError as exc:
        raise SynthCliError(str(exc), exit_code=EXIT_INPUT_ERROR) from exc
    except (ArithmeticError, MemoryError) as exc:
        raise SynthCliError(f"Synthesis failed: {exc}", exit_code=EXIT_RUNTIME_ERROR) from exc

    out_path = resolve_optional_output_path(output_arg)
    if output_format.lower() == "csv":
        text = _to_csv(lc.time, lc.flux)
        if out_path is None:
            click.echo(text, nl=False)
        else:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(text, encoding="utf-8")
        return
    dump_json_output(lc.to_dict(), out_path)


@click.command("describe")
@click.option(
    "--model",
    "model_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="PhysicalModel JSON file.",
)
@click.option("--out", "-o", "output_arg", default=None, help="Output path ('-' for stdout).")
def describe_command(model_path: Path, output_arg: str | None) -> None:
    """Report the derived transit geometry of a model."""
    model = load_model_file(model_path)
    z_mid, p = compute_separation(model, model.epoch)
    law = model.limb_darkening
    payload = {
        "name": model.name,
        "id": model.id,
        "radius_ratio": p,
        "scaled_separation": model.scaled_separation,
        "impact_parameter": model.impact_parameter,
        "transiting": is_transiting(model),
        "duration_hours": transit_duration(model) * 24.0,
        "omega": law.omega,
        "c0": model.c0,
        "mid_transit_regime": classify_regime(p, z_mid).value,
        "mid_transit_flux": transit_flux(p, z_mid, law),
        "within_small_planet_limit": model.within_small_planet_limit,
    }
    dump_json_output(payload, resolve_optional_output_path(output_arg))
