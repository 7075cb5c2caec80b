# src/chaosdispatch/cli.py
"""CLI for inspecting chaos dispatch behaviour.

Runs a throwaway dispatcher many times and reports how often each variant
was chosen, which is handy for sanity-checking a set of weights before
wiring them into real code.

Usage:
    # Three variants, 100k draws
    chaosdispatch simulate -W 0.9 -W 0.08 -W 0.02

    # Reproducible run, machine-readable output
    chaosdispatch simulate -W 3 -W 1 --seed 7 --json

    # Same, starting from a preset and a config file
    chaosdispatch simulate -W 1 -W 1 --preset deterministic --config chaos.yaml

    # Show bundled presets
    chaosdispatch presets
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer
import yaml

from chaosdispatch.contracts.errors import ChaosArgumentError
from chaosdispatch.core.config import apply_config, list_presets, load_config
from chaosdispatch.core.logging import configure_logging
from chaosdispatch.engine.global_switch import set_global_chaos
from chaosdispatch.engine.runners import ChaosSupplier
from chaosdispatch.engine.variant import ChaosVariant

app = typer.Typer(
    name="chaosdispatch",
    help="chaosdispatch: weighted random function dispatch for chaos testing.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from chaosdispatch import __version__

        typer.echo(f"chaosdispatch {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """chaosdispatch: weighted random function dispatch for chaos testing."""


def _index_returner(index: int) -> Callable[[], int]:
    def variant() -> int:
        return index

    variant.__qualname__ = f"variant_{index}"
    return variant


def _fail(message: str) -> NoReturn:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


@app.command()
def simulate(
    weights: Annotated[
        list[float] | None,
        typer.Option(
            "--weight",
            "-W",
            help="Variant weight; repeat once per variant. The first is the baseline.",
        ),
    ] = None,
    iterations: Annotated[
        int,
        typer.Option(
            "--iterations",
            "-n",
            help="Number of dispatches to perform.",
            min=1,
        ),
    ] = 100_000,
    seed: Annotated[
        int | None,
        typer.Option(
            "--seed",
            "-s",
            help="Seed for the shared random source.",
        ),
    ] = None,
    preset: Annotated[
        str | None,
        typer.Option(
            "--preset",
            "-p",
            help="Preset configuration to use. Use 'chaosdispatch presets' to list available presets.",
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to YAML configuration file.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    disabled: Annotated[
        bool,
        typer.Option(
            "--disabled",
            help="Run with global chaos disabled (every call hits the baseline).",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Emit results as JSON.",
        ),
    ] = False,
) -> None:
    """Dispatch repeatedly and report the observed selection frequencies."""
    if not weights:
        _fail("at least one --weight is required")

    cli_overrides: dict[str, Any] = {}
    if seed is not None:
        cli_overrides["seed"] = seed
    if disabled:
        cli_overrides["enabled"] = False

    try:
        config = load_config(preset=preset, config_file=config_file, cli_overrides=cli_overrides)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        _fail(str(e))

    # Logs go to stderr so --json output stays parseable
    configure_logging(json_output=config.logging.json_output, level=config.logging.level, stream=sys.stderr)
    previous = apply_config(config, configure_logs=False)
    try:
        try:
            dispatcher = ChaosSupplier[int](
                *(ChaosVariant(_index_returner(index), weight) for index, weight in enumerate(weights))
            )
        except ChaosArgumentError as e:
            _fail(str(e))

        counts = [0] * dispatcher.num_functions()
        for _ in range(iterations):
            counts[dispatcher.run()] += 1
        chaos_enabled = dispatcher.will_run_with_chaos()
    finally:
        set_global_chaos(previous)

    if chaos_enabled:
        expected = dispatcher.probabilities()
    else:
        expected = [1.0] + [0.0] * (len(counts) - 1)

    report = {
        "iterations": iterations,
        "chaos_enabled": chaos_enabled,
        "range": dispatcher.get_range(),
        "seed": config.seed,
        "preset": config.preset_name,
        "variants": [
            {
                "index": index,
                "weight": variant.weight,
                "count": counts[index],
                "observed": counts[index] / iterations,
                "expected": expected[index],
            }
            for index, variant in enumerate(dispatcher.variants)
        ],
    }

    if json_output:
        typer.echo(json.dumps(report, indent=2))
        return

    status = "enabled" if chaos_enabled else "disabled"
    typer.echo(f"{iterations} dispatches, chaos {status}, range {report['range']:.6g}")
    typer.echo(f"{'idx':>4}  {'weight':>10}  {'count':>10}  {'observed':>9}  {'expected':>9}")
    for row in report["variants"]:
        typer.echo(
            f"{row['index']:>4}  {row['weight']:>10.4g}  {row['count']:>10}  {row['observed']:>9.4f}  {row['expected']:>9.4f}"
        )


@app.command()
def presets() -> None:
    """List available preset configurations."""
    names = list_presets()
    if not names:
        typer.echo("No presets found.")
        return

    typer.echo("Available presets:")
    for name in names:
        typer.echo(f"  - {name}")


def main() -> None:
    """Entry point for chaosdispatch CLI."""
    app()


if __name__ == "__main__":
    main()
