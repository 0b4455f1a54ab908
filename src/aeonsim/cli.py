"""
Command-line interface for aeonsim.

Usage:
    aeonsim run
    aeonsim run --preset green-transition
    aeonsim run --co2-emission-rate 90 --renewable-adoption 10 --outputs csv
    aeonsim at 77025 --preset fossil-boom
    aeonsim presets
    aeonsim report --preset spacefaring
    aeonsim sensitivity --parameter renewable_adoption --n-samples 11
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import click

from aeonsim import __version__, ProjectionModel, PRESETS, get_preset, list_presets
from aeonsim.core.coefficients import EPOCH_YEAR
from aeonsim.core.params import (
    SimulationParams,
    PARAM_NAMES,
    PARAMETER_CONTROLS,
    params_from_mapping,
)
from aeonsim.core.projector import project_year
from aeonsim.presentation import format_year_full, temperature_severity
from aeonsim.report import build_report
from aeonsim.utils.logging import (
    setup_logging,
    start_step,
    end_step,
    log_error,
    get_timing_logger,
)
from aeonsim.utils.config import load_config, params_from_config


def parameter_options(func):
    """Add one ``--<knob>`` option per simulation parameter."""
    for name in reversed(PARAM_NAMES):
        control = PARAMETER_CONTROLS[name]
        func = click.option(
            f"--{name.replace('_', '-')}",
            name,
            type=float,
            default=None,
            help=f"{control['label']}, 0 ({control['low']}) to 100 ({control['high']})",
        )(func)
    return func


def _close_open_steps() -> None:
    """Mark every step still open as failed."""
    timing_logger = get_timing_logger()
    while timing_logger is not None and timing_logger.current_step is not None:
        end_step(success=False)


def _resolve(config: Dict[str, Any], preset: Optional[str], knobs: Dict[str, Any]) -> Tuple[SimulationParams, Optional[str]]:
    """CLI preset over config, then any explicit knob values on top."""
    if preset:
        base = get_preset(preset)["params"]
    else:
        preset = config.get("preset")
        base = params_from_config(config)
    overrides = {name: value for name, value in knobs.items() if value is not None}
    return params_from_mapping(overrides, base=base), preset


def _log_level(ctx) -> str:
    if ctx.obj.get("debug"):
        return "DEBUG"
    return ctx.obj["config"]["logging"]["level"]


@click.group()
@click.version_option(version=__version__, prog_name="aeonsim")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.option("--config", type=click.Path(), help="Config file path")
@click.pass_context
def main(ctx, verbose, debug, config):
    """
    aeonsim - Million-Year Planetary Projection Model

    Projects temperature, sea level, ice, CO₂, population, GDP, biodiversity,
    conflict and civilization from 2025 out to one million years, driven by
    eight policy and technology parameters on a 0-100 scale.
    """
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug


@main.command("run")
@click.option(
    "--preset", "-p",
    type=click.Choice(list_presets()),
    default=None,
    help="Named preset used as the parameter base",
)
@parameter_options
@click.option(
    "--output-dir", "-o",
    type=click.Path(),
    default=None,
    help="Output directory (default: from config)",
)
@click.option(
    "--outputs",
    type=click.Choice(["csv", "netcdf"]),
    multiple=True,
    default=None,
    help="Output formats (default: from config)",
)
@click.option(
    "--workers", "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Worker threads for evaluating time points",
)
@click.option(
    "--report/--no-report",
    default=False,
    help="Print the scenario report after the run",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=None,
    help="Log directory (default: from config)",
)
@click.option(
    "--experiment-name", "-e",
    type=str,
    default=None,
    help="Experiment name for log and output files",
)
@click.pass_context
def run(ctx, preset, output_dir, outputs, workers, report, log_dir, experiment_name, **knobs):
    """Run a million-year projection with comprehensive logging."""
    import traceback

    config = ctx.obj["config"]

    output_dir = Path(output_dir or config["outputs"]["base_dir"])
    outputs = list(outputs) if outputs else list(config["outputs"]["formats"])
    log_dir = log_dir or config["logging"]["log_dir"]
    workers = workers or config["projection"]["workers"]

    if experiment_name is None:
        experiment_name = preset or config.get("preset") or "custom"

    logger = setup_logging(
        level=_log_level(ctx),
        log_dir=log_dir,
        experiment_name=experiment_name,
        format_style=config["logging"]["format_style"],
        always_save=True,
        include_timestamp=False,
    )

    try:
        start_step("Resolve parameters")
        params, preset_key = _resolve(config, preset, knobs)

        click.echo(f"\n{'═' * 60}")
        click.echo(f"  Projection Parameters{f' (preset: {preset_key})' if preset_key else ''}")
        click.echo(f"{'─' * 60}")
        for name, value in params.to_dict().items():
            click.echo(f"  {PARAMETER_CONTROLS[name]['label']:<20} = {value}")
        click.echo(f"{'═' * 60}")
        end_step(success=True)

        model = ProjectionModel(
            workers=workers,
            show_progress=config["projection"]["show_progress"],
        )
        results = model.run(params, preset=preset_key)

        start_step(f"Generate outputs: {experiment_name}")
        for fmt in outputs:
            subdir = output_dir / fmt
            subdir.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Created directory: {subdir}")

        if "csv" in outputs:
            start_step(f"Export CSV: {experiment_name}")
            csv_path = output_dir / "csv" / f"{experiment_name}_projection.csv"
            results.to_csv(csv_path)
            click.echo(f"    ✓ CSV: {csv_path}")
            end_step(success=True)

        if "netcdf" in outputs:
            start_step(f"Export NetCDF: {experiment_name}")
            nc_path = output_dir / "netcdf" / f"{experiment_name}_projection.nc"
            results.to_netcdf(nc_path)
            click.echo(f"    ✓ NetCDF: {nc_path}")
            end_step(success=True)
        end_step(success=True)

        summary = results.summary()
        final = results.final
        click.echo(f"\n  Results Summary:")
        click.echo(f"    Snapshots: {summary['n_points']} ({summary['year_start']}-{summary['year_end']})")
        click.echo(f"    Peak temperature: +{summary['peak_temperature']}°C "
                   f"({format_year_full(summary['peak_temperature_year'])})")
        if results.diagnostics.get("first_2c_year"):
            click.echo(f"    2°C first crossed: {format_year_full(results.diagnostics['first_2c_year'])}")
        click.echo(f"    Lowest biodiversity: {summary['min_biodiversity']}% "
                   f"({format_year_full(summary['min_biodiversity_year'])})")
        click.echo(f"    Final health score: {final.earth_health_score}/100")
        click.echo(f"    Final civilization level: {final.civilization_level}/100")
        click.echo(f"    Labelled events: {len(summary['events'])}")

        if report:
            start_step("Build report")
            click.echo()
            click.echo(build_report(
                results,
                key_year_offsets=config["report"]["key_year_offsets"],
                max_tipping_points=config["report"]["max_tipping_points"],
            ).to_text())
            end_step(success=True)

        click.echo(f"\n{'═' * 70}")
        click.echo("  COMPLETE - All outputs generated successfully!")
        click.echo(f"{'═' * 70}")
        click.echo(f"\nOutput Directory: {output_dir}")
        click.echo(f"Log Directory: {log_dir}")

        timing_logger = get_timing_logger()
        if timing_logger:
            click.echo(timing_logger.get_summary())

        click.echo()

    except Exception as e:
        log_error(e, "Main execution")
        _close_open_steps()
        click.echo(f"\n{'!' * 70}", err=True)
        click.echo(f"  FATAL ERROR: {e}", err=True)
        click.echo(f"{'!' * 70}", err=True)
        click.echo(f"\nCheck log file in: {log_dir}", err=True)
        click.echo(traceback.format_exc(), err=True)
        sys.exit(1)


@main.command("at")
@click.argument("year", type=click.IntRange(min=EPOCH_YEAR))
@click.option(
    "--preset", "-p",
    type=click.Choice(list_presets()),
    default=None,
    help="Named preset used as the parameter base",
)
@parameter_options
@click.pass_context
def at(ctx, year, preset, **knobs):
    """Show the projected world in a single YEAR."""
    config = ctx.obj["config"]
    try:
        params, _ = _resolve(config, preset, knobs)
    except (KeyError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    d = project_year(params, year)

    click.echo(f"\n{format_year_full(d.year)} · {d.era_label}")
    click.echo("=" * 60)
    click.echo(f"  Temperature:   +{d.temperature}°C ({temperature_severity(d.temperature)})")
    click.echo(f"  Sea level:     {d.sea_level:+} m")
    click.echo(f"  Ice coverage:  {d.ice_coverage_percent}%")
    click.echo(f"  CO₂:           {d.atmospheric_co2_ppm} ppm")
    click.echo(f"  Population:    {d.population}B")
    click.echo(f"  GDP:           ${d.gdp}T")
    click.echo(f"  Biodiversity:  {d.biodiversity}%")
    click.echo(f"  Conflict:      {d.conflict_index}/100")
    click.echo(f"  Civilization:  {d.civilization_level}/100")
    click.echo(f"  Health score:  {d.earth_health_score}/100")
    if d.major_event:
        click.echo(f"\n  ⚠ {d.major_event}")
    click.echo()


@main.command("presets")
def presets():
    """List available parameter presets."""
    click.echo("\nAvailable Presets:")
    click.echo("─" * 70)

    for key, info in PRESETS.items():
        click.echo(f"\n  {key}:")
        click.echo(f"    Name: {info['name']}")
        click.echo(f"    Subtitle: {info['subtitle']}")
        click.echo(f"    Description: {info['description']}")
        values = ", ".join(f"{name}={value}" for name, value in info["params"].to_dict().items())
        click.echo(f"    Parameters: {values}")

    click.echo("\n" + "─" * 70)
    click.echo("\nTo override a preset value, pass the parameter option:")
    click.echo("  aeonsim run --preset green-transition --space-colonization 80")
    click.echo()


@main.command("report")
@click.option(
    "--preset", "-p",
    type=click.Choice(list_presets()),
    default=None,
    help="Named preset used as the parameter base",
)
@parameter_options
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Also write the report text to this file",
)
@click.pass_context
def report(ctx, preset, output, **knobs):
    """Run a projection and print its million-year scenario report."""
    config = ctx.obj["config"]
    quiet = not (ctx.obj.get("verbose") or ctx.obj.get("debug"))
    setup_logging(level="WARNING" if quiet else _log_level(ctx), log_dir=None, format_style="simple")

    try:
        params, preset_key = _resolve(config, preset, knobs)
        results = ProjectionModel().run(params, preset=preset_key)
        text = build_report(
            results,
            key_year_offsets=config["report"]["key_year_offsets"],
            max_tipping_points=config["report"]["max_tipping_points"],
        ).to_text()
    except Exception as e:
        log_error(e, "Report")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(text)
    if output:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        click.echo(f"Report saved to: {output}")


@main.command("sensitivity")
@click.option(
    "--parameter",
    type=click.Choice(list(PARAM_NAMES)),
    required=True,
    help="Parameter to sweep",
)
@click.option(
    "--value-min",
    type=float,
    default=0.0,
    help="Minimum parameter value",
)
@click.option(
    "--value-max",
    type=float,
    default=100.0,
    help="Maximum parameter value",
)
@click.option(
    "--n-samples",
    type=click.IntRange(min=2),
    default=11,
    help="Number of values to test",
)
@click.option(
    "--preset", "-p",
    type=click.Choice(list_presets()),
    default=None,
    help="Named preset used for the other parameters",
)
@click.option(
    "--output-dir", "-o",
    type=click.Path(),
    default="./sensitivity",
    help="Output directory",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=None,
    help="Log directory (default: from config)",
)
@click.pass_context
def sensitivity(ctx, parameter, value_min, value_max, n_samples, preset, output_dir, log_dir):
    """Sweep one parameter and tabulate how the outcome changes."""
    import numpy as np
    import pandas as pd
    import traceback

    config = ctx.obj["config"]
    log_dir = log_dir or config["logging"]["log_dir"]

    setup_logging(
        level=_log_level(ctx),
        log_dir=log_dir,
        experiment_name=f"sensitivity_{parameter}",
        format_style=config["logging"]["format_style"],
        always_save=True,
        include_timestamp=False,
    )

    try:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        start_step("Initialize sensitivity analysis")
        base, preset_key = _resolve(config, preset, {})
        model = ProjectionModel(show_progress=True)
        values = np.linspace(value_min, value_max, n_samples)

        click.echo(f"\nSensitivity Analysis: {parameter}")
        click.echo(f"Range: [{value_min}, {value_max}]")
        click.echo(f"Samples: {n_samples}")
        click.echo("─" * 50)
        end_step(success=True)

        results_list = model.sensitivity_analysis(parameter, values, base=base, preset=preset_key)

        start_step("Compile results")
        rows = []
        for value, results in results_list:
            if results is not None:
                final = results.final
                rows.append({
                    parameter: value,
                    "peak_temperature": results.diagnostics["peak_temperature"],
                    "first_2c_year": results.diagnostics["first_2c_year"],
                    "final_temperature": final.temperature,
                    "final_biodiversity": final.biodiversity,
                    "final_population": final.population,
                    "final_civilization_level": final.civilization_level,
                    "final_health": final.earth_health_score,
                })
            else:
                rows.append({
                    parameter: value,
                    "peak_temperature": np.nan,
                    "first_2c_year": None,
                    "final_temperature": np.nan,
                    "final_biodiversity": np.nan,
                    "final_population": np.nan,
                    "final_civilization_level": np.nan,
                    "final_health": np.nan,
                })

        df = pd.DataFrame(rows)
        csv_path = output_dir / f"{parameter}_sensitivity.csv"
        df.to_csv(csv_path, index=False)
        click.echo(f"\nResults saved to: {csv_path}")

        click.echo("\nResults:")
        click.echo(df.to_string(index=False))
        end_step(success=True)

        timing_logger = get_timing_logger()
        if timing_logger:
            click.echo(timing_logger.get_summary())

        click.echo()

    except Exception as e:
        log_error(e, "Sensitivity analysis")
        _close_open_steps()
        click.echo(f"\nFATAL ERROR: {e}", err=True)
        click.echo(f"Check log file in: {log_dir}", err=True)
        click.echo(traceback.format_exc(), err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
