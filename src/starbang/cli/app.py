"""Main Typer application for the Starbang CLI."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from starbang.economy.runner import run_simulation
from starbang.economy.world import TICK_MODE_ALL, TICK_MODE_ROUND_ROBIN, world_from_universe
from starbang.scripts.universe_bang import write_universe
from starbang.universe.generator import economy_shares, generate_universe, region_radius
from starbang.universe.params import ConfigurationError
from starbang.universe.traits import quality_label
from starbang.utils.config import get_world_data_path, load_config

console = Console()

app = typer.Typer(
    name="starbang",
    help="Starbang CLI - generate a universe and simulate its economy.",
    rich_markup_mode="rich",
)


def _load(config: Path | None, seed: int | None):
    try:
        params, tick_params = load_config(config)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    if seed is not None:
        params.seed = seed
    return params, tick_params


def _generate(params):
    try:
        return generate_universe(params)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)


@app.command()
def generate(
    seed: int = typer.Option(None, "--seed", "-s", help="Random seed (default: STARBANG_SEED or 42)"),
    config: Path = typer.Option(None, "--config", "-c", help="TOML config with [generation] table"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing world data"),
) -> None:
    """Generate a universe and write world-data/universe.json."""
    params, _ = _load(config, seed)
    output_dir = get_world_data_path()
    if (output_dir / "universe.json").exists() and not force:
        console.print(f"World data already exists at [bold]{output_dir}[/bold]; use --force to overwrite.")
        raise typer.Exit()

    universe = _generate(params)
    path = write_universe(universe, output_dir)

    table = Table(title=f"Universe (seed {params.seed})")
    table.add_column("Region")
    table.add_column("Government")
    table.add_column("Systems", justify="right")
    table.add_column("Gateways", justify="right")
    table.add_column("Radius", justify="right")
    for region in universe.regions:
        members = universe.systems_in_region(region.index)
        table.add_row(
            region.name,
            region.government.value,
            str(len(members)),
            str(sum(1 for s in members if s.is_gateway)),
            f"{region_radius(universe, region.index):.0f}",
        )
    console.print(table)

    shares = economy_shares(universe)
    console.print(
        "Economy mix: " + ", ".join(f"{e.value} {share:.0%}" for e, share in shares.items())
    )
    start = universe.systems[universe.starting_system_index]
    traits = ", ".join(f"{t.trait_id} ({quality_label(t.quality)})" for t in start.traits)
    console.print(f"Starting system: [bold]{start.name}[/bold] ({start.economy_type.value}) - {traits}")
    console.print(f"[green]Wrote[/green] {path}")


@app.command()
def simulate(
    ticks: int = typer.Option(500, "--ticks", "-t", help="Number of ticks to run"),
    seed: int = typer.Option(None, "--seed", "-s", help="Universe seed"),
    config: Path = typer.Option(None, "--config", "-c", help="TOML config with [generation]/[economy]"),
    round_robin: bool = typer.Option(
        False, "--round-robin", help="Advance one region per tick instead of the whole world"
    ),
) -> None:
    """Run the economy forward and report price dispersion per good."""
    params, tick_params = _load(config, seed)
    world = world_from_universe(_generate(params), tick_params)
    mode = TICK_MODE_ROUND_ROBIN if round_robin else TICK_MODE_ALL
    report = run_simulation(world, ticks, mode=mode)

    drift = {d.good_id: d for d in report.equilibrium_drift}
    table = Table(title=f"Market health after {ticks} ticks ({mode})")
    table.add_column("Good")
    table.add_column("Price std-dev", justify="right")
    table.add_column("Supply drift", justify="right")
    table.add_column("Demand drift", justify="right")
    for d in report.price_dispersion:
        table.add_row(
            d.good_id,
            f"{d.std_dev:.1f}",
            f"{drift[d.good_id].avg_supply_drift:+.1f}",
            f"{drift[d.good_id].avg_demand_drift:+.1f}",
        )
    console.print(table)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from importlib.metadata import PackageNotFoundError, version as get_version
        try:
            v = get_version("starbang")
        except PackageNotFoundError:
            v = "0.1.0"
        console.print(f"[bold]Starbang[/bold] v{v}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        is_eager=True,
        callback=version_callback,
    ),
) -> None:
    """Starbang CLI - generate a universe and simulate its economy."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
