"""Click CLI for inspecting generated content as JSON."""

from __future__ import annotations

import json
import logging

import click
from pydantic import BaseModel

from stargen.config import settings
from stargen.exploration import ExplorationOptions, generate_exploration_points
from stargen.generator import ProceduralGenerator


def get_generator(ctx: click.Context) -> ProceduralGenerator:
    return ctx.obj["generator"]


def _dump(records: BaseModel | list[BaseModel]) -> str:
    if isinstance(records, BaseModel):
        return records.model_dump_json(by_alias=True, indent=2)
    return json.dumps([r.model_dump(mode="json", by_alias=True) for r in records], indent=2)


@click.group()
@click.option("--seed", type=int, default=None, help="Seed for reproducible output.")
@click.option("--verbose", "-v", is_flag=True, help="Log generation steps to stderr.")
@click.pass_context
def cli(ctx: click.Context, seed: int | None, verbose: bool) -> None:
    """Procedural galaxy and encounter generator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    generator = ProceduralGenerator(seed)
    ctx.obj["generator"] = generator
    logging.getLogger(__name__).debug("Using seed %d", generator.get_seed())


@cli.command()
@click.option("--region", default=None, help="Region name for the planet.")
@click.pass_context
def planet(ctx: click.Context, region: str | None) -> None:
    """Generate a single planet."""
    click.echo(_dump(get_generator(ctx).generate_planet(region)))


@cli.command()
@click.argument("region")
@click.option(
    "--planets", type=click.IntRange(min=0), default=0,
    help="Number of planets (0 picks 1-8 at random).",
)
@click.pass_context
def system(ctx: click.Context, region: str, planets: int) -> None:
    """Generate a star system and its planets."""
    click.echo(_dump(get_generator(ctx).generate_star_system(region, planets)))


@cli.command()
@click.argument("name")
@click.option(
    "--systems", type=click.IntRange(min=0), default=0,
    help="Number of star systems (0 picks 3-10 at random).",
)
@click.pass_context
def region(ctx: click.Context, name: str, systems: int) -> None:
    """Generate a region of linked star systems."""
    click.echo(_dump(get_generator(ctx).generate_region(name, systems)))


@cli.command()
@click.argument("danger", type=int)
@click.pass_context
def enemy(ctx: click.Context, danger: int) -> None:
    """Generate an enemy for a danger level (clamped to 1-10)."""
    if danger < 1 or danger > 10:
        click.echo(f"Danger {danger} clamped to 1-10.", err=True)
    click.echo(_dump(get_generator(ctx).generate_enemy(danger)))


@cli.command()
@click.argument("name")
@click.option(
    "--systems", type=click.IntRange(min=0), default=0,
    help="Systems in the region the points are scattered into.",
)
@click.option(
    "--density", type=click.FloatRange(0.0, 1.0), default=0.5,
    help="How many points to generate relative to the region size.",
)
@click.option("--points-only", is_flag=True, help="Print only the exploration points.")
@click.pass_context
def explore(
    ctx: click.Context, name: str, systems: int, density: float, points_only: bool
) -> None:
    """Generate a region and scatter exploration points through it."""
    generator = get_generator(ctx)
    locations = generator.generate_region(name, systems)
    options = ExplorationOptions(base_regions=[name], density_factor=density)
    points = generate_exploration_points(
        locations, options, rng=generator.rng, settings=generator.settings
    )
    click.echo(_dump(points if points_only else locations + points))


if __name__ == "__main__":
    cli()
