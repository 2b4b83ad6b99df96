"""CLI commands for prepared-food batches and wastage."""

from __future__ import annotations

import click

from pos_inventory.application.produce_batch import ProduceBatchHandler
from pos_inventory.application.register_wastage import RegisterWastageHandler
from pos_inventory.application.show_batches import ShowBatchesHandler
from pos_inventory.domain.exceptions import DomainException
from pos_inventory.domain.model.wastage import WastageReason
from pos_inventory.infrastructure.bootstrap import (
    batch_repository,
    item_repository,
    recipe_repository,
    stock_movement_repository,
    wastage_repository,
)
from pos_inventory.infrastructure.cli.parsing import parse_date


@click.command("produce")
@click.option("--recipe", "recipe_name", required=True, help="Recipe name.")
@click.option("--portions", required=True, type=int, help="Portions produced.")
@click.option("--expiry", default=None, help="Expiry date (YYYY-MM-DD).")
@click.pass_obj
def batch_produce(obj: dict, recipe_name: str, portions: int, expiry: str | None) -> None:
    """Record a newly produced batch."""
    handler = ProduceBatchHandler(
        batch_repo=batch_repository(),
        recipe_repo=recipe_repository(),
    )

    try:
        batch = handler.handle(obj["tenant"], recipe_name, portions, parse_date(expiry))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Batch #{batch.id} of '{recipe_name}' produced: {batch.portions_left} portions")


@click.command("list")
@click.option("--recipe", "recipe_name", default=None, help="Only this recipe.")
@click.pass_obj
def batch_list(obj: dict, recipe_name: str | None) -> None:
    """List batches in consumption order, including exhausted ones."""
    handler = ShowBatchesHandler(
        batch_repo=batch_repository(),
        recipe_repo=recipe_repository(),
    )

    try:
        lines = handler.handle(obj["tenant"], recipe_name=recipe_name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No batches found.")
        return

    click.echo(f"{'Batch':<7} {'Recipe':<20} {'Left':>6} {'Expiry':>12}")
    click.echo("-" * 48)
    for line in lines:
        status = "  EXPIRED" if line.expired else ("  EXHAUSTED" if line.exhausted else "")
        click.echo(
            f"{line.batch_id:<7} {line.recipe_name:<20} "
            f"{line.portions_left:>6} {line.expiry_date:>12}{status}"
        )


@click.command("register")
@click.option("--batch", "batch_id", default=None, help="Batch ID to write off from.")
@click.option("--item", "item_name", default=None, help="Item name to write off from.")
@click.option("--quantity", required=True, type=int, help="Portions or units wasted.")
@click.option(
    "--reason",
    required=True,
    type=click.Choice([r.value for r in WastageReason]),
)
@click.pass_obj
def wastage_register(
    obj: dict,
    batch_id: str | None,
    item_name: str | None,
    quantity: int,
    reason: str,
) -> None:
    """Write off wasted portions or units."""
    if (batch_id is None) == (item_name is None):
        raise click.ClickException("Give exactly one of --batch or --item")

    handler = RegisterWastageHandler(
        wastage_repo=wastage_repository(),
        batch_repo=batch_repository(),
        movement_repo=stock_movement_repository(),
        item_repo=item_repository(),
    )

    source, ref = ("batch", batch_id) if batch_id is not None else ("item", item_name)
    try:
        record = handler.handle(obj["tenant"], source, ref, quantity, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Wrote off {record.quantity} from {source} '{ref}' ({reason})")
