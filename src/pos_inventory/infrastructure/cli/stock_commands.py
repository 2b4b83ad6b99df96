"""CLI commands for the stock ledger."""

from __future__ import annotations

import click

from pos_inventory.application.receive_stock import ReceiveStockHandler
from pos_inventory.application.show_movements import ShowMovementsHandler
from pos_inventory.application.show_stock import ShowStockHandler
from pos_inventory.domain.exceptions import DomainException
from pos_inventory.infrastructure.bootstrap import (
    batch_repository,
    item_repository,
    recipe_repository,
    stock_movement_repository,
)
from pos_inventory.infrastructure.config import get_settings


@click.command("receive")
@click.option("--item", "item_name", required=True, help="Item name.")
@click.option("--quantity", required=True, type=int, help="Units received.")
@click.option("--note", default=None, help="Free-text note for the movement.")
@click.pass_obj
def stock_receive(obj: dict, item_name: str, quantity: int, note: str | None) -> None:
    """Record incoming stock for a unit or ingredient item."""
    handler = ReceiveStockHandler(
        movement_repo=stock_movement_repository(),
        item_repo=item_repository(),
    )

    try:
        on_hand = handler.handle(obj["tenant"], item_name, quantity, note=note)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Received {quantity} of '{item_name}' (on hand: {on_hand})")


@click.command("show")
@click.pass_obj
def stock_show(obj: dict) -> None:
    """Show on-hand quantities."""
    handler = ShowStockHandler(
        item_repo=item_repository(),
        recipe_repo=recipe_repository(),
        batch_repo=batch_repository(),
        movement_repo=stock_movement_repository(),
        low_stock_threshold=get_settings().low_stock_threshold,
    )
    lines = handler.handle(obj["tenant"])

    if not lines:
        click.echo("No items found.")
        return

    click.echo(f"{'Item':<24} {'Kind':<14} {'On hand':>8}")
    click.echo("-" * 48)
    for line in lines:
        flag = "  LOW" if line.low_stock else ""
        click.echo(f"{line.item_name:<24} {line.kind:<14} {line.on_hand:>8}{flag}")


@click.command("history")
@click.option("--item", "item_name", required=True, help="Item name.")
@click.pass_obj
def stock_history(obj: dict, item_name: str) -> None:
    """Show the movement log of one item."""
    handler = ShowMovementsHandler(
        movement_repo=stock_movement_repository(),
        item_repo=item_repository(),
    )

    try:
        movements = handler.handle(obj["tenant"], item_name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not movements:
        click.echo(f"No movements for '{item_name}'.")
        return

    for m in movements:
        click.echo(f"{m.created_at}  {m.kind:<4} {m.quantity:>6}  {m.note}")
