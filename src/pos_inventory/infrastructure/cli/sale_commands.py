"""CLI commands for recording sales."""

from __future__ import annotations

import click

from pos_inventory.application.dto import SaleItemSpec
from pos_inventory.application.record_sale import RecordSaleHandler
from pos_inventory.domain.exceptions import (
    ConcurrencyConflict,
    DomainException,
    FulfillmentError,
)
from pos_inventory.infrastructure.bootstrap import (
    batch_repository,
    item_repository,
    recipe_repository,
    stock_movement_repository,
)
from pos_inventory.infrastructure.cli.parsing import parse_name_quantities


@click.command("record")
@click.option("--items", required=True, help="Items sold as 'Item:Qty,Item:Qty'.")
@click.pass_obj
def sale_record(obj: dict, items: str) -> None:
    """Deduct a paid sale from batches and stock."""
    specs = [SaleItemSpec(name, qty) for name, qty in parse_name_quantities(items)]

    handler = RecordSaleHandler(
        item_repo=item_repository(),
        recipe_repo=recipe_repository(),
        batch_repo=batch_repository(),
        movement_repo=stock_movement_repository(),
    )

    try:
        receipt = handler.handle(obj["tenant"], specs)
    except (FulfillmentError, ConcurrencyConflict) as exc:
        raise click.ClickException(_line_failure(exc))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale recorded: {receipt.items_sold} items")
    click.echo()
    click.echo(f"  {'Source':<12} {'From':<24} {'Qty':>5}")
    click.echo(f"  {'-'*43}")
    for d in receipt.decrements:
        click.echo(f"  {d.source:<12} {d.target:<24} {d.quantity:>5}")


def _line_failure(exc: FulfillmentError | ConcurrencyConflict) -> str:
    message = f"Line {exc.line_index}: {exc}"
    if exc.committed:
        message += f" ({len(exc.committed)} decrements were applied and stay in place)"
    return message
