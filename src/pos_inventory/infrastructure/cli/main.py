from __future__ import annotations

import click

from pos_inventory.infrastructure.cli.batch_commands import (
    batch_list,
    batch_produce,
    wastage_register,
)
from pos_inventory.infrastructure.cli.catalog_commands import item_add, item_list, recipe_add
from pos_inventory.infrastructure.cli.sale_commands import sale_record
from pos_inventory.infrastructure.cli.stock_commands import (
    stock_history,
    stock_receive,
    stock_show,
)
from pos_inventory.infrastructure.config import ConfigurationError, get_settings
from pos_inventory.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("--tenant", default=None, help="Tenant (company) to act for.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging.")
@click.pass_context
def cli(ctx: click.Context, tenant: str | None, verbose: bool) -> None:
    """POS sale fulfillment and stock"""
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = {"tenant": tenant or settings.tenant}


@cli.group()
def item() -> None:
    """Manage catalog items."""


@cli.group()
def recipe() -> None:
    """Manage recipes."""


@cli.group()
def stock() -> None:
    """Manage unit and ingredient stock."""


@cli.group()
def batch() -> None:
    """Manage prepared batches."""


@cli.group()
def wastage() -> None:
    """Record wastage."""


@cli.group()
def sale() -> None:
    """Record sales."""


# Register subcommands
item.add_command(item_add)
item.add_command(item_list)
recipe.add_command(recipe_add)
stock.add_command(stock_receive)
stock.add_command(stock_show)
stock.add_command(stock_history)
batch.add_command(batch_produce)
batch.add_command(batch_list)
wastage.add_command(wastage_register)
sale.add_command(sale_record)
