"""CLI commands for items and recipes."""

from __future__ import annotations

import click

from pos_inventory.application.add_item import AddItemHandler
from pos_inventory.application.add_recipe import AddRecipeHandler
from pos_inventory.domain.exceptions import DomainException
from pos_inventory.domain.model.item import ItemKind
from pos_inventory.infrastructure.bootstrap import item_repository, recipe_repository
from pos_inventory.infrastructure.cli.parsing import parse_name_quantities


@click.command("add")
@click.option("--name", required=True, help="Item name.")
@click.option(
    "--kind",
    required=True,
    type=click.Choice([k.value for k in ItemKind]),
    help="Which pool sells this item.",
)
@click.pass_obj
def item_add(obj: dict, name: str, kind: str) -> None:
    """Add an item to the catalog."""
    handler = AddItemHandler(item_repo=item_repository())

    try:
        item = handler.handle(obj["tenant"], name=name, kind=kind)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item.id} '{item.name}' added ({item.kind.value})")


@click.command("list")
@click.pass_obj
def item_list(obj: dict) -> None:
    """List catalog items."""
    items = item_repository().list_all(obj["tenant"])
    if not items:
        click.echo("No items found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Kind':<14}")
    click.echo("-" * 46)
    for item in items:
        click.echo(f"{item.id:<6} {item.name:<24} {item.kind.value:<14}")


@click.command("add")
@click.option("--name", required=True, help="Recipe name.")
@click.option("--item", "item_name", required=True, help="Batch-portion item it produces.")
@click.option(
    "--ingredients",
    default="",
    help="Per-portion needs as 'Ingredient:Qty,Ingredient:Qty'.",
)
@click.pass_obj
def recipe_add(obj: dict, name: str, item_name: str, ingredients: str) -> None:
    """Add a recipe for a batch-portion item."""
    needs = dict(parse_name_quantities(ingredients)) if ingredients else {}

    handler = AddRecipeHandler(
        recipe_repo=recipe_repository(),
        item_repo=item_repository(),
    )

    try:
        recipe = handler.handle(obj["tenant"], name=name, item_name=item_name, ingredients=needs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Recipe #{recipe.id} '{recipe.name}' added "
        f"({len(recipe.ingredients)} ingredients)"
    )
