"""Parsing helpers shared by CLI commands."""

from __future__ import annotations

from datetime import date

import click


def parse_name_quantities(raw: str) -> list[tuple[str, int]]:
    """Parse 'Lasagna:3,Soda:2' into [(name, qty), ...] preserving order."""
    pairs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'Name:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for '{name}'."
            )
        pairs.append((name.strip(), qty))
    return pairs


def parse_date(raw: str | None) -> date | None:
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise click.BadParameter(f"Invalid date '{raw}'. Expected YYYY-MM-DD.")
