"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Fulfillment failures carry structured fields (item/recipe id, amounts) so
the caller can render an actionable message or decide on sale-level
rollback itself.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UnknownItem(EntityNotFoundError):

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Unknown item '{item_id}'")


class UnknownRecipe(EntityNotFoundError):

    def __init__(self, recipe_id: str) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Unknown recipe '{recipe_id}'")


class ConcurrencyConflict(DomainException):
    """A conditional write found the row changed since it was read.

    Raised instead of committing a decrement computed from a stale
    snapshot.  Not retried automatically.
    """

    # Set by the allocation engine when raised mid-sale.  ``unreverted``
    # holds batch writes of the failing line item that could not be undone
    # because another writer changed the batch again; they are also
    # included in ``committed``.
    line_index: int | None = None
    committed: tuple = ()
    unreverted: tuple = ()

    def __init__(self, key: tuple[str, ...], detail: str = "") -> None:
        self.key = key
        message = f"Concurrent modification of {'/'.join(key)}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class FulfillmentError(DomainException):
    """A line item could not be fulfilled from any pool.

    ``line_index`` (1-based) and ``committed`` (decrement records of the
    earlier line items, which stay applied) are set by the allocation
    engine.
    """

    shortfall: int = 0
    line_index: int | None = None
    committed: tuple = ()


class InsufficientStock(FulfillmentError):

    def __init__(self, item_id: str, requested: int, available: int) -> None:
        self.item_id = item_id
        self.requested = requested
        self.available = available
        self.shortfall = requested - available
        super().__init__(
            f"Insufficient stock for item '{item_id}': missing {self.shortfall} "
            f"units (need {requested}, have {available})"
        )


class InsufficientPortions(FulfillmentError):

    def __init__(self, recipe_id: str | None, requested: int, available: int) -> None:
        self.recipe_id = recipe_id
        self.requested = requested
        self.available = available
        self.shortfall = requested - available
        super().__init__(
            f"Missing {self.shortfall} portions of recipe '{recipe_id or '?'}' "
            f"(need {requested}, have {available})"
        )


class InsufficientIngredients(FulfillmentError):

    def __init__(self, recipe_id: str, ingredient_id: str, deficit: int) -> None:
        self.recipe_id = recipe_id
        self.ingredient_id = ingredient_id
        self.deficit = deficit
        self.shortfall = deficit
        super().__init__(
            f"Missing {deficit} units of ingredient '{ingredient_id}' "
            f"for recipe '{recipe_id}'"
        )
