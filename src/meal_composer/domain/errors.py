"""Validation errors raised by the meal composition core."""


class MalformedQuantityError(ValueError):
    """Raised when a quantity is negative or not a finite number."""

    def __init__(self, quantity: object) -> None:
        super().__init__(f"Quantity must be a finite number >= 0, got {quantity!r}")
        self.quantity = quantity


class EmptyBasketError(ValueError):
    """Raised when submitting a meal with no selected foods."""

    def __init__(self) -> None:
        super().__init__("No foods selected")
