# products/services/exceptions.py

"""
STOCK SERVICE ERRORS

Centralized domain errors for product and stock services.
"""


class StockServiceError(Exception):
    """Base exception for all stock service failures."""


class ProductNotFoundError(StockServiceError):
    """Raised when a barcode does not resolve to a product."""

    def __init__(self, barcode: str):
        self.barcode = barcode
        super().__init__(f"Product not found for barcode: {barcode}")


class InsufficientStockError(StockServiceError):
    """
    Raised by the stock-out policy when a product cannot cover the
    requested quantity. Raising it inside the atomic block rolls back
    every item of the bulk call.
    """

    def __init__(self, *, barcode: str, requested: int, available: int):
        self.barcode = barcode
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product {barcode}. "
            f"Requested: {requested}, Available: {available}"
        )


class StockLogQueryError(StockServiceError):
    """Raised when movement log query parameters fail validation."""

    def __init__(self, errors: dict):
        self.errors = errors
        super().__init__("Invalid stock log query")
