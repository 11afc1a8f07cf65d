class StockPilotError(Exception):
    """Base class for errors raised by the StockPilot services."""


class ProductStoreError(StockPilotError):
    """A database call in the product store failed."""


class ProductNotFoundError(StockPilotError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found.")


class RestockError(StockPilotError):
    """The restock request itself is invalid (bad quantity, etc.)."""


class StorageError(StockPilotError):
    """The object-storage provider rejected or failed a request."""


class StorageConfigError(StorageError):
    """Object-storage credentials or bucket settings are missing."""
