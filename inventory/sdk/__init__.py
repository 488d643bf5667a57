"""Client SDK for the inventory API."""

from inventory.sdk.client import InventoryClient, InventoryClientError

__all__ = [
    "InventoryClient",
    "InventoryClientError",
]
