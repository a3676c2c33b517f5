"""Entity stores holding canonical session state."""
from .cart import CartStore
from .catalog import CatalogStore
from .customer import CustomerStore

__all__ = ["CartStore", "CatalogStore", "CustomerStore"]
