# store/models/__init__.py

from .store import Store
from .store_user import StoreUser

__all__ = ["Store", "StoreUser"]
