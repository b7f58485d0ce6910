# catalog/models/__init__.py

from .catalog import Membership, Product, Service

__all__ = ["Service", "Product", "Membership"]
