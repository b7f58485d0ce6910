# customers/views/__init__.py

from .wallet import CustomerAdvanceView

__all__ = ["CustomerAdvanceView"]
