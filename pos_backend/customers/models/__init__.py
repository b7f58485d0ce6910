# customers/models/__init__.py

from .customer import Customer
from .wallet_history import WalletHistoryEntry

__all__ = ["Customer", "WalletHistoryEntry"]
