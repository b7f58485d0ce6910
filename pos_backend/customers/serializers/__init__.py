# customers/serializers/__init__.py

from .wallet import CustomerSummarySerializer, WalletHistoryEntrySerializer

__all__ = ["CustomerSummarySerializer", "WalletHistoryEntrySerializer"]
