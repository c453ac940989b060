from .finance import TransactionModel

__all__ = [
    "TransactionModel",
]
