"""Record model exports."""

from .budget import Budget
from .member import Member
from .settings import AppSettings
from .transaction import PaymentMethod, Transaction, TransactionType
from .user import User

__all__ = [
    "AppSettings",
    "Budget",
    "Member",
    "PaymentMethod",
    "Transaction",
    "TransactionType",
    "User",
]
