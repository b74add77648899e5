"""
In-memory Ledger for Shared-Expense Groups

This module provides:
- Groups kept in creation order
- Per-group users kept in ascending-balance order
- Per-group transaction logs, most recent first
- Balance, under-paid and recent-transaction queries
- Plain-text rendering of query results
"""

from .models import (
    LedgerStatus,
    User,
    Transaction,
    UserBalance,
    GroupSnapshot,
)
from .registry import Group, LookupPosition, UserLookup
from .service import (
    LedgerService,
    LedgerServiceError,
    AlreadyExistsError,
    NotFoundError,
    GroupNotFoundError,
    UserNotFoundError,
    EmptyGroupError,
    InvalidAmountError,
)

__all__ = [
    "LedgerStatus",
    "User",
    "Transaction",
    "UserBalance",
    "GroupSnapshot",
    "Group",
    "LookupPosition",
    "UserLookup",
    "LedgerService",
    "LedgerServiceError",
    "AlreadyExistsError",
    "NotFoundError",
    "GroupNotFoundError",
    "UserNotFoundError",
    "EmptyGroupError",
    "InvalidAmountError",
]
