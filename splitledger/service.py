import logging
import math
from dataclasses import replace
from typing import Optional

from .models import (
    LedgerStatus,
    User,
    Transaction,
    UserBalance,
    TransactionResponse,
    GroupSnapshot,
)
from .registry import Group, GroupRegistry, UserLookup

logger = logging.getLogger("splitledger.service")


class LedgerServiceError(Exception):
    status: LedgerStatus


class AlreadyExistsError(LedgerServiceError):
    status = LedgerStatus.ALREADY_EXISTS


class NotFoundError(LedgerServiceError):
    status = LedgerStatus.NOT_FOUND


class GroupNotFoundError(NotFoundError):
    pass


class UserNotFoundError(NotFoundError):
    pass


class EmptyGroupError(LedgerServiceError):
    status = LedgerStatus.EMPTY_GROUP


class InvalidAmountError(LedgerServiceError):
    status = LedgerStatus.INVALID_AMOUNT


class LedgerService:
    def __init__(self, registry: Optional[GroupRegistry] = None):
        self.registry = registry if registry is not None else GroupRegistry()

    # Groups

    def add_group(self, name: str) -> Group:
        if self.registry.find(name) is not None:
            raise AlreadyExistsError(f"Group {name} already exists")
        group = Group(name=name)
        self.registry.append(group)
        logger.info("Added group %s", name)
        return group

    def find_group(self, name: str) -> Optional[Group]:
        return self.registry.find(name)

    def get_group(self, name: str) -> Group:
        group = self.registry.find(name)
        if group is None:
            raise GroupNotFoundError(f"Group {name} not found")
        return group

    def list_groups(self) -> list[str]:
        return self.registry.names()

    # Users

    def add_user(self, group_name: str, user_name: str) -> User:
        group = self.get_group(group_name)
        if group.users.find_prev(user_name).found:
            raise AlreadyExistsError(f"User {user_name} already exists in group {group_name}")
        # New users always go first, even if earlier balances went negative.
        user = User(name=user_name)
        group.users.insert_at_head(user)
        logger.info("Added user %s to group %s", user_name, group_name)
        return user.model_copy()

    def find_prev_user(self, group_name: str, user_name: str) -> UserLookup:
        """Locate a user and its predecessor. The returned users are copies."""
        lookup = self.get_group(group_name).users.find_prev(user_name)
        if not lookup.found:
            return lookup
        return replace(
            lookup,
            user=lookup.user.model_copy(),
            predecessor=lookup.predecessor.model_copy() if lookup.predecessor else None,
        )

    def remove_user(self, group_name: str, user_name: str) -> User:
        group = self.get_group(group_name)
        user = group.users.remove(user_name)
        if user is None:
            raise UserNotFoundError(f"User {user_name} not found in group {group_name}")
        purged = self.purge_transactions(group_name, user_name)
        logger.info(
            "Removed user %s from group %s (%d transactions purged)",
            user_name, group_name, purged,
        )
        return user

    def list_users(self, group_name: str) -> list[str]:
        return self.get_group(group_name).users.names()

    def user_balance(self, group_name: str, user_name: str) -> UserBalance:
        group = self.get_group(group_name)
        user = group.users.get(user_name)
        if user is None:
            raise UserNotFoundError(f"User {user_name} not found in group {group_name}")
        return UserBalance(
            group=group_name,
            user_name=user.name,
            balance=user.balance,
            total_transactions=group.transactions.count_for(user.name),
        )

    def under_paid(self, group_name: str) -> list[str]:
        group = self.get_group(group_name)
        head = group.users.head
        if head is None:
            raise EmptyGroupError(f"Group {group_name} has no users")
        return [u.name for u in group.users if u.balance <= head.balance]

    # Transactions

    def add_transaction(self, group_name: str, user_name: str, amount: float) -> TransactionResponse:
        group = self.get_group(group_name)
        user = group.users.get(user_name)
        if user is None:
            raise UserNotFoundError(f"User {user_name} not found in group {group_name}")

        new_balance = user.balance + amount
        if not math.isfinite(amount) or not math.isfinite(new_balance):
            raise InvalidAmountError(f"Amount {amount} for {user_name} is not a finite balance change")

        transaction = Transaction(user_name=user_name, amount=amount)
        group.transactions.record(transaction)
        user.balance = new_balance
        position = group.users.reposition(user)

        logger.info(
            "Recorded %.2f for %s in group %s (balance %.2f)",
            amount, user_name, group_name, user.balance,
        )
        return TransactionResponse(
            group=group_name,
            transaction=transaction,
            balance_after=user.balance,
            position=position,
            message="Transaction recorded successfully",
        )

    def recent_transactions(self, group_name: str, count: int) -> list[Transaction]:
        return self.get_group(group_name).transactions.recent(count)

    def purge_transactions(self, group_name: str, user_name: str) -> int:
        return self.get_group(group_name).transactions.purge(user_name)

    def group_snapshot(self, group_name: str) -> GroupSnapshot:
        group = self.get_group(group_name)
        return GroupSnapshot(
            name=group.name,
            users=[u.model_copy() for u in group.users],
            transactions=list(group.transactions),
            total_transactions=len(group.transactions),
        )
