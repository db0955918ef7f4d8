"""Framework-agnostic business services for the expense tracker."""

from __future__ import annotations

import csv
from dataclasses import replace
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union

from .exceptions import ExportError, PersistenceError, RecordNotFoundError
from .logging_setup import get_logger
from .models import Expense
from .validators import (
    parse_amount,
    validate_month,
    validate_optional_str,
    validate_required_str,
)

logger = get_logger(__name__)

EXPORT_HEADER = ["ID", "Date", "Description", "Amount", "Category"]


class RecordStorage(Protocol):
    """Backend holding the JSON-native form of every record."""

    def load(self) -> List[Dict[str, Any]]:
        ...

    def save(self, records: Iterable[Dict[str, Any]]) -> None:
        ...


class ExpenseStore(Protocol):
    """Capability set the command handlers rely on."""

    def add(self, description: str, amount: object, category: Optional[str] = "") -> Expense:
        ...

    def get(self, expense_id: int) -> Expense:
        ...

    def update(
        self, expense_id: int, description: str, amount: object, category: Optional[str]
    ) -> Expense:
        ...

    def delete(self, expense_id: int) -> None:
        ...

    def list(self) -> List[Expense]:
        ...

    def total(self) -> Decimal:
        ...

    def total_for_month(self, month: int) -> Decimal:
        ...

    def export(self, path: Union[str, Path]) -> None:
        ...


class ExpenseService:
    """Manages expense records and mediates persistence.

    The whole collection lives in memory in insertion order and is written
    back in full after every mutation. If a save fails the exception
    propagates and the in-memory state should no longer be trusted.
    """

    def __init__(self, storage: RecordStorage) -> None:
        self._storage = storage
        self._expenses: List[Expense] = []
        self.load()  # Hydrate in-memory cache from persistence on construction.

    # Public API -----------------------------------------------------------
    def add(self, description: str, amount: object, category: Optional[str] = "") -> Expense:
        expense = Expense.new(
            validate_required_str(description, "description"),
            parse_amount(amount, "amount"),
            validate_optional_str(category, "category"),
        )
        expense = self._with_unique_id(expense)
        self._expenses.append(expense)
        self._persist()
        logger.info("Added expense %s (%s)", expense.id, expense.description)
        return expense

    def get(self, expense_id: int) -> Expense:
        """Return an expense or raise if it does not exist."""
        return self._expenses[self._index_or_raise(expense_id)]

    def update(
        self, expense_id: int, description: str, amount: object, category: Optional[str]
    ) -> Expense:
        index = self._index_or_raise(expense_id)
        # Only these three fields change; id and creation date are preserved.
        updated = replace(
            self._expenses[index],
            description=validate_optional_str(description, "description"),
            amount=parse_amount(amount, "amount", allow_zero=True),
            category=validate_optional_str(category, "category"),
        )
        self._expenses[index] = updated
        self._persist()
        logger.info("Updated expense %s", expense_id)
        return updated

    def delete(self, expense_id: int) -> None:
        index = self._index_or_raise(expense_id)
        del self._expenses[index]
        self._persist()
        logger.info("Deleted expense %s", expense_id)

    def list(self) -> List[Expense]:
        return list(self._expenses)

    def total(self) -> Decimal:
        return sum((expense.amount for expense in self._expenses), start=Decimal("0.00"))

    def total_for_month(self, month: int) -> Decimal:
        """Sum the expenses dated in ``month`` across every year on record."""
        month = validate_month(month)
        return sum(
            (expense.amount for expense in self._expenses if expense.date.month == month),
            start=Decimal("0.00"),
        )

    def export(self, path: Union[str, Path]) -> None:
        """Write every expense to ``path`` as CSV, replacing any existing file."""
        destination = Path(path)
        try:
            with destination.open("w", encoding="utf-8", newline="") as handle:
                writer = csv.writer(handle)
                writer.writerow(EXPORT_HEADER)
                for expense in self._expenses:
                    writer.writerow(
                        [
                            expense.id,
                            expense.date.strftime("%Y-%m-%d"),
                            expense.description,
                            f"{expense.amount:.2f}",
                            expense.category,
                        ]
                    )
        except OSError as exc:
            raise ExportError(f"Unable to export expenses to {destination}") from exc
        logger.info("Exported %d expenses to %s", len(self._expenses), destination)

    def load(self) -> None:
        """Load existing expenses from persistence."""
        raw_records = self._storage.load()
        try:
            self._expenses = [Expense.from_dict(payload) for payload in raw_records]
        except (AttributeError, KeyError, TypeError, ValueError, ArithmeticError) as exc:
            raise PersistenceError(f"Malformed expense record: {exc}") from exc

    # Internal helpers -----------------------------------------------------
    def _persist(self) -> None:
        try:
            self._storage.save([expense.to_dict() for expense in self._expenses])
        except PersistenceError:
            raise
        except Exception as exc:  # pragma: no cover
            raise PersistenceError("Unexpected error while saving expenses") from exc

    def _index_or_raise(self, expense_id: int) -> int:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return index
        raise RecordNotFoundError(f"Expense {expense_id} not found")

    def _with_unique_id(self, expense: Expense) -> Expense:
        # Timestamp ids collide when two expenses land in the same second.
        taken = {existing.id for existing in self._expenses}
        if expense.id not in taken:
            return expense
        return replace(expense, id=max(taken) + 1)
