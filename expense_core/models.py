"""Data models for the expense tracker domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

__all__ = ["Expense", "isoformat_local", "parse_datetime", "quantize_amount"]

TWO_PLACES = Decimal("0.01")


def quantize_amount(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def isoformat_local(dt: datetime) -> str:
    """Return an ISO 8601 string that always carries a UTC offset."""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.isoformat()


def parse_datetime(value: str) -> datetime:
    """Parse ISO 8601 datetime strings with optional trailing Z into an aware datetime."""
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        # Naive timestamps were written in the operator's local time zone.
        dt = dt.astimezone()
    return dt


@dataclass(frozen=True)
class Expense:
    id: int
    date: datetime
    description: str
    amount: Decimal
    category: str = ""

    @classmethod
    def new(
        cls,
        description: str,
        amount: Decimal,
        category: str = "",
        *,
        now: Optional[datetime] = None,
    ) -> "Expense":
        """Create a record stamped with the current time.

        The identifier is the creation time in whole seconds since the epoch.
        """
        created = now or datetime.now()
        if created.tzinfo is None:
            created = created.astimezone()
        return cls(
            id=int(created.timestamp()),
            date=created,
            description=description,
            amount=amount,
            category=category,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        payload: Dict[str, Any] = {
            "id": self.id,
            "date": isoformat_local(self.date),
            "description": self.description,
            "amount": float(self.amount),
        }
        if self.category:
            payload["category"] = self.category
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expense":
        """Hydrate an Expense from JSON-native data."""
        return cls(
            id=int(data["id"]),
            date=parse_datetime(data["date"]),
            description=data["description"],
            amount=quantize_amount(Decimal(str(data["amount"]))),
            category=data.get("category") or "",
        )
