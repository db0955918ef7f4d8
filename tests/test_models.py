from datetime import datetime, timedelta, timezone
from decimal import Decimal

from expense_core.models import Expense, isoformat_local, parse_datetime


def test_new_expense_takes_id_from_creation_time():
    created = datetime(2024, 3, 1, 12, 30, 15)
    expense = Expense.new("Lunch", Decimal("12.50"), "Food", now=created)

    assert expense.date == created.astimezone()
    assert expense.id == int(created.astimezone().timestamp())
    assert expense.description == "Lunch"
    assert expense.amount == Decimal("12.50")
    assert expense.category == "Food"


def test_new_expense_defaults_to_uncategorized():
    expense = Expense.new("Bus ticket", Decimal("2.00"))
    assert expense.category == ""
    assert expense.date.tzinfo is not None


def test_to_dict_keeps_field_order_and_omits_empty_category():
    expense = Expense.new("Bus ticket", Decimal("2.00"), now=datetime(2024, 3, 1, 8, 0))
    payload = expense.to_dict()

    assert list(payload) == ["id", "date", "description", "amount"]
    assert payload["amount"] == 2.0

    categorized = Expense.new("Coffee", Decimal("3.20"), "Food", now=datetime(2024, 3, 1, 8, 0))
    assert list(categorized.to_dict()) == ["id", "date", "description", "amount", "category"]


def test_from_dict_round_trips():
    expense = Expense.new("Lunch", Decimal("12.50"), "Food", now=datetime(2024, 1, 5, 13, 0, 0, 250000))
    assert Expense.from_dict(expense.to_dict()) == expense


def test_from_dict_accepts_utc_suffix_and_missing_category():
    expense = Expense.from_dict(
        {"id": 7, "date": "2024-02-10T09:00:00Z", "description": "Rent", "amount": 400}
    )

    assert expense.date == datetime(2024, 2, 10, 9, 0, tzinfo=timezone.utc)
    assert expense.amount == Decimal("400.00")
    assert expense.category == ""


def test_from_dict_keeps_offset():
    expense = Expense.from_dict(
        {"id": 1, "date": "2024-02-10T09:00:00.123456+01:00", "description": "Taxi", "amount": 9.99}
    )
    assert expense.date.utcoffset() == timedelta(hours=1)
    assert expense.date.microsecond == 123456
    assert expense.amount == Decimal("9.99")


def test_isoformat_local_always_has_offset():
    rendered = isoformat_local(datetime(2024, 6, 1, 10, 0))
    assert parse_datetime(rendered).tzinfo is not None
