"""Console interface for the expense tracker."""

from __future__ import annotations

import argparse
import calendar
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional

from expense_core.config import Settings, get_settings
from expense_core.exceptions import (
    ExportError,
    PersistenceError,
    RecordNotFoundError,
    ValidationError,
)
from expense_core.logging_setup import configure_logging, get_logger
from expense_core.models import Expense
from expense_core.services import ExpenseService, ExpenseStore
from expense_core.storage import JSONStorage
from expense_core.validators import validate_id

logger = get_logger(__name__)

ROW_FORMAT = "{:<12} {:<18} {:<18} {:<10} {}"
BANNER_RULE = "-" * 53


def _parse_amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError("Amount must be a numeric value") from exc
    if not amount.is_finite():
        raise argparse.ArgumentTypeError("Amount must be a finite number")
    return amount


def _load_store(data_file: Path) -> ExpenseService:
    return ExpenseService(JSONStorage(data_file))


def _format_row(expense: Expense) -> str:
    return ROW_FORMAT.format(
        expense.id,
        expense.date.strftime("%Y-%m-%d %H:%M"),
        expense.description,
        f"{expense.amount:.2f}",
        expense.category,
    )


def handle_add(args: argparse.Namespace, store: ExpenseStore) -> None:
    if not args.description or args.amount <= 0:
        raise ValidationError(
            "description and amount must be provided, and amount must be positive"
        )
    expense = store.add(args.description, args.amount, args.category)
    print(f"Expense added successfully (id {expense.id})")


def handle_update(args: argparse.Namespace, store: ExpenseStore) -> None:
    validate_id(args.id)
    if args.amount < 0:
        raise ValidationError("amount must not be negative")
    # Every field is overwritten; omitted flags clear the stored value.
    existing = store.get(args.id)
    store.update(existing.id, args.description, args.amount, args.category)
    print("Expense updated successfully")


def handle_delete(args: argparse.Namespace, store: ExpenseStore) -> None:
    store.delete(validate_id(args.id))
    print("Expense deleted successfully")


def handle_list(args: argparse.Namespace, store: ExpenseStore) -> None:
    expenses = store.list()
    if not expenses:
        print("No data is found.")
        return

    if args.category:
        print(f"Filtered by category: {args.category}")
    print(ROW_FORMAT.format("ID", "Date", "Description", "Amount", "Category"))

    shown = 0
    total = Decimal("0.00")
    last_day: Optional[int] = None
    for expense in expenses:
        if args.category and expense.category != args.category:
            continue
        if last_day is None or expense.date.day != last_day:
            last_day = expense.date.day
            print(f"# {expense.date.strftime('%Y %B %d')} {BANNER_RULE}")
        print(_format_row(expense))
        shown += 1
        total += expense.amount

    noun = "expense" if shown == 1 else "expenses"
    print(f"{shown} {noun}, total {total:.2f}")


def handle_summary(args: argparse.Namespace, store: ExpenseStore, currency: str) -> None:
    suffix = f" {currency}" if currency else ""
    if args.month > 0:
        total = store.total_for_month(args.month)
        print(f"Total expenses for {calendar.month_name[args.month]}: {total:.2f}{suffix}")
    else:
        total = store.total()
        print(f"Total expenses: {total:.2f}{suffix}")


def handle_export(args: argparse.Namespace, store: ExpenseStore) -> None:
    store.export(args.file)
    print(f"Expenses exported successfully to {args.file}")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expense-tracker", description="Expense Tracker CLI")
    parser.add_argument(
        "--data-file",
        default=settings.data_file,
        type=Path,
        help=f"JSON file holding the expenses (default: {settings.data_file})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add a new expense")
    add_parser.add_argument("--description", default="", help="Expense description")
    add_parser.add_argument("--amount", type=_parse_amount, default=Decimal("0"), help="Expense amount")
    add_parser.add_argument("--category", default="", help="Expense category")

    update_parser = subparsers.add_parser(
        "update", help="Overwrite the description, amount and category of an expense"
    )
    update_parser.add_argument("--id", type=int, default=0, help="Expense ID")
    update_parser.add_argument("--description", default="", help="New description")
    update_parser.add_argument("--amount", type=_parse_amount, default=Decimal("0"), help="New amount")
    update_parser.add_argument("--category", default="", help="New category")

    delete_parser = subparsers.add_parser("delete", help="Delete an expense")
    delete_parser.add_argument("--id", type=int, default=0, help="Expense ID")

    list_parser = subparsers.add_parser("list", help="List expenses")
    list_parser.add_argument("--category", default="", help="Only show this category")

    summary_parser = subparsers.add_parser("summary", help="Show total expenses")
    summary_parser.add_argument("--month", type=int, default=0, help="Month number (1-12)")

    export_parser = subparsers.add_parser("export", help="Export expenses to CSV")
    export_parser.add_argument(
        "--file",
        type=Path,
        default=settings.export_file,
        help=f"CSV file to export to (default: {settings.export_file})",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else settings.log_level, stream=sys.stderr)

    try:
        store = _load_store(args.data_file)
        if args.command == "add":
            handle_add(args, store)
        elif args.command == "update":
            handle_update(args, store)
        elif args.command == "delete":
            handle_delete(args, store)
        elif args.command == "list":
            handle_list(args, store)
        elif args.command == "summary":
            handle_summary(args, store, settings.currency)
        elif args.command == "export":
            handle_export(args, store)
        else:  # pragma: no cover - argparse should prevent this
            parser.error(f"Unknown command: {args.command}")
            return 2
    except ValidationError as exc:
        logger.debug("Validation failed", exc_info=True)
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        logger.debug("Lookup failed", exc_info=True)
        print(str(exc), file=sys.stderr)
        return 1
    except PersistenceError as exc:
        logger.debug("Storage failed", exc_info=True)
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    except ExportError as exc:
        logger.debug("Export failed", exc_info=True)
        print(f"Export error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
