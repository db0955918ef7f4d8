"""Pytest configuration for test isolation.

The CLI reads its settings from ``EXPENSE_TRACKER_*`` environment variables and
an optional ``.env`` file in the working directory, and writes its backing
file relative to the working directory by default. Each test gets its own
temporary working directory and a clean settings cache so nothing leaks
between tests or onto the developer's real expense file.
"""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path

import pytest

from expense_core.config import get_settings
from expense_core.logging_setup import reset_logging
from expense_core.models import Expense
from expense_core.services import ExpenseService
from expense_core.storage import JSONStorage, MemoryStorage


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    for name in list(os.environ):
        if name.startswith("EXPENSE_TRACKER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    reset_logging()


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "expenses.json"


@pytest.fixture
def json_store(data_file: Path) -> ExpenseService:
    return ExpenseService(JSONStorage(data_file))


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def memory_store(memory_storage: MemoryStorage) -> ExpenseService:
    return ExpenseService(memory_storage)


@pytest.fixture
def make_record():
    """Build the JSON-native form of an expense dated ``when`` (naive means local time)."""

    def _make(expense_id, when, amount, description="Item", category=""):
        return Expense(
            id=expense_id,
            date=when.astimezone(),
            description=description,
            amount=Decimal(amount),
            category=category,
        ).to_dict()

    return _make
