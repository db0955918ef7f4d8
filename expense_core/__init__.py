"""Core business logic package for the expense tracker."""

from .models import Expense
from .services import ExpenseService, ExpenseStore
from .storage import JSONStorage, MemoryStorage
from .exceptions import ExportError, PersistenceError, ValidationError, RecordNotFoundError

__all__ = [
    "Expense",
    "ExpenseService",
    "ExpenseStore",
    "JSONStorage",
    "MemoryStorage",
    "ExportError",
    "PersistenceError",
    "ValidationError",
    "RecordNotFoundError",
]
