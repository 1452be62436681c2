"""Core business logic package for the expense tracker."""

from .config import DEFAULT_CATEGORIES
from .models import CategoryTotal, Expense, ExportRow, StatisticsReport
from .services import ExpenseLedger
from .export import ExcelWriter, export_to_excel
from .exceptions import DuplicateCategoryError, ExportIOError, UnknownCategoryError, ValidationError

__all__ = [
    "DEFAULT_CATEGORIES",
    "CategoryTotal",
    "Expense",
    "ExportRow",
    "StatisticsReport",
    "ExpenseLedger",
    "ExcelWriter",
    "export_to_excel",
    "DuplicateCategoryError",
    "ExportIOError",
    "UnknownCategoryError",
    "ValidationError",
]
