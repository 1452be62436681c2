"""Framework-agnostic business services for the expense tracker."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .config import DEFAULT_CATEGORIES
from .exceptions import DuplicateCategoryError, UnknownCategoryError
from .models import CategoryTotal, Expense, ExportRow, StatisticsReport
from .validators import parse_amount, parse_date, validate_category_name

logger = logging.getLogger(__name__)


class ExpenseLedger:
    """Keeps categories and the amounts recorded against them in memory.

    Amounts are stored per category, then per date, in the order they were
    added. Categories keep their registration order, which drives the order of
    statistics and export rows.
    """

    def __init__(self, categories: Optional[Iterable[str]] = None) -> None:
        self._categories: List[str] = []
        self._expenses: Dict[str, Dict[date, List[float]]] = {}
        for name in DEFAULT_CATEGORIES if categories is None else categories:
            self._register(validate_category_name(name, "name"))

    # Public API -----------------------------------------------------------
    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._categories)

    def add_category(self, name: str) -> str:
        name = validate_category_name(name, "name")
        if name in self._expenses:
            logger.warning("Category already exists: %s", name)
            raise DuplicateCategoryError(f"Category already exists: {name}")
        self._register(name)
        logger.info("Added new category: %s", name)
        return name

    def add_expense(self, category: str, amount: float, on: date) -> Expense:
        self._require_category(category)
        amount = parse_amount(amount)
        on = parse_date(on)
        self._expenses[category].setdefault(on, []).append(amount)
        logger.info("Added expense: %s to category %s on %s", amount, category, on)
        return Expense(category=category, date=on, amount=amount)

    def total(self, category: Optional[str] = None) -> float:
        if category is not None:
            self._require_category(category)
            return self._category_total(category)
        return sum((self._category_total(name) for name in self._categories), 0.0)

    def statistics(self, category: Optional[str] = None) -> StatisticsReport:
        """Compute totals, and percentages of the grand total when unfiltered."""
        if category is not None:
            self._require_category(category)
            category_total = self._category_total(category)
            return StatisticsReport(
                total=category_total,
                categories=[CategoryTotal(category, category_total)],
                category=category,
            )

        total_spent = self.total()
        entries = []
        for name in self._categories:
            category_total = self._category_total(name)
            # A ledger without expenses reports 0% everywhere.
            percentage = round(category_total / total_spent * 100, 2) if total_spent else 0.0
            entries.append(CategoryTotal(name, category_total, percentage))
        return StatisticsReport(total=total_spent, categories=entries)

    def show_statistics(self, category: Optional[str] = None) -> List[str]:
        return self.statistics(category).lines()

    def export_rows(
        self, category: Optional[str] = None, *, sort_dates: bool = False
    ) -> Iterator[ExportRow]:
        """Return rows for the spreadsheet writer.

        The category filter is checked immediately, so an unknown category fails
        at call time rather than on first iteration. Dates are yielded in the
        order they were first recorded unless ``sort_dates`` is set.
        """
        if category is not None:
            self._require_category(category)
        selected = [category] if category is not None else list(self._categories)
        return self._iter_rows(selected, sort_dates)

    def expenses(self, category: Optional[str] = None) -> List[Expense]:
        if category is not None:
            self._require_category(category)
        names = [category] if category is not None else self._categories
        return [
            Expense(category=name, date=on, amount=amount)
            for name in names
            for on, amounts in self._expenses[name].items()
            for amount in amounts
        ]

    def __contains__(self, category: object) -> bool:
        return category in self._expenses

    def __len__(self) -> int:
        return sum(
            len(amounts) for per_date in self._expenses.values() for amounts in per_date.values()
        )

    # Internal helpers -----------------------------------------------------
    def _register(self, name: str) -> None:
        if name in self._expenses:
            raise DuplicateCategoryError(f"Category already exists: {name}")
        self._categories.append(name)
        self._expenses[name] = {}

    def _require_category(self, category: str) -> None:
        if category not in self._expenses:
            logger.warning("Invalid category: %s", category)
            raise UnknownCategoryError(f"Invalid category: {category}")

    def _category_total(self, category: str) -> float:
        return sum(
            (amount for amounts in self._expenses[category].values() for amount in amounts), 0.0
        )

    def _iter_rows(self, names: List[str], sort_dates: bool) -> Iterator[ExportRow]:
        for name in names:
            per_date = self._expenses[name]
            dates = sorted(per_date) if sort_dates else list(per_date)
            for on in dates:
                for amount in per_date[on]:
                    yield ExportRow(date=on.isoformat(), category=name, amount=amount)
