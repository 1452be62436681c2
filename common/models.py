"""Data models for the expense tracker domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

__all__ = ["CategoryTotal", "Expense", "ExportRow", "StatisticsReport"]


@dataclass(frozen=True)
class Expense:
    category: str
    date: date
    amount: float

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "category": self.category,
            "date": self.date.isoformat(),
            "amount": self.amount,
        }


@dataclass(frozen=True)
class ExportRow:
    """One flattened spreadsheet row; the date is already rendered as text."""

    date: str
    category: str
    amount: float

    def as_tuple(self) -> tuple:
        return (self.date, self.category, self.amount)


@dataclass(frozen=True)
class CategoryTotal:
    name: str
    total: float
    percentage: Optional[float] = None

    def render(self) -> str:
        if self.percentage is None:
            return f"{self.name}: {self.total:.2f}"
        return f"{self.name}: {self.total:.2f} ({self.percentage:.2f}%)"

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name, "total": f"{self.total:.2f}"}
        if self.percentage is not None:
            payload["percentage"] = f"{self.percentage:.2f}"
        return payload


@dataclass(frozen=True)
class StatisticsReport:
    """Totals computed by the ledger for either every category or a single one.

    ``category`` is ``None`` for the overall report, which carries a grand total
    line plus one entry per registered category. A filtered report carries only
    the requested category and no percentages.
    """

    total: float
    categories: List[CategoryTotal] = field(default_factory=list)
    category: Optional[str] = None

    def lines(self) -> List[str]:
        if self.category is not None:
            return [entry.render() for entry in self.categories]
        return [f"Total spent: {self.total:.2f}"] + [entry.render() for entry in self.categories]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "total": f"{self.total:.2f}",
            "categories": [entry.to_dict() for entry in self.categories],
        }
