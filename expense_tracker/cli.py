"""Console interface for the expense tracker."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional, TextIO

from common.config import categories_from_env, log_level_from_env, split_categories
from common.exceptions import DuplicateCategoryError, UnknownCategoryError, ValidationError
from common.export import export_to_excel
from common.services import ExpenseLedger
from common.validators import optional_category, parse_amount, parse_date

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_EXPORT_FILE = "expenses.xlsx"

MENU = "1. Add Expense\n2. Add Category\n3. Show Statistics\n4. Export to Excel\n5. Exit"
EXIT_CHOICE = "5"


class _Console:
    """Line-oriented prompts over an input stream; EOF ends the session."""

    def __init__(self, stdin: TextIO, stdout: TextIO) -> None:
        self._stdin = stdin
        self._stdout = stdout

    def say(self, message: str) -> None:
        print(message, file=self._stdout)

    def ask(self, message: str) -> str:
        self.say(message)
        line = self._stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")


def handle_add_expense(console: _Console, ledger: ExpenseLedger) -> None:
    category = console.ask("Enter category:")
    amount = parse_amount(console.ask("Enter amount:"))
    on = parse_date(console.ask("Enter date (yyyy-mm-dd):"))
    expense = ledger.add_expense(category, amount, on)
    console.say(f"Expense added: {expense.amount:.2f} to {expense.category} on {expense.date.isoformat()}")


def handle_add_category(console: _Console, ledger: ExpenseLedger) -> None:
    name = ledger.add_category(console.ask("Enter new category name:"))
    console.say(f"Category added: {name}")


def handle_statistics(console: _Console, ledger: ExpenseLedger) -> None:
    category = optional_category(console.ask("Enter category (or press Enter for all):"))
    for line in ledger.show_statistics(category):
        console.say(line)


def handle_export(console: _Console, ledger: ExpenseLedger) -> None:
    category = optional_category(console.ask("Enter category (or press Enter for all):"))
    file_name = console.ask("Enter file name:").strip() or DEFAULT_EXPORT_FILE
    if export_to_excel(ledger, file_name, category):
        console.say(f"Exported to {file_name}")
    else:
        print(f"Export to {file_name} failed.", file=sys.stderr)


HANDLERS: Dict[str, Callable[[_Console, ExpenseLedger], None]] = {
    "1": handle_add_expense,
    "2": handle_add_category,
    "3": handle_statistics,
    "4": handle_export,
}


def run_menu(ledger: ExpenseLedger, stdin: TextIO, stdout: Optional[TextIO] = None) -> int:
    console = _Console(stdin, stdout or sys.stdout)
    while True:
        try:
            choice = console.ask(MENU).strip()
            if choice == EXIT_CHOICE:
                break
            handler = HANDLERS.get(choice)
            if handler is None:
                console.say("Invalid choice.")
                continue
            handler(console, ledger)
        except EOFError:
            break
        except ValidationError as exc:
            print(f"Validation error: {exc}", file=sys.stderr)
        except (DuplicateCategoryError, UnknownCategoryError) as exc:
            print(str(exc), file=sys.stderr)
    logger.info("Exiting application.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Expense Tracker CLI")
    parser.add_argument(
        "--categories",
        type=split_categories,
        default=None,
        help="Comma-separated initial categories (default: $EXPENSE_TRACKER_CATEGORIES or built-in list)",
    )
    parser.add_argument(
        "--log-level",
        default=log_level_from_env(),
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: $EXPENSE_TRACKER_LOG_LEVEL or INFO)",
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    categories = args.categories or categories_from_env()
    try:
        ledger = ExpenseLedger(categories)
    except (DuplicateCategoryError, ValidationError) as exc:
        parser.error(str(exc))
        return 2  # pragma: no cover - parser.error exits
    return run_menu(ledger, stdin or sys.stdin, stdout)


if __name__ == "__main__":
    raise SystemExit(main())
