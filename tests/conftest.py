from datetime import date

import pytest

from common.services import ExpenseLedger


@pytest.fixture
def ledger() -> ExpenseLedger:
    return ExpenseLedger()


@pytest.fixture
def example_ledger(ledger: ExpenseLedger) -> ExpenseLedger:
    ledger.add_expense("Food", 12.50, date(2024, 1, 1))
    ledger.add_expense("Food", 7.50, date(2024, 1, 2))
    ledger.add_expense("Rent", 500.00, date(2024, 1, 1))
    return ledger
