from dataclasses import dataclass
from enum import Enum


class TransactionKind(str, Enum):
    """Category/transaction type as sent on the wire."""

    INCOMES = "INCOMES"
    EXPENSES = "EXPENSES"

    @property
    def label(self) -> str:
        return "Income" if self is TransactionKind.INCOMES else "Expense"


@dataclass(frozen=True)
class Category:
    id: int
    description: str
    type: TransactionKind
