from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from models.category import Category, TransactionKind


@dataclass(frozen=True)
class Transaction:
    id: int
    amount: Decimal
    date: str               # 'YYYY-MM-DD'
    comment: Optional[str] = None


@dataclass(frozen=True)
class CategorySummary:
    category: Category
    category_total: Optional[Decimal]
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NewTransactionDraft:
    kind: TransactionKind
    transaction_date: str   # 'YYYY-MM-DD'
    category_id: Optional[int] = None
    amount: Optional[Decimal] = None
    comment: str = ""
