from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Expense:
    id: str
    date: str
    title: str
    category: str
    amount: int
    note: str = ""


@dataclass(frozen=True)
class Sale:
    """Material sold to a student; `total` is always quantity x unit price."""

    id: str
    date: str
    student_id: str
    item_name: str
    quantity: int
    price: int
    total: int


@dataclass(frozen=True)
class ExpenseSummary:
    expenses: list[Expense]
    total_amount: int
    by_category: list[dict]


@dataclass(frozen=True)
class SalesSummary:
    sales: list[Sale]
    total_revenue: int
    total_quantity: int
