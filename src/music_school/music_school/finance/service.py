from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional

from ..common.ids import new_id
from ..common.validators import require_int, require_iso_date, require_month, require_non_empty
from ..core.exceptions import NotFoundError
from ..payroll.charts import color_at
from .model import Expense, ExpenseSummary, Sale, SalesSummary
from .repository import ExpenseRepository, SaleRepository

logger = logging.getLogger(__name__)


class ExpenseService:
    """Use case: record school expenses and summarize a month."""

    def __init__(self, expenses: ExpenseRepository):
        self._expenses = expenses

    def monthly_summary(
        self,
        month: str,
        *,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> ExpenseSummary:
        require_month(month)
        term = (search or "").strip().lower()
        rows = [
            e for e in self._expenses.list_all()
            if e.date.startswith(month)
            and term in e.title.lower()
            and (not category or e.category == category)
        ]
        rows.sort(key=lambda e: e.date, reverse=True)

        per_category: dict[str, int] = {}
        for e in rows:
            per_category[e.category] = per_category.get(e.category, 0) + e.amount
        pie = [
            {"name": name, "value": value, "color": color_at(i)}
            for i, (name, value) in enumerate(per_category.items())
        ]
        return ExpenseSummary(expenses=rows, total_amount=sum(e.amount for e in rows), by_category=pie)

    def create(self, *, date: str, title: str, category: str, amount: Any, note: str = "") -> Expense:
        expense = Expense(
            id=new_id("exp"),
            date=require_iso_date(date, "Date"),
            title=require_non_empty(title, "Title"),
            category=require_non_empty(category, "Category"),
            amount=require_int(amount, "Amount", minimum=1),
            note=note or "",
        )
        self._expenses.add(expense)
        logger.info("Recorded expense %s (%s)", expense.id, expense.amount)
        return expense

    def update(self, expense_id: str, **changes: Any) -> Expense:
        expense = self._expenses.get_by_id(expense_id)
        if not expense:
            raise NotFoundError("Expense does not exist")
        if "date" in changes:
            require_iso_date(changes["date"], "Date")
        if "title" in changes:
            changes["title"] = require_non_empty(changes["title"], "Title")
        if "category" in changes:
            changes["category"] = require_non_empty(changes["category"], "Category")
        if "amount" in changes:
            changes["amount"] = require_int(changes["amount"], "Amount", minimum=1)
        allowed = {k: v for k, v in changes.items() if k in {"date", "title", "category", "amount", "note"}}
        updated = replace(expense, **allowed)
        self._expenses.update(updated)
        return updated

    def delete(self, expense_id: str) -> None:
        if not self._expenses.delete(expense_id):
            raise NotFoundError("Expense does not exist")


class SalesService:
    def __init__(self, sales: SaleRepository):
        self._sales = sales

    def monthly_summary(
        self,
        month: str,
        *,
        search: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> SalesSummary:
        require_month(month)
        term = (search or "").strip().lower()
        rows = [
            s for s in self._sales.list_all()
            if s.date.startswith(month)
            and term in s.item_name.lower()
            and (not student_id or s.student_id == student_id)
        ]
        rows.sort(key=lambda s: s.date, reverse=True)
        return SalesSummary(
            sales=rows,
            total_revenue=sum(s.total for s in rows),
            total_quantity=sum(s.quantity for s in rows),
        )

    def create(self, *, date: str, student_id: str, item_name: str, quantity: Any, price: Any) -> Sale:
        quantity = require_int(quantity, "Quantity", minimum=1)
        price = require_int(price, "Unit price", minimum=0)
        sale = Sale(
            id=new_id("sale"),
            date=require_iso_date(date, "Date"),
            student_id=require_non_empty(student_id, "Student"),
            item_name=require_non_empty(item_name, "Item name"),
            quantity=quantity,
            price=price,
            total=quantity * price,
        )
        self._sales.add(sale)
        logger.info("Recorded sale %s: %s x%d", sale.id, sale.item_name, sale.quantity)
        return sale

    def update(self, sale_id: str, **changes: Any) -> Sale:
        sale = self._sales.get_by_id(sale_id)
        if not sale:
            raise NotFoundError("Sale does not exist")
        if "date" in changes:
            require_iso_date(changes["date"], "Date")
        if "item_name" in changes:
            changes["item_name"] = require_non_empty(changes["item_name"], "Item name")
        if "student_id" in changes:
            changes["student_id"] = require_non_empty(changes["student_id"], "Student")
        if "quantity" in changes:
            changes["quantity"] = require_int(changes["quantity"], "Quantity", minimum=1)
        if "price" in changes:
            changes["price"] = require_int(changes["price"], "Unit price", minimum=0)
        allowed = {k: v for k, v in changes.items() if k in {"date", "student_id", "item_name", "quantity", "price"}}
        updated = replace(sale, **allowed)
        updated = replace(updated, total=updated.quantity * updated.price)
        self._sales.update(updated)
        return updated

    def delete(self, sale_id: str) -> None:
        if not self._sales.delete(sale_id):
            raise NotFoundError("Sale does not exist")
