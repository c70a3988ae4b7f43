from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.validators import to_optional_int
from ..storage.repository import CollectionStore
from .model import Expense, Sale


def expense_from_item(item: dict[str, Any]) -> Expense:
    return Expense(
        id=str(item["id"]),
        date=str(item.get("date") or ""),
        title=str(item.get("title") or ""),
        category=str(item.get("category") or ""),
        amount=to_optional_int(item.get("amount")) or 0,
        note=item.get("note") or "",
    )


def expense_to_item(e: Expense) -> dict[str, Any]:
    return {"id": e.id, "date": e.date, "title": e.title, "category": e.category, "amount": e.amount, "note": e.note}


def sale_from_item(item: dict[str, Any]) -> Sale:
    quantity = to_optional_int(item.get("quantity")) or 0
    price = to_optional_int(item.get("price")) or 0
    total = to_optional_int(item.get("total"))
    return Sale(
        id=str(item["id"]),
        date=str(item.get("date") or ""),
        student_id=str(item.get("studentId") or ""),
        item_name=str(item.get("itemName") or ""),
        quantity=quantity,
        price=price,
        total=total if total is not None else quantity * price,
    )


def sale_to_item(s: Sale) -> dict[str, Any]:
    return {
        "id": s.id,
        "date": s.date,
        "studentId": s.student_id,
        "itemName": s.item_name,
        "quantity": s.quantity,
        "price": s.price,
        "total": s.total,
    }


class ExpenseRepository:
    COLLECTION = "expenses"

    def __init__(self, store: CollectionStore):
        self._store = store

    def list_all(self) -> Sequence[Expense]:
        return [expense_from_item(i) for i in self._store.get(self.COLLECTION)]

    def get_by_id(self, expense_id: str) -> Optional[Expense]:
        for e in self.list_all():
            if e.id == expense_id:
                return e
        return None

    def add(self, expense: Expense) -> None:
        self._store.add(self.COLLECTION, expense_to_item(expense))

    def update(self, expense: Expense) -> bool:
        return self._store.update(self.COLLECTION, expense_to_item(expense))

    def delete(self, expense_id: str) -> bool:
        return self._store.delete(self.COLLECTION, expense_id)


class SaleRepository:
    COLLECTION = "sales"

    def __init__(self, store: CollectionStore):
        self._store = store

    def list_all(self) -> Sequence[Sale]:
        return [sale_from_item(i) for i in self._store.get(self.COLLECTION)]

    def get_by_id(self, sale_id: str) -> Optional[Sale]:
        for s in self.list_all():
            if s.id == sale_id:
                return s
        return None

    def add(self, sale: Sale) -> None:
        self._store.add(self.COLLECTION, sale_to_item(sale))

    def update(self, sale: Sale) -> bool:
        return self._store.update(self.COLLECTION, sale_to_item(sale))

    def delete(self, sale_id: str) -> bool:
        return self._store.delete(self.COLLECTION, sale_id)
